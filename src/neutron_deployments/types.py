"""Data types and dataclasses for neutron-deployments library."""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WalletIdentity:
    """Signing identity produced by a wallet provider."""

    address: str  # Bech32 address of the first account, e.g. "neutron1..."
    signer: Any  # Opaque signer handed to the chain client


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract bytecode."""

    data: bytes
    name: str  # File name the bytes were read from

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def checksum(self) -> str:
        """SHA-256 of the bytecode, as reported by the chain after upload."""
        return hashlib.sha256(self.data).hexdigest()


@dataclass(frozen=True)
class Balance:
    """Account balance in a single denomination."""

    amount: int  # In minimal denomination, e.g. untrn
    denom: str


@dataclass(frozen=True)
class UploadResult:
    """Result of a contract code upload transaction."""

    code_id: int
    transaction_hash: str


@dataclass(frozen=True)
class InstantiateResult:
    """Result of a contract instantiation transaction."""

    contract_address: str
    transaction_hash: str


@dataclass(frozen=True)
class DeploymentRecord:
    """Information about a completed deployment."""

    network: str  # e.g. "neutron-testnet"
    code_id: int
    contract_address: str
    deployer: str
    upload_tx_hash: str
    instantiate_tx_hash: str
    deployed_at: str  # ISO-8601, UTC

    def to_file_dict(self, include_timestamp: bool = False) -> Dict[str, Any]:
        """
        Serialize to the deployment file shape.

        Args:
            include_timestamp: Add the deployedAt field

        Returns:
            Dictionary with camelCase keys; transactionHash is the
            instantiate transaction
        """
        result: Dict[str, Any] = {
            "network": self.network,
            "codeId": self.code_id,
            "contractAddress": self.contract_address,
            "deployer": self.deployer,
            "transactionHash": self.instantiate_tx_hash,
        }
        if include_timestamp:
            result["deployedAt"] = self.deployed_at
        return result

    def to_storage_dict(self) -> Dict[str, Any]:
        """Serialize to the local storage shape, with split transaction hashes."""
        return {
            "codeId": self.code_id,
            "contractAddress": self.contract_address,
            "uploadTxHash": self.upload_tx_hash,
            "instantiateTxHash": self.instantiate_tx_hash,
            "deployedAt": self.deployed_at,
            "deployer": self.deployer,
            "network": self.network,
        }
