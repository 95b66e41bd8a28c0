"""Shared pytest fixtures for neutron-deployments tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from neutron_deployments.config import (
    ArtifactSource,
    DeployConfig,
    NetworkConfig,
    OutputTarget,
    load_network_config,
)
from neutron_deployments.types import Balance, InstantiateResult, UploadResult, WalletIdentity
from neutron_deployments.wallets import WalletProvider

DEPLOYER = "neutron1deployer0000000000000000000000000000"
CONTRACT = "neutron1xyzcontract000000000000000000000000000000000000000000"


class FakeChainClient:
    """ChainClient double that records calls."""

    def __init__(
        self,
        balance: Optional[Balance] = None,
        upload_result: Optional[UploadResult] = None,
        instantiate_result: Optional[InstantiateResult] = None,
        balance_error: Optional[Exception] = None,
        upload_error: Optional[Exception] = None,
        instantiate_error: Optional[Exception] = None,
    ):
        self.balance = balance or Balance(amount=5_000_000, denom="untrn")
        self.upload_result = upload_result or UploadResult(code_id=42, transaction_hash="ABCD")
        self.instantiate_result = instantiate_result or InstantiateResult(
            contract_address=CONTRACT, transaction_hash="EFGH"
        )
        self.balance_error = balance_error
        self.upload_error = upload_error
        self.instantiate_error = instantiate_error

        self.balance_calls: List[Dict[str, Any]] = []
        self.upload_calls: List[Dict[str, Any]] = []
        self.instantiate_calls: List[Dict[str, Any]] = []

    def get_balance(self, address: str, denom: str) -> Balance:
        self.balance_calls.append({"address": address, "denom": denom})
        if self.balance_error is not None:
            raise self.balance_error
        return self.balance

    def upload(self, sender: str, wasm: bytes, memo: Optional[str] = None) -> UploadResult:
        self.upload_calls.append({"sender": sender, "wasm": wasm, "memo": memo})
        if self.upload_error is not None:
            raise self.upload_error
        return self.upload_result

    def instantiate(self, sender, code_id, init_msg, label, admin=None, memo=None) -> InstantiateResult:
        self.instantiate_calls.append(
            {
                "sender": sender,
                "code_id": code_id,
                "init_msg": init_msg,
                "label": label,
                "admin": admin,
                "memo": memo,
            }
        )
        if self.instantiate_error is not None:
            raise self.instantiate_error
        return self.instantiate_result


class FakeWalletProvider(WalletProvider):
    """WalletProvider double returning a fixed identity."""

    def __init__(self, address: str = DEPLOYER, error: Optional[Exception] = None):
        self.address = address
        self.error = error
        self.chain_ids: List[str] = []

    def obtain(self, chain_id: str) -> WalletIdentity:
        self.chain_ids.append(chain_id)
        if self.error is not None:
            raise self.error
        return WalletIdentity(address=self.address, signer=object())


class FakeAccount:
    def __init__(self, address: str):
        self.address = address


class FakeSigner:
    def __init__(self, accounts: List[Any]):
        self._accounts = accounts

    def get_accounts(self) -> List[Any]:
        return self._accounts


class FakeExtension:
    """Keplr-like extension double."""

    def __init__(
        self,
        accounts: Optional[List[Any]] = None,
        enable_error: Optional[Exception] = None,
        suggest_error: Optional[Exception] = None,
    ):
        self.accounts = [FakeAccount(DEPLOYER)] if accounts is None else accounts
        self.enable_error = enable_error
        self.suggest_error = suggest_error
        self.suggested: List[Dict[str, Any]] = []
        self.enabled: List[str] = []

    def experimental_suggest_chain(self, chain_info: Dict[str, Any]) -> None:
        self.suggested.append(chain_info)
        if self.suggest_error is not None:
            raise self.suggest_error

    def enable(self, chain_id: str) -> None:
        if self.enable_error is not None:
            raise self.enable_error
        self.enabled.append(chain_id)

    def get_offline_signer(self, chain_id: str) -> FakeSigner:
        return FakeSigner(self.accounts)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in ["NEUTRON_RPC_URL", "NEUTRON_REST_URL", "NEUTRON_GAS_PRICE", "NEUTRON_MNEMONIC"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def network_config() -> NetworkConfig:
    """Return the Neutron testnet configuration."""
    return load_network_config("neutron-testnet")


@pytest.fixture
def wasm_file(tmp_path: Path) -> Path:
    """Create a 120-byte contract artifact."""
    path = tmp_path / "artifacts" / "contract.wasm"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\x00asm\x01\x00\x00\x00" + bytes(range(112)))
    return path


@pytest.fixture
def deploy_config(network_config: NetworkConfig, wasm_file: Path, tmp_path: Path) -> DeployConfig:
    """Deployment configuration reading wasm_file and writing into tmp_path."""
    return DeployConfig(
        network=network_config,
        artifact=ArtifactSource(kind="path", path=str(wasm_file)),
        output=OutputTarget(kind="file", output_dir=str(tmp_path)),
    )


@pytest.fixture
def chain_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def wallet_provider() -> FakeWalletProvider:
    return FakeWalletProvider()


@pytest.fixture
def make_chain_client():
    """Return the FakeChainClient class for tests that configure failures."""
    return FakeChainClient


@pytest.fixture
def make_wallet_provider():
    return FakeWalletProvider


@pytest.fixture
def make_extension():
    return FakeExtension


@pytest.fixture
def deployer_address() -> str:
    return DEPLOYER


@pytest.fixture
def contract_address() -> str:
    return CONTRACT
