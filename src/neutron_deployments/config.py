"""
Configuration for neutron-deployments.

Network parameters come from the static table in constants.py, with a few
environment overrides. Wallet credentials come from a JSON config file
shaped like the contract toolchain's network config:

    {
      "networks": {
        "testnet": {
          "endpoint": "https://rpc-palvus.pion-1.ntrn.tech/",
          "chainId": "pion-1",
          "accounts": [{"name": "account_0", "address": "neutron1...", "mnemonic": "..."}]
        }
      }
    }
"""

import json
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import (
    DEFAULT_LABEL,
    DEFAULT_NETWORK,
    DEFAULT_WASM_PATH,
    GAS_PRICE_ENV,
    INSTANTIATE_MEMO,
    MNEMONIC_ENV,
    NETWORK_CONFIG,
    REST_URL_ENV,
    RPC_URL_ENV,
    UPLOAD_MEMO,
)
from .exceptions import NetworkNotFoundError, WalletUnavailableError

_GAS_PRICE_RE = re.compile(r"^(\d+(?:\.\d+)?)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


@dataclass(frozen=True)
class GasPrice:
    """Price per gas unit, e.g. 0.025untrn."""

    amount: Decimal
    denom: str

    @classmethod
    def from_string(cls, value: str) -> "GasPrice":
        """
        Parse a gas price string of the form "<decimal><denom>".

        Raises:
            ValueError: If the string is not a valid gas price
        """
        match = _GAS_PRICE_RE.match(value.strip())
        if match is None:
            raise ValueError(f"Invalid gas price string: '{value}'")
        return cls(amount=Decimal(match.group(1)), denom=match.group(2))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class NetworkConfig:
    """Fixed parameters of the target chain."""

    name: str
    chain_id: str
    chain_name: str
    rpc_endpoint: str
    rest_endpoint: str
    bech32_prefix: str
    fee_denom: str
    coin_denom: str
    coin_decimals: int
    gas_price: GasPrice
    gas_price_step: Dict[str, float] = field(default_factory=dict)
    coin_type: int = 118
    features: List[str] = field(default_factory=list)
    broadcast_timeout_ms: int = 10000
    broadcast_poll_interval_ms: int = 500

    def bech32_config(self) -> Dict[str, str]:
        prefix = self.bech32_prefix
        return {
            "bech32PrefixAccAddr": prefix,
            "bech32PrefixAccPub": f"{prefix}pub",
            "bech32PrefixValAddr": f"{prefix}valoper",
            "bech32PrefixValPub": f"{prefix}valoperpub",
            "bech32PrefixConsAddr": f"{prefix}valcons",
            "bech32PrefixConsPub": f"{prefix}valconspub",
        }

    def chain_info(self) -> Dict[str, Any]:
        """
        Build the chain description a wallet extension needs to add this chain.

        Returns:
            Chain suggestion payload (camelCase keys)
        """
        currency = {
            "coinDenom": self.coin_denom,
            "coinMinimalDenom": self.fee_denom,
            "coinDecimals": self.coin_decimals,
        }
        fee_currency = dict(currency)
        if self.gas_price_step:
            fee_currency["gasPriceStep"] = dict(self.gas_price_step)

        return {
            "chainId": self.chain_id,
            "chainName": self.chain_name,
            "rpc": self.rpc_endpoint,
            "rest": self.rest_endpoint,
            "bip44": {"coinType": self.coin_type},
            "bech32Config": self.bech32_config(),
            "currencies": [currency],
            "feeCurrencies": [fee_currency],
            "stakeCurrency": dict(currency),
            "features": list(self.features),
        }


@dataclass(frozen=True)
class WalletConfig:
    """Locally held wallet credentials."""

    name: str
    address: str  # Expected address, compared against the derived one
    mnemonic: str
    pubkey: Optional[str] = None  # Public key JSON blob, informational only


@dataclass(frozen=True)
class ArtifactSource:
    """Where the contract bytecode comes from."""

    kind: str = "path"  # "path" or "interactive"
    path: str = DEFAULT_WASM_PATH


@dataclass(frozen=True)
class OutputTarget:
    """Where the deployment record goes."""

    kind: str = "file"  # "file" or "storage"
    output_dir: str = "."
    storage_path: Optional[str] = None  # Defaults to ./.neutron-deployments/local_storage.json
    include_timestamp: bool = False


@dataclass(frozen=True)
class DeployConfig:
    """Everything the deployment workflow needs, fixed at start."""

    network: NetworkConfig
    artifact: ArtifactSource = field(default_factory=ArtifactSource)
    output: OutputTarget = field(default_factory=OutputTarget)
    label: str = DEFAULT_LABEL
    init_msg: Dict[str, Any] = field(default_factory=dict)
    set_admin: bool = True  # Make the deployer the contract admin
    upload_memo: Optional[str] = UPLOAD_MEMO
    instantiate_memo: Optional[str] = INSTANTIATE_MEMO


def load_network_config(name: str = DEFAULT_NETWORK) -> NetworkConfig:
    """
    Build network configuration from the static table and environment.

    Args:
        name: Network name (e.g. "neutron-testnet")

    Returns:
        NetworkConfig

    Raises:
        NetworkNotFoundError: If network is not in NETWORK_CONFIG
        ValueError: If $NEUTRON_GAS_PRICE is malformed
    """
    if name not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Network '{name}' not found. Available: {', '.join(sorted(NETWORK_CONFIG))}"
        )

    entry = NETWORK_CONFIG[name]
    gas_price = os.environ.get(GAS_PRICE_ENV, entry["gas_price"])

    return NetworkConfig(
        name=name,
        chain_id=entry["chain_id"],
        chain_name=entry["chain_name"],
        rpc_endpoint=os.environ.get(RPC_URL_ENV, entry["rpc_endpoint"]),
        rest_endpoint=os.environ.get(REST_URL_ENV, entry["rest_endpoint"]),
        bech32_prefix=entry["bech32_prefix"],
        fee_denom=entry["fee_denom"],
        coin_denom=entry["coin_denom"],
        coin_decimals=entry["coin_decimals"],
        gas_price=GasPrice.from_string(gas_price),
        gas_price_step=dict(entry.get("gas_price_step", {})),
        coin_type=entry.get("coin_type", 118),
        features=list(entry.get("features", [])),
        broadcast_timeout_ms=entry.get("broadcast_timeout_ms", 10000),
        broadcast_poll_interval_ms=entry.get("broadcast_poll_interval_ms", 500),
    )


def _network_aliases(network: str) -> List[str]:
    # "neutron-testnet" is "testnet" in toolchain configs, which also carry "default"
    aliases = [network]
    if "-" in network:
        aliases.append(network.split("-", 1)[1])
    aliases.append("default")
    return aliases


def load_wallet_config(
    config_path: Optional[Union[Path, str]] = None,
    network: str = DEFAULT_NETWORK,
) -> WalletConfig:
    """
    Load wallet credentials for a network.

    The first account of the matching network entry is used. $NEUTRON_MNEMONIC,
    if set, overrides the mnemonic (and is enough on its own when no config
    file is given).

    Args:
        config_path: Path to JSON wallet config
        network: Network name

    Returns:
        WalletConfig

    Raises:
        WalletUnavailableError: If no mnemonic source is available
    """
    env_mnemonic = os.environ.get(MNEMONIC_ENV)

    if config_path is None:
        if env_mnemonic:
            return WalletConfig(name=MNEMONIC_ENV, address="", mnemonic=env_mnemonic)
        raise WalletUnavailableError(
            f"No wallet configured: pass a config file or set ${MNEMONIC_ENV}"
        )

    path = Path(config_path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise WalletUnavailableError(f"Wallet config not found at {path}") from e
    except json.JSONDecodeError as e:
        raise WalletUnavailableError(f"Wallet config at {path} is not valid JSON: {e}") from e

    networks = data.get("networks", {}) if isinstance(data, dict) else None
    if not isinstance(networks, dict):
        raise WalletUnavailableError(f"Wallet config at {path} is malformed")

    network_entry = None
    for alias in _network_aliases(network):
        if alias in networks:
            network_entry = networks[alias]
            break

    if network_entry is None:
        raise WalletUnavailableError(f"No entry for network '{network}' in {path}")
    if not isinstance(network_entry, dict):
        raise WalletUnavailableError(f"Wallet config at {path} is malformed")

    accounts = network_entry.get("accounts") or []
    if not accounts:
        raise WalletUnavailableError(f"No accounts for network '{network}' in {path}")

    account = accounts[0] if isinstance(accounts, list) else None
    if not isinstance(account, dict):
        raise WalletUnavailableError(f"Wallet config at {path} is malformed")

    mnemonic = env_mnemonic or account.get("mnemonic", "")
    if not mnemonic:
        raise WalletUnavailableError(
            f"Account '{account.get('name', '')}' in {path} has no mnemonic"
        )

    pubkey = account.get("pubkey")
    if pubkey is not None and not isinstance(pubkey, str):
        pubkey = json.dumps(pubkey)

    return WalletConfig(
        name=account.get("name", ""),
        address=account.get("address", ""),
        mnemonic=mnemonic,
        pubkey=pubkey,
    )
