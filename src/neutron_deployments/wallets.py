"""Wallet providers: where the deployer's signing identity comes from."""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, Optional, Protocol

from cosmpy.aerial.wallet import LocalWallet

from .config import NetworkConfig, WalletConfig
from .constants import EXTENSION_ENTRY_POINT_GROUP
from .exceptions import (
    AuthorizationDeniedError,
    NoAccountError,
    WalletUnavailableError,
)
from .types import WalletIdentity

logger = logging.getLogger(__name__)


class WalletExtension(Protocol):
    """Browser-style wallet extension (Keplr-like API)."""

    def experimental_suggest_chain(self, chain_info: Dict[str, Any]) -> None: ...

    def enable(self, chain_id: str) -> None: ...

    def get_offline_signer(self, chain_id: str) -> Any: ...


class WalletProvider(ABC):
    """Produces a signer bound to a chain and the address of its first account."""

    @abstractmethod
    def obtain(self, chain_id: str) -> WalletIdentity:
        """
        Obtain the signing identity.

        Raises:
            WalletUnavailableError: If no wallet source is configured
            AuthorizationDeniedError: If the wallet refuses access
            NoAccountError: If the signer has no accounts
        """


def verify_address(derived: str, expected: Optional[str]) -> bool:
    """
    Compare a derived address against the configured one.

    A mismatch is logged, never raised; the derived address stays in use.

    Returns:
        True if addresses match or nothing was expected
    """
    if not expected or derived == expected:
        return True

    logger.warning(
        "Derived address %s does not match configured address %s; using derived address",
        derived,
        expected,
    )
    return False


class MnemonicWalletProvider(WalletProvider):
    """Wallet derived from a locally held mnemonic phrase."""

    def __init__(
        self,
        mnemonic: Optional[str],
        prefix: str,
        expected_address: Optional[str] = None,
        wallet_factory: Callable[..., Any] = LocalWallet.from_mnemonic,
    ):
        self._mnemonic = mnemonic
        self._prefix = prefix
        self._expected_address = expected_address
        self._wallet_factory = wallet_factory

    def obtain(self, chain_id: str) -> WalletIdentity:
        if not self._mnemonic or not self._mnemonic.strip():
            raise WalletUnavailableError("No mnemonic configured for local wallet")

        try:
            wallet = self._wallet_factory(self._mnemonic.strip(), prefix=self._prefix)
        except Exception as e:
            raise WalletUnavailableError(f"Failed to derive wallet from mnemonic: {e}") from e

        address = str(wallet.address())
        if not address:
            raise NoAccountError("Derived wallet has no address")

        verify_address(address, self._expected_address)
        logger.info("Using local wallet %s on %s", address, chain_id)
        return WalletIdentity(address=address, signer=wallet)


def _account_address(account: Any) -> Optional[str]:
    if isinstance(account, dict):
        return account.get("address")
    return getattr(account, "address", None)


class ExtensionWalletProvider(WalletProvider):
    """Wallet held by a wallet extension that must approve access."""

    def __init__(self, extension: Optional[WalletExtension], chain_info: Optional[Dict[str, Any]] = None):
        """
        Args:
            extension: Extension object, None if not installed
            chain_info: Chain description to suggest before enabling
        """
        self._extension = extension
        self._chain_info = chain_info

    def obtain(self, chain_id: str) -> WalletIdentity:
        if self._extension is None:
            raise WalletUnavailableError("Keplr extension not found. Please install Keplr wallet.")

        if self._chain_info is not None:
            try:
                self._extension.experimental_suggest_chain(self._chain_info)
            except Exception as e:
                logger.warning("Chain suggestion error: %s", e)

        try:
            self._extension.enable(chain_id)
        except Exception as e:
            raise AuthorizationDeniedError(f"Keplr enable failed: {e}") from e

        signer = self._extension.get_offline_signer(chain_id)
        accounts = signer.get_accounts()
        if not accounts:
            raise NoAccountError("No accounts found in Keplr wallet!")

        address = _account_address(accounts[0])
        if not address:
            raise NoAccountError("Account address is undefined!")

        logger.info("Connected to Keplr: %s", address)
        return WalletIdentity(address=address, signer=signer)


def discover_extension(name: str) -> Optional[WalletExtension]:
    """
    Load a wallet extension registered under the extensions entry-point group.

    Args:
        name: Entry point name

    Returns:
        Extension instance, or None if nothing is registered under that name
    """
    for entry_point in entry_points(group=EXTENSION_ENTRY_POINT_GROUP):
        if entry_point.name == name:
            factory = entry_point.load()
            return factory()
    return None


def make_wallet_provider(
    kind: str,
    network: NetworkConfig,
    wallet_config: Optional[WalletConfig] = None,
    extension: Optional[WalletExtension] = None,
) -> WalletProvider:
    """
    Select a wallet provider variant.

    Args:
        kind: "mnemonic" or "extension"
        network: Target network (bech32 prefix, chain suggestion)
        wallet_config: Local wallet credentials (mnemonic variant)
        extension: Installed extension (extension variant)

    Raises:
        ValueError: If kind is unknown
    """
    match kind:
        case "mnemonic":
            return MnemonicWalletProvider(
                wallet_config.mnemonic if wallet_config else None,
                prefix=network.bech32_prefix,
                expected_address=wallet_config.address if wallet_config else None,
            )
        case "extension":
            return ExtensionWalletProvider(extension, chain_info=network.chain_info())
        case _:
            raise ValueError(f"Unknown wallet kind: {kind}")
