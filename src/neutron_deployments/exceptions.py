"""Custom exception classes for neutron-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    kind = "DeploymentError"
    fatal = True


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    kind = "NetworkNotFound"


# Wallet acquisition


class WalletError(DeploymentError):
    """Base exception for wallet acquisition failures."""

    kind = "WalletError"


class WalletUnavailableError(WalletError):
    """Raised when no wallet extension or mnemonic source is configured."""

    kind = "WalletUnavailable"


class AuthorizationDeniedError(WalletError, PermissionError):
    """Raised when the wallet extension refuses the enable request."""

    kind = "AuthorizationDenied"


class NoAccountError(WalletError):
    """Raised when the signer yields no usable account."""

    kind = "NoAccount"


# Artifact loading


class ArtifactError(DeploymentError):
    """Base exception for contract artifact loading failures."""

    kind = "ArtifactError"


class ArtifactNotFoundError(ArtifactError, FileNotFoundError):
    """Raised when the WASM file does not exist or cannot be read."""

    kind = "ArtifactNotFound"


class EmptyArtifactError(ArtifactError, ValueError):
    """Raised when the WASM file has zero length."""

    kind = "EmptyArtifact"


class InvalidArtifactTypeError(ArtifactError, ValueError):
    """Raised when the selected file does not have the expected extension."""

    kind = "InvalidArtifactType"


class SelectionCancelledError(ArtifactError):
    """Raised when the user cancels interactive file selection."""

    kind = "SelectionCancelled"


# Chain interaction


class TransportError(DeploymentError, ConnectionError):
    """Raised for RPC/network failures coming from the chain client."""

    kind = "TransportError"


class UploadFailedError(DeploymentError):
    """Raised when the contract code upload transaction fails."""

    kind = "UploadFailed"


class InstantiateFailedError(DeploymentError):
    """Raised when the contract instantiation transaction fails."""

    kind = "InstantiateFailed"


class MissingContractAddressError(InstantiateFailedError):
    """Raised when instantiation succeeds but returns no contract address."""

    kind = "MissingContractAddress"


# Persistence


class PersistenceFailedError(DeploymentError, OSError):
    """
    Raised when the deployment record cannot be saved.

    Not fatal: the contract already exists on-chain when this is raised.
    """

    kind = "PersistenceFailed"
    fatal = False
