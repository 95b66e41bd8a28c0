"""
neutron-deployments: upload and instantiate CosmWasm contracts on Neutron
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeployConfig, NetworkConfig, load_network_config, load_wallet_config
from .deployments import DeploymentOrchestrator, DeploymentOutcome, DeploymentState, deploy
from .exceptions import (
    ArtifactNotFoundError,
    AuthorizationDeniedError,
    DeploymentError,
    EmptyArtifactError,
    InstantiateFailedError,
    InvalidArtifactTypeError,
    MissingContractAddressError,
    NetworkNotFoundError,
    NoAccountError,
    PersistenceFailedError,
    SelectionCancelledError,
    TransportError,
    UploadFailedError,
    WalletUnavailableError,
)
from .types import DeploymentRecord

try:
    __version__ = version("neutron-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "DeploymentOutcome",
    "DeploymentState",
    "deploy",
    "DeployConfig",
    "NetworkConfig",
    "load_network_config",
    "load_wallet_config",
    "DeploymentRecord",
    "DeploymentError",
    "NetworkNotFoundError",
    "WalletUnavailableError",
    "AuthorizationDeniedError",
    "NoAccountError",
    "ArtifactNotFoundError",
    "EmptyArtifactError",
    "InvalidArtifactTypeError",
    "SelectionCancelledError",
    "TransportError",
    "UploadFailedError",
    "InstantiateFailedError",
    "MissingContractAddressError",
    "PersistenceFailedError",
]
