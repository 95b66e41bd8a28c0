"""Path management utilities for neutron-deployments library."""

from pathlib import Path
from typing import Optional, Union


def get_default_storage_dir() -> Path:
    """
    Get default local storage directory.

    Returns:
        Path to ./.neutron-deployments
    """
    return Path.cwd() / ".neutron-deployments"


def get_storage_path(storage_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get local storage file path.

    Args:
        storage_root: Custom storage directory (defaults to ./.neutron-deployments)

    Returns:
        Absolute path to local_storage.json
    """
    if storage_root is None:
        storage_root = get_default_storage_dir()
    else:
        storage_root = Path(storage_root).absolute()

    return storage_root / "local_storage.json"


def get_deployment_path(network: str, output_dir: Optional[Union[Path, str]] = None) -> Path:
    """
    Get deployment record file path for a network.

    Args:
        network: Network name (e.g. "neutron-testnet")
        output_dir: Directory for the file (defaults to current directory)

    Returns:
        Absolute path to deployment-<network>.json
    """
    directory = Path.cwd() if output_dir is None else Path(output_dir).absolute()
    return directory / f"deployment-{network}.json"
