"""Deployment record persistence."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import OutputTarget
from .constants import STORAGE_KEY
from .exceptions import PersistenceFailedError
from .paths import get_deployment_path, get_storage_path
from .types import DeploymentRecord

logger = logging.getLogger(__name__)


class ResultSink(ABC):
    """Persists a deployment record."""

    @abstractmethod
    def save(self, record: DeploymentRecord) -> None:
        """
        Save the record.

        Raises:
            PersistenceFailedError: If the record could not be written
        """


class FileResultSink(ResultSink):
    """Writes deployment-<network>.json."""

    def __init__(self, output_dir: Optional[Union[Path, str]] = None, include_timestamp: bool = False):
        self._output_dir = output_dir
        self._include_timestamp = include_timestamp
        self.last_path: Optional[Path] = None

    def save(self, record: DeploymentRecord) -> None:
        path = get_deployment_path(record.network, self._output_dir)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(record.to_file_dict(self._include_timestamp), f, indent=2)
        except (OSError, TypeError) as e:
            raise PersistenceFailedError(f"Failed to write deployment file {path}: {e}") from e

        self.last_path = path
        logger.info("Deployment info saved to: %s", path)


def _load_store(storage_path: Path) -> Dict[str, str]:
    # Missing or corrupted store starts empty
    try:
        with open(storage_path, encoding="utf-8") as f:
            store = json.load(f)
    except (FileNotFoundError, ValueError):
        return {}
    return store if isinstance(store, dict) else {}


class LocalStorageSink(ResultSink):
    """
    Key-value store on disk standing in for browser localStorage.

    The file holds a JSON object; each value is a JSON-encoded string, as
    localStorage only stores strings.
    """

    def __init__(self, storage_path: Optional[Union[Path, str]] = None, key: str = STORAGE_KEY):
        self.storage_path = Path(storage_path) if storage_path else get_storage_path()
        self.key = key

    def save(self, record: DeploymentRecord) -> None:
        try:
            store = _load_store(self.storage_path)
            store[self.key] = json.dumps(record.to_storage_dict(), indent=2)
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.storage_path, "w", encoding="utf-8") as f:
                json.dump(store, f, indent=2)
        except (OSError, TypeError) as e:
            raise PersistenceFailedError(
                f"Failed to save deployment to storage {self.storage_path}: {e}"
            ) from e

        logger.info("Deployment info saved to storage key '%s'", self.key)

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Read the stored record back.

        Returns:
            Storage-shaped record dict, or None if nothing is stored
        """
        value = _load_store(self.storage_path).get(self.key)
        if not value or not isinstance(value, str):
            return None
        try:
            record = json.loads(value)
        except ValueError:
            logger.warning("Ignoring unreadable value under storage key '%s'", self.key)
            return None
        return record if isinstance(record, dict) else None


def load_deployment_record(path: Union[Path, str]) -> Dict[str, Any]:
    """
    Read a deployment file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def make_sink(target: OutputTarget) -> ResultSink:
    """
    Select a result sink variant.

    Raises:
        ValueError: If target kind is unknown
    """
    match target.kind:
        case "file":
            return FileResultSink(target.output_dir, include_timestamp=target.include_timestamp)
        case "storage":
            return LocalStorageSink(target.storage_path)
        case _:
            raise ValueError(f"Unknown output target: {target.kind}")
