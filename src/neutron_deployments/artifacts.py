"""Contract artifact loaders."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Union

import click
import typer

from .config import ArtifactSource
from .constants import WASM_EXTENSION
from .exceptions import (
    ArtifactNotFoundError,
    EmptyArtifactError,
    InvalidArtifactTypeError,
    SelectionCancelledError,
)
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def read_artifact(path: Union[Path, str]) -> ContractArtifact:
    """
    Read contract bytecode from disk.

    Raises:
        ArtifactNotFoundError: If the file is missing or unreadable
        EmptyArtifactError: If the file is empty
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ArtifactNotFoundError(f"Failed to read WASM file: {e}") from e

    if not data:
        raise EmptyArtifactError(f"File is empty: {path}")

    logger.info("Loaded WASM file %s: %d bytes", path.name, len(data))
    return ContractArtifact(data=data, name=path.name)


class ArtifactLoader(ABC):
    """Produces the contract bytecode to upload."""

    @abstractmethod
    def load(self) -> ContractArtifact:
        """
        Load the artifact.

        Raises:
            ArtifactError: Subclass describing why the artifact is unusable
        """


class PathArtifactLoader(ArtifactLoader):
    """Reads a fixed path."""

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)

    def load(self) -> ContractArtifact:
        return read_artifact(self.path)


class InteractiveArtifactLoader(ArtifactLoader):
    """Asks the user which file to upload."""

    def __init__(
        self,
        prompt: Callable[..., str] = typer.prompt,
        extension: str = WASM_EXTENSION,
    ):
        self._prompt = prompt
        self._extension = extension

    def load(self) -> ContractArtifact:
        try:
            answer = self._prompt(
                f"Select your {self._extension} file", default="", show_default=False
            )
        except (click.exceptions.Abort, EOFError, KeyboardInterrupt) as e:
            raise SelectionCancelledError("File selection cancelled") from e

        answer = answer.strip() if answer else ""
        if not answer:
            raise SelectionCancelledError("File selection cancelled")

        path = Path(answer).expanduser()
        if not path.name.endswith(self._extension):
            raise InvalidArtifactTypeError(f"Please select a {self._extension} file")

        return read_artifact(path)


def make_artifact_loader(source: ArtifactSource) -> ArtifactLoader:
    """
    Select an artifact loader variant.

    Raises:
        ValueError: If source kind is unknown
    """
    match source.kind:
        case "path":
            return PathArtifactLoader(source.path)
        case "interactive":
            return InteractiveArtifactLoader()
        case _:
            raise ValueError(f"Unknown artifact source: {source.kind}")
