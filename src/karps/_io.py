"""Loading computation descriptions from TOML or JSON files."""

import json
import logging
import tomllib
from pathlib import Path as FilePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ._errors import ComputationFileError
from ._item import ExecutionItem, Locality
from ._path import ComputationId, GlobalPath, Path, SessionId

logger = logging.getLogger(__name__)


class ItemModel(BaseModel):
    """An execution item as written in a computation file.

    Paths are local to the computation described by the file.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    locality: Locality
    dependencies: list[str] = Field(default_factory=list)
    logical_dependencies: list[str] = Field(default_factory=list)


class ComputationFile(BaseModel):
    """A computation as written in a file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    session: str
    computation: str
    items: list[ItemModel]

    @field_validator("session")
    @classmethod
    def _check_session(cls, value: str) -> str:
        SessionId(value)
        return value

    @field_validator("computation")
    @classmethod
    def _check_computation(cls, value: str) -> str:
        ComputationId(value)
        return value

    @property
    def session_id(self) -> SessionId:
        return SessionId(self.session)

    @property
    def computation_id(self) -> ComputationId:
        return ComputationId(self.computation)

    def global_path(self, local: str) -> GlobalPath:
        return GlobalPath(self.session_id, self.computation_id, Path.parse(local))

    def to_items(self) -> list[ExecutionItem]:
        """Resolve the local paths of the file into execution items."""
        return [
            ExecutionItem(
                path=self.global_path(item.path),
                locality=item.locality,
                dependencies=tuple(self.global_path(p) for p in item.dependencies),
                logical_dependencies=tuple(self.global_path(p) for p in item.logical_dependencies),
            )
            for item in self.items
        ]


def _read_data(path: FilePath) -> Any:
    match path.suffix.lower():
        case ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        case ".json":
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        case _:
            msg = f"Unsupported computation file type '{path.suffix}': expected .toml or .json"
            raise ComputationFileError(msg)


def load_computation_file(path: FilePath) -> ComputationFile:
    """Load and validate a computation description.

    Args:
        path: Path to a ``.toml`` or ``.json`` file.

    Returns:
        The validated file contents.

    Raises:
        ComputationFileError: If the file cannot be read or is invalid.

    """
    try:
        data = _read_data(path)
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise ComputationFileError(msg) from e
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid syntax in {path}: {e}"
        raise ComputationFileError(msg) from e

    try:
        computation_file = ComputationFile.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid computation file {path}:\n{e}"
        raise ComputationFileError(msg) from e

    logger.debug(f"Loaded {len(computation_file.items)} items from {path}")
    return computation_file
