"""Exceptions raised by karps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ._item import ExecutionItem
    from ._path import ComputationId, GlobalPath, SessionId


class KarpsError(Exception):
    """Base class for all karps errors."""


class ComputationError(KarpsError):
    """A submitted computation was rejected as a whole."""


class OutOfTopologicalOrderError(ComputationError):
    """Raised when a dependency refers to a path not seen earlier in the submission."""

    def __init__(self, item: GlobalPath, missing: GlobalPath, kind: Literal["direct", "logical"]) -> None:
        self.item = item
        self.missing = missing
        self.kind = kind
        super().__init__(
            f"Element out of topological order: {kind} dependency {missing} expected before {item}",
        )


class MissingTerminalLocalError(ComputationError):
    """Raised when the last item of a computation is not a local (observable) node."""

    def __init__(self, last: ExecutionItem | None) -> None:
        self.last = last
        if last is None:
            super().__init__("Computation has no items; expected a final local item")
        else:
            super().__init__(
                f"The last item of a computation must be local, got {last.locality} item {last.path}",
            )


class DuplicateItemError(ComputationError):
    """Raised when two items of a computation share the same path."""

    def __init__(self, path: GlobalPath) -> None:
        self.path = path
        super().__init__(f"Duplicate item path in computation: {path}")


class InternalConsistencyError(KarpsError):
    """Raised for states that construction should have ruled out."""


class UnknownSessionError(KarpsError):
    """Raised when a computation is submitted to a session that was never created."""

    def __init__(self, session: SessionId) -> None:
        self.session = session
        super().__init__(f"Unknown session: {session}")


class DuplicateComputationError(KarpsError):
    """Raised when a computation id is reused within a session."""

    def __init__(self, session: SessionId, computation: ComputationId) -> None:
        self.session = session
        self.computation = computation
        super().__init__(f"Computation {computation} already exists in session {session}")


class ConfigError(KarpsError):
    """Error in karps configuration."""


class ComputationFileError(KarpsError):
    """Error reading or validating a computation description file."""
