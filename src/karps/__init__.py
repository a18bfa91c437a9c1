"""Tracking the observable results of distributed computations."""

__all__ = [
    "CheckpointGraph",
    "Computation",
    "ComputationError",
    "ComputationFile",
    "ComputationId",
    "ComputationManager",
    "ComputationResult",
    "ConfigError",
    "Done",
    "DuplicateComputationError",
    "DuplicateItemError",
    "ExecutionItem",
    "Failed",
    "GlobalPath",
    "InternalConsistencyError",
    "KarpsConfig",
    "KarpsError",
    "Locality",
    "MissingTerminalLocalError",
    "OutOfTopologicalOrderError",
    "Path",
    "ResultCache",
    "ResultStatus",
    "Running",
    "Scheduled",
    "SessionId",
    "UnknownSessionError",
    "UpdatePolicy",
    "get_config",
    "is_terminal",
    "load_computation_file",
    "parse_global_path",
    "tracked_item_deps",
]

from ._cache import ResultCache, UpdatePolicy
from ._computation import Computation
from ._config import KarpsConfig, get_config
from ._errors import (
    ComputationError,
    ConfigError,
    DuplicateComputationError,
    DuplicateItemError,
    InternalConsistencyError,
    KarpsError,
    MissingTerminalLocalError,
    OutOfTopologicalOrderError,
    UnknownSessionError,
)
from ._graph import CheckpointGraph, tracked_item_deps
from ._io import ComputationFile, load_computation_file
from ._item import ExecutionItem, Locality
from ._manager import ComputationManager
from ._path import ComputationId, GlobalPath, Path, SessionId, parse_global_path
from ._result import ComputationResult, Done, Failed, ResultStatus, Running, Scheduled, is_terminal
