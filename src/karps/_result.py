"""The state of a computation on an observable."""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ResultStatus(StrEnum):
    SCHEDULED = auto()
    RUNNING = auto()
    DONE = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class Scheduled:
    @property
    def status(self) -> ResultStatus:
        return ResultStatus.SCHEDULED


@dataclass(frozen=True, slots=True)
class Running:
    @property
    def status(self) -> ResultStatus:
        return ResultStatus.RUNNING


@dataclass(frozen=True, slots=True)
class Done:
    """The item finished and produced ``value``."""

    value: Any

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.DONE


@dataclass(frozen=True, slots=True)
class Failed:
    """The item failed with ``error``."""

    error: Any

    @property
    def status(self) -> ResultStatus:
        return ResultStatus.FAILED


type ComputationResult = Scheduled | Running | Done | Failed


def is_terminal(result: ComputationResult) -> bool:
    """Check if no further transition is expected for a result."""
    match result:
        case Done() | Failed():
            return True
        case Scheduled() | Running():
            return False
        case _:
            msg = f"Unknown result type: {type(result)}"
            raise TypeError(msg)
