"""Immutable snapshots of the results reported by the execution engine."""

from __future__ import annotations

import logging
from enum import StrEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ._result import Done, is_terminal

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from ._path import GlobalPath
    from ._result import ComputationResult

logger = logging.getLogger(__name__)


class UpdatePolicy(StrEnum):
    """How a batch of results is applied over the existing ones."""

    OVERWRITE = auto()  # The latest report always wins
    MONOTONIC = auto()  # A terminal result is never replaced by a non-terminal one


class ResultCache:
    """An immutable mapping from global path to the latest known result.

    ``update`` never modifies the receiver: it returns a new cache, so a
    published snapshot can be read concurrently without locking.

    Example:
        >>> cache = ResultCache().update([(path, Done(42))])
        >>> cache.final_result(path)
        42

    """

    __slots__ = ("_results",)

    def __init__(self, results: Mapping[GlobalPath, ComputationResult] | None = None) -> None:
        self._results: Mapping[GlobalPath, ComputationResult] = MappingProxyType(dict(results or {}))

    def status(self, path: GlobalPath) -> ComputationResult | None:
        """Get the latest result recorded for a path, or None if there is none."""
        return self._results.get(path)

    def final_result(self, path: GlobalPath) -> Any | None:
        """Get the value computed for a path.

        Returns:
            The value if the latest result for the path is ``Done``, None otherwise
            (scheduled, running, failed or never reported).

        """
        match self._results.get(path):
            case Done(value):
                return value
            case _:
                return None

    def update(
        self,
        updates: Iterable[tuple[GlobalPath, ComputationResult]],
        policy: UpdatePolicy = UpdatePolicy.OVERWRITE,
    ) -> ResultCache:
        """Apply a batch of results and return the resulting cache.

        The updates are applied in order, so a later entry for a path wins over
        an earlier one in the same batch.

        Args:
            updates: The ``(path, result)`` pairs to apply.
            policy: With ``UpdatePolicy.MONOTONIC``, updates that would replace a
                terminal result by a non-terminal one are ignored.

        Returns:
            A new cache. The receiver is left untouched.

        """
        results = dict(self._results)
        for path, result in updates:
            previous = results.get(path)
            if (
                policy == UpdatePolicy.MONOTONIC
                and previous is not None
                and is_terminal(previous)
                and not is_terminal(result)
            ):
                logger.warning(f"Ignoring result {result} for {path}: already {previous}")
                continue
            logger.debug(f"New result for {path}: {result}")
            results[path] = result
        return ResultCache(results)

    def results_for(self, paths: Iterable[GlobalPath]) -> list[tuple[GlobalPath, ComputationResult | None]]:
        """Get the latest result for each of the given paths."""
        return [(path, self._results.get(path)) for path in paths]

    def paths(self) -> list[GlobalPath]:
        return list(self._results)

    def items(self) -> list[tuple[GlobalPath, ComputationResult]]:
        return list(self._results.items())

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, path: object) -> bool:
        return path in self._results

    def __iter__(self) -> Iterator[GlobalPath]:
        return iter(self._results)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultCache):
            return NotImplemented
        return dict(self._results) == dict(other._results)

    def __repr__(self) -> str:
        return f"ResultCache({dict(self._results)!r})"
