"""Validated, immutable computation graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from types import MappingProxyType
from typing import TYPE_CHECKING

from ._errors import DuplicateItemError, InternalConsistencyError, MissingTerminalLocalError, OutOfTopologicalOrderError
from ._graph import CheckpointGraph, tracked_item_deps
from ._item import ExecutionItem, Locality

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from ._path import ComputationId, GlobalPath

logger = logging.getLogger(__name__)


def _check_topological(items: tuple[ExecutionItem, ...]) -> None:
    """Check that all the items are presented in topological order.

    Raises:
        OutOfTopologicalOrderError: If a dependency has not been seen before the
            item that refers to it.
        DuplicateItemError: If two items share a path.

    """
    seen: set[GlobalPath] = set()
    for item in items:
        for parent in item.dependencies:
            if parent not in seen:
                raise OutOfTopologicalOrderError(item.path, parent, "direct")
        for parent in item.logical_dependencies:
            if parent not in seen:
                raise OutOfTopologicalOrderError(item.path, parent, "logical")
        if item.path in seen:
            raise DuplicateItemError(item.path)
        seen.add(item.path)


@dataclass(frozen=True, eq=False)
class Computation:
    """A unit of computations submitted within a session.

    The items form a DAG and are presented in topological order: the first
    elements are the first to be processed, the last one is the final
    observable. Instances are only built through ``Computation.create``.

    Attributes:
        id: The identifier of the computation.
        items: The validated items, in topological order.

    """

    id: ComputationId
    items: tuple[ExecutionItem, ...]

    @classmethod
    def create(cls, id: ComputationId, items: Iterable[ExecutionItem]) -> Computation:  # noqa: A002
        """Validate a sequence of items and wrap it in a computation.

        Args:
            id: The identifier of the computation.
            items: The items, in topological order, ending with a local item.

        Returns:
            The validated computation.

        Raises:
            OutOfTopologicalOrderError: If an item refers to a path that does not
                appear earlier in the sequence.
            DuplicateItemError: If two items share a path.
            MissingTerminalLocalError: If the sequence is empty or its last item
                is not local.

        """
        items = tuple(items)
        _check_topological(items)
        if not items:
            raise MissingTerminalLocalError(None)
        if items[-1].locality != Locality.LOCAL:
            raise MissingTerminalLocalError(items[-1])

        logger.debug(f"Validated computation {id} with {len(items)} items")
        return cls(id=id, items=items)

    @cached_property
    def tracked_items(self) -> tuple[ExecutionItem, ...]:
        """The local items, whose results are individually tracked."""
        return tuple(item for item in self.items if item.is_tracked)

    @cached_property
    def output(self) -> ExecutionItem:
        """The final observable of the computation."""
        if not self.tracked_items:
            msg = f"computation {self.id}: Could not find a local node in {self.items}"
            raise InternalConsistencyError(msg)
        return self.tracked_items[-1]

    @cached_property
    def tracked_item_dependencies(self) -> Mapping[GlobalPath, tuple[GlobalPath, ...]]:
        """The tracked items each tracked item transitively depends on.

        Untracked items between two tracked ones are inlined away. Both the
        direct and the logical dependencies are followed.
        """
        deps = {item.path: list(item.all_dependencies()) for item in self.items}
        closure = tracked_item_deps(
            [item.path for item in self.tracked_items],
            self.paths,
            deps,
        )
        return MappingProxyType({path: tuple(ancestors) for path, ancestors in closure.items()})

    @cached_property
    def paths(self) -> tuple[GlobalPath, ...]:
        """The paths of all the items, in topological order."""
        return tuple(item.path for item in self.items)

    @cached_property
    def _items_by_path(self) -> dict[GlobalPath, ExecutionItem]:
        return {item.path: item for item in self.items}

    def get_item(self, path: GlobalPath) -> ExecutionItem:
        """Get an item by its path.

        Raises:
            KeyError: If no item exists at the given path.

        """
        return self._items_by_path[path]

    def checkpoint_graph(self) -> CheckpointGraph[GlobalPath]:
        """Build the graph between tracked items."""
        return CheckpointGraph.from_dependencies(self.tracked_item_dependencies)

    def __len__(self) -> int:
        """Return the number of items in the computation."""
        return len(self.items)

    def __iter__(self) -> Iterator[ExecutionItem]:
        return iter(self.items)

    def __contains__(self, path: object) -> bool:
        """Check if an item exists at the given path."""
        return path in self._items_by_path

    def __str__(self) -> str:
        return f"Computation(id={self.id}, items={len(self.items)})"
