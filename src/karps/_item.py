"""Execution items: the nodes of a computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._path import GlobalPath


class Locality(StrEnum):
    """Where the result of an item lives."""

    LOCAL = auto()  # Observable: tracked and exposed to callers
    DISTRIBUTED = auto()  # Internal to the execution engine


@dataclass(frozen=True, slots=True)
class ExecutionItem:
    """A unit of work run by the execution engine.

    Attributes:
        path: The global path identifying this item.
        locality: Whether the item is observable (LOCAL) or engine-internal.
        dependencies: Paths of the items whose data this item consumes.
        logical_dependencies: Paths of the items that must run before this one,
            without any data flowing between them.

    """

    path: GlobalPath
    locality: Locality
    dependencies: tuple[GlobalPath, ...] = field(default=())
    logical_dependencies: tuple[GlobalPath, ...] = field(default=())

    @property
    def is_tracked(self) -> bool:
        """Check if this item is observable and therefore tracked."""
        return self.locality == Locality.LOCAL

    def all_dependencies(self) -> Iterator[GlobalPath]:
        """Iterate over the logical dependencies followed by the direct ones."""
        yield from self.logical_dependencies
        yield from self.dependencies
