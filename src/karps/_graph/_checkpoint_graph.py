"""Graph of tracked checkpoints and the order in which they may be requested."""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field

from ._algorithms import topological_sort


@dataclass(frozen=True, slots=True)
class CheckpointGraph[T]:
    """A directed acyclic graph between tracked checkpoints.

    This is a pure, immutable data structure built from the output of
    ``tracked_item_deps``: every node is a tracked checkpoint and every edge
    points from a checkpoint to one that must be known before it is
    logically ready.

    - predecessors[b] = (a,) means "b depends on a"
    - successors[a] = (b,) means "a is depended on by b"

    Insertion order of the nodes is preserved, so queries are deterministic.

    Attributes:
        _predecessors: Mapping from checkpoint to its direct dependencies.
        _successors: Mapping from checkpoint to the checkpoints that depend on it.

    """

    _predecessors: dict[T, tuple[T, ...]] = field(default_factory=dict)
    _successors: dict[T, tuple[T, ...]] = field(default_factory=dict)

    @classmethod
    def from_dependencies(cls, dependencies: Mapping[T, Sequence[T]]) -> CheckpointGraph[T]:
        """Build a graph from a mapping of checkpoint to its dependencies.

        Dependencies that are not themselves keys of the mapping are added as
        nodes without dependencies.

        Example:
            >>> graph = CheckpointGraph.from_dependencies({"a": [], "c": ["a"]})
            >>> graph.successors("a")
            ('c',)

        """
        predecessors: dict[T, tuple[T, ...]] = {}
        successors: dict[T, list[T]] = {}

        for node, deps in dependencies.items():
            predecessors[node] = tuple(dict.fromkeys(deps))
            successors.setdefault(node, [])
            for dep in predecessors[node]:
                predecessors.setdefault(dep, ())
                successors.setdefault(dep, []).append(node)

        return cls(
            _predecessors=predecessors,
            _successors={k: tuple(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> tuple[T, ...]:
        """All checkpoints, in insertion order."""
        return tuple(self._predecessors)

    def predecessors(self, node: T) -> tuple[T, ...]:
        """Get the checkpoints a checkpoint directly depends on."""
        return self._predecessors.get(node, ())

    def successors(self, node: T) -> tuple[T, ...]:
        """Get the checkpoints that directly depend on a checkpoint."""
        return self._successors.get(node, ())

    def roots(self) -> tuple[T, ...]:
        """Get the checkpoints with no dependencies."""
        return tuple(n for n in self._predecessors if not self._predecessors[n])

    def leaves(self) -> tuple[T, ...]:
        """Get the checkpoints nothing depends on."""
        return tuple(n for n in self._predecessors if not self._successors.get(n))

    def ancestors(self, node: T) -> frozenset[T]:
        """Get all checkpoints that a checkpoint transitively depends on."""
        visited: set[T] = set()
        stack = list(self.predecessors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def descendants(self, node: T) -> frozenset[T]:
        """Get all checkpoints that transitively depend on a checkpoint."""
        visited: set[T] = set()
        stack = list(self.successors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def topological_order(self) -> list[T]:
        """Return the checkpoints in an order in which they may be requested.

        Raises:
            ValueError: If the graph contains a cycle.

        """
        return topological_sort(self._predecessors)

    def ready(self, completed: Collection[T]) -> tuple[T, ...]:
        """Get the checkpoints that are not completed but whose dependencies all are.

        Args:
            completed: Checkpoints whose results are known.

        Returns:
            The checkpoints that may be requested next, in insertion order.

        """
        done = frozenset(completed)
        return tuple(
            n
            for n, deps in self._predecessors.items()
            if n not in done and all(dep in done for dep in deps)
        )

    def __len__(self) -> int:
        """Return the number of checkpoints in the graph."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a checkpoint is in the graph."""
        return node in self._predecessors
