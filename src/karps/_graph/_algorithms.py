"""Graph algorithms for checkpoint graph operations."""

from collections import deque
from collections.abc import Collection, Hashable, Mapping


def topological_sort[T: Hashable](predecessors: Mapping[T, Collection[T]]) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    The sort is stable: among the nodes that are ready at the same time, the
    ones that appear first in ``predecessors`` come first.

    Args:
        predecessors: Mapping from node to the collection of nodes it depends on.
            Dependencies that are not keys of the mapping are ignored.

    Returns:
        List of nodes in topological order.

    Raises:
        ValueError: If the graph contains a cycle.

    Example:
        >>> topological_sort({"c": ["b"], "b": ["a"], "a": []})
        ['a', 'b', 'c']

    """
    position = {node: i for i, node in enumerate(predecessors)}
    successors: dict[T, list[T]] = {node: [] for node in predecessors}
    indegree: dict[T, int] = dict.fromkeys(predecessors, 0)
    for node, deps in predecessors.items():
        for dep in dict.fromkeys(deps):
            if dep not in position:
                continue
            successors[dep].append(node)
            indegree[node] += 1

    queue = deque(node for node, deg in indegree.items() if deg == 0)
    order: list[T] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in sorted(successors[node], key=position.__getitem__):
            indegree[successor] -= 1
            if indegree[successor] == 0:
                queue.append(successor)

    if len(order) != len(indegree):
        msg = "Cycle detected in graph"
        raise ValueError(msg)

    return order
