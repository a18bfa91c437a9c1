"""Dependency closure over tracked items."""

from collections.abc import Hashable, Mapping, Sequence


def tracked_item_deps[T: Hashable](
    tracked: Sequence[T],
    all_nodes: Sequence[T],
    deps: Mapping[T, Sequence[T]],
) -> dict[T, list[T]]:
    """Collapse a dependency graph onto its tracked nodes.

    For every tracked node, compute the tracked nodes it transitively depends
    on, with any chain of untracked nodes inlined away. This is a single
    forward pass, linear in the number of nodes and edges.

    Args:
        tracked: The tracked nodes.
        all_nodes: All the nodes, in topological order (dependencies first).
        deps: Mapping from node to its direct dependencies. Nodes missing
            from the mapping have no dependencies.

    Returns:
        Mapping from each tracked node to its tracked dependencies, without
        duplicates, in order of first occurrence.

    Example:
        >>> # a (tracked) <- b (untracked) <- c (tracked)
        >>> tracked_item_deps(["a", "c"], ["a", "b", "c"], {"b": ["a"], "c": ["b"]})
        {'a': [], 'c': ['a']}

    """
    target = frozenset(tracked)
    # Closures of untracked nodes, in terms of tracked nodes
    intermediate: dict[T, list[T]] = {}
    result: dict[T, list[T]] = {}

    for node in all_nodes:
        node_deps = deps.get(node, ())
        # Tracked dependencies are kept as they are
        in_target = [dep for dep in node_deps if dep in target]
        # Untracked ones are replaced by their closure, which the topological
        # order guarantees is already computed
        out_target = [
            ancestor
            for dep in node_deps
            if dep not in target
            for ancestor in intermediate.get(dep, ())
        ]

        closure = list(dict.fromkeys(in_target + out_target))
        if node in target:
            result[node] = closure
        else:
            intermediate[node] = closure

    return result
