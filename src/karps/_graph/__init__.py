"""Graph module providing dependency closure and checkpoint graphs.

This module contains:
- tracked_item_deps: Collapse a dependency graph onto its tracked nodes
- CheckpointGraph[T]: An immutable graph between tracked checkpoints
- topological_sort: Stable ordering of nodes by dependencies
"""

from ._algorithms import topological_sort
from ._checkpoint_graph import CheckpointGraph
from ._closure import tracked_item_deps

__all__ = ["CheckpointGraph", "topological_sort", "tracked_item_deps"]
