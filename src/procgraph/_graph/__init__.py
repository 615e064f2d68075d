"""Graph package: module graph and dependency graph abstractions.

This package contains:
- Graph: the mutable module graph built by an editor, validated, then evaluated
- DependencyGraph[T]: a generic, immutable snapshot of "depends on" edges
- depth_first_order: cycle-checking topological sort
"""

from ._algorithms import chain_depths, depth_first_order
from ._dependency_graph import DependencyGraph
from ._module_graph import Graph, Link, ValidationReport

__all__ = ["DependencyGraph", "Graph", "Link", "ValidationReport", "chain_depths", "depth_first_order"]
