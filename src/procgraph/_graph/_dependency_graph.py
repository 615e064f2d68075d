"""Generic dependency graph abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from procgraph._errors import CycleDetectedError

from ._algorithms import chain_depths, depth_first_order

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable

T = TypeVar("T", bound="Hashable")


@dataclass(frozen=True, slots=True)
class DependencyGraph(Generic[T]):
    """A directed graph of "depends on" relationships.

    This is an immutable snapshot with query methods. It is generic over the
    node type; the module graph uses module ids.

    Dependencies are kept as tuples in the order they were first added, so
    traversals (and the cycle chains they report) are reproducible.

    - predecessors[b] = (a,) means "b depends on a"
    - successors[a] = (b,) means "a is depended on by b"

    Attributes:
        _predecessors: Mapping from node to its direct dependencies.
        _successors: Mapping from node to nodes that depend on it.

    """

    _predecessors: dict[T, tuple[T, ...]] = field(default_factory=dict)
    _successors: dict[T, tuple[T, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (source, target) edges.

        An edge (a, b) means "b depends on a". ``nodes`` adds nodes that may
        have no edges at all.

        Example:
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.predecessors("b")
            ('a',)

        """
        predecessors: dict[T, dict[T, None]] = {node: {} for node in nodes}
        successors: dict[T, dict[T, None]] = {node: {} for node in predecessors}

        for src, dst in edges:
            predecessors.setdefault(dst, {})[src] = None
            successors.setdefault(src, {})[dst] = None
            predecessors.setdefault(src, {})
            successors.setdefault(dst, {})

        return cls(
            _predecessors={k: tuple(v) for k, v in predecessors.items()},
            _successors={k: tuple(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._predecessors)

    def predecessors(self, node: T) -> tuple[T, ...]:
        """Direct dependencies of a node."""
        return self._predecessors.get(node, ())

    def successors(self, node: T) -> tuple[T, ...]:
        """Nodes that directly depend on a node."""
        return self._successors.get(node, ())

    def roots(self) -> frozenset[T]:
        """Nodes with no dependencies (leaf modules of the evaluation)."""
        return frozenset(n for n, deps in self._predecessors.items() if not deps)

    def leaves(self) -> frozenset[T]:
        """Nodes that nothing depends on (graph outputs)."""
        return frozenset(n for n, deps in self._successors.items() if not deps)

    def ancestors(self, node: T) -> frozenset[T]:
        """All transitive dependencies of a node."""
        visited: set[T] = set()
        stack = list(self.predecessors(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def topological_order(self) -> list[T]:
        """Return nodes with every dependency before its dependents.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return depth_first_order(self._predecessors)

    def find_cycle(self) -> tuple[str, ...] | None:
        """Return the chain of one cycle, or None if the graph is acyclic."""
        try:
            self.topological_order()
        except CycleDetectedError as e:
            return e.chain
        return None

    def depths(self) -> dict[T, int]:
        """Longest dependency chain ending at each node.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return chain_depths(self.topological_order(), self._predecessors)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors
