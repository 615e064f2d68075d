"""Graph algorithms for dependency graph operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from procgraph._errors import CycleDetectedError

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator, Mapping, Sequence

T = TypeVar("T", bound="Hashable")


def depth_first_order(predecessors: Mapping[T, Sequence[T]]) -> list[T]:
    """Sort a graph topologically (dependencies before dependents).

    Walks the graph depth-first from every node, keeping the nodes on the
    current path in an in-progress set. Reaching a node that is still in
    progress means the path has looped back on itself.

    Args:
        predecessors: Mapping from node to the nodes it depends on. Nodes that
            appear only as dependencies are treated as having none.

    Returns:
        List of nodes in dependency order.

    Raises:
        CycleDetectedError: If the graph contains a cycle. The error's chain
            starts and ends at the same node, each element depending on the
            next.

    Example:
        >>> # c depends on b, b depends on a
        >>> depth_first_order({"c": ["b"], "b": ["a"], "a": []})
        ['a', 'b', 'c']

    """
    done: set[T] = set()
    order: list[T] = []

    for start in predecessors:
        if start in done:
            continue
        # dict keeps the in-progress path in order for error reporting
        in_progress: dict[T, None] = {start: None}
        stack: list[tuple[T, Iterator[T]]] = [(start, iter(predecessors.get(start, ())))]
        while stack:
            node, deps = stack[-1]
            for dep in deps:
                if dep in done:
                    continue
                if dep in in_progress:
                    path = list(in_progress)
                    chain = [*path[path.index(dep) :], dep]
                    raise CycleDetectedError([str(n) for n in chain])
                in_progress[dep] = None
                stack.append((dep, iter(predecessors.get(dep, ()))))
                break
            else:
                stack.pop()
                del in_progress[node]
                done.add(node)
                order.append(node)

    return order


def chain_depths(order: Sequence[T], predecessors: Mapping[T, Sequence[T]]) -> dict[T, int]:
    """Length of the longest dependency chain ending at each node.

    Args:
        order: Nodes in dependency order, as returned by ``depth_first_order``.
        predecessors: Mapping from node to the nodes it depends on.

    Returns:
        Mapping from node to chain length; nodes without dependencies have 1.

    """
    depths: dict[T, int] = {}
    for node in order:
        deps = predecessors.get(node, ())
        depths[node] = 1 + max((depths[d] for d in deps), default=0)
    return depths
