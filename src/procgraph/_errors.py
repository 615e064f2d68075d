"""Exceptions raised while building or addressing a module graph.

Evaluation itself never raises for ordinary inputs; everything here is
reported to whoever tried to mutate or query the graph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._enums import PortKind


class GraphError(Exception):
    """Base class for graph construction and addressing errors."""


class CycleDetectedError(GraphError):
    """A module's inputs transitively depend on its own output."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        msg = f"Cycle detected: {' -> '.join(self.chain)}"
        super().__init__(msg)


class DuplicateBindingError(GraphError):
    """An input port that already has a link was bound a second time."""

    def __init__(self, module_id: str, port_index: int) -> None:
        self.module_id = module_id
        self.port_index = port_index
        msg = f"Input {port_index} of module '{module_id}' is already bound"
        super().__init__(msg)


class PortKindMismatchError(GraphError):
    """A source output cannot feed a destination of the given kind."""

    def __init__(self, source_kind: PortKind, target_kind: PortKind, detail: str = "") -> None:
        self.source_kind = source_kind
        self.target_kind = target_kind
        msg = f"Cannot connect a {source_kind} output to a {target_kind} input"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class DuplicateModuleError(GraphError):
    """A module with the same id is already part of the graph."""


class UnknownModuleError(GraphError, KeyError):
    """No module with the requested id (or type name) exists."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class PortIndexError(GraphError, IndexError):
    """A port index is outside the module's declared ports."""
