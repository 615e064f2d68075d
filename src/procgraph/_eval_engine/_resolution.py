"""Output resolution utilities for the evaluation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from procgraph._enums import PortKind
from procgraph._errors import PortIndexError, PortKindMismatchError

if TYPE_CHECKING:
    from procgraph._graph import Graph
    from procgraph._module import Module
    from procgraph._ports import Port


def resolve_output(graph: Graph, module_id: str, output_index: int) -> tuple[Module, Port]:
    """Find the module and port an evaluation request refers to.

    Validates the graph first if its topology changed since the last call.

    Args:
        graph: The graph to evaluate.
        module_id: Id of the module whose output is requested.
        output_index: Index of the requested output.

    Returns:
        The module and its output port.

    Raises:
        CycleDetectedError: If the graph contains a cycle.
        UnknownModuleError: If no module has the given id.
        PortIndexError: If the module has no such output.

    """
    graph.ensure_valid()
    module = graph.module(module_id)
    if not 0 <= output_index < len(module.output_ports):
        msg = f"Module '{module_id}' has no output {output_index}"
        raise PortIndexError(msg)
    return module, module.output_ports[output_index]


def require_numeric(module: Module, port: Port) -> None:
    """Reject a scalar request on a color output."""
    if port.kind is PortKind.COLOR:
        detail = f"{module.id}[{port.index}] is a color output"
        raise PortKindMismatchError(port.kind, PortKind.SCALAR, detail)
