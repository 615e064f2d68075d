"""The mutable module graph: ownership, links and validation."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from procgraph._errors import (
    DuplicateBindingError,
    DuplicateModuleError,
    PortIndexError,
    PortKindMismatchError,
    UnknownModuleError,
)
from procgraph._module import Binding, Module

from ._dependency_graph import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Rough number of interpreter frames one level of pull evaluation uses.
_FRAMES_PER_LEVEL = 4


@dataclass(frozen=True, slots=True)
class Link:
    """A connection from an output port to an input port."""

    source_id: str
    source_port: int
    target_id: str
    target_port: int


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of a successful validation.

    Attributes:
        order: Module ids with every module after the modules it reads from.
        max_depth: Length of the longest dependency chain, in modules.

    """

    order: tuple[str, ...]
    max_depth: int

    @property
    def recursion_depth_hint(self) -> int:
        """Approximate interpreter stack depth a full evaluation needs."""
        return self.max_depth * _FRAMES_PER_LEVEL


ModuleRef: TypeAlias = "Module | str"

M = TypeVar("M", bound=Module)


class Graph:
    """A set of modules and the links between their ports.

    The graph is built single-threaded, then evaluated read-only from any
    number of threads. Every mutation drops the cached validation report, so
    the next evaluation re-checks the topology.

    Example:
        >>> from procgraph import create_module
        >>> graph = Graph()
        >>> x = graph.add_module(create_module("CoordinateModule", "x"))
        >>> out = graph.add_module(create_module("ScalarOutputModule", "out"))
        >>> graph.bind_input(out, 0, x, 0)
        >>> graph.validate().order
        ('x', 'out')

    """

    def __init__(self, name: str = "graph") -> None:
        self.name = name
        self._modules: dict[str, Module] = {}
        self._lock = threading.Lock()
        self._report: ValidationReport | None = None

    def __repr__(self) -> str:
        return f"Graph({self.name!r}, modules={len(self._modules)})"

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    @property
    def modules(self) -> Mapping[str, Module]:
        """Read-only view of the modules keyed by id."""
        return MappingProxyType(self._modules)

    def module(self, module_id: str) -> Module:
        try:
            return self._modules[module_id]
        except KeyError:
            msg = f"Module '{module_id}' not found in graph '{self.name}'"
            raise UnknownModuleError(msg) from None

    def _resolve(self, ref: ModuleRef) -> Module:
        if isinstance(ref, Module):
            if self._modules.get(ref.id) is not ref:
                msg = f"Module '{ref.id}' is not part of graph '{self.name}'"
                raise UnknownModuleError(msg)
            return ref
        return self.module(ref)

    def _invalidate(self) -> None:
        with self._lock:
            self._report = None

    # --- construction ---------------------------------------------------

    def add_module(self, module: M) -> M:
        """Add a module and return it.

        Raises:
            DuplicateModuleError: If a module with the same id already exists.

        """
        if module.id in self._modules:
            msg = f"Module '{module.id}' already exists in graph '{self.name}'"
            raise DuplicateModuleError(msg)
        self._modules[module.id] = module
        self._invalidate()
        logger.debug("Added module %s (%s)", module.id, module.type_name())
        return module

    def remove_module(self, module: ModuleRef) -> Module:
        """Remove a module together with every link into or out of it."""
        removed = self._resolve(module)
        del self._modules[removed.id]
        for index in range(len(removed.input_ports)):
            removed._detach(index)  # noqa: SLF001
        for other in self._modules.values():
            for index, binding in enumerate(other.bindings):
                if binding is not None and binding.source is removed:
                    other._detach(index)  # noqa: SLF001
        self._invalidate()
        logger.debug("Removed module %s", removed.id)
        return removed

    def bind_input(self, target: ModuleRef, port: int, source: ModuleRef, source_port: int) -> None:
        """Link output ``source_port`` of ``source`` to input ``port`` of ``target``.

        Raises:
            UnknownModuleError: If either module is not part of this graph.
            PortIndexError: If either port index is out of range.
            PortKindMismatchError: If the output kind cannot feed the input.
            DuplicateBindingError: If the input already has a link. The
                existing link is left in place.

        """
        target_module = self._resolve(target)
        source_module = self._resolve(source)
        if not 0 <= port < len(target_module.input_ports):
            msg = f"Module '{target_module.id}' has no input {port}"
            raise PortIndexError(msg)
        if not 0 <= source_port < len(source_module.output_ports):
            msg = f"Module '{source_module.id}' has no output {source_port}"
            raise PortIndexError(msg)

        output = source_module.output_ports[source_port]
        target_kind = target_module.input_ports[port].kind
        if not target_kind.accepts(output.kind):
            detail = f"{source_module.id}[{source_port}] -> {target_module.id}[{port}]"
            raise PortKindMismatchError(output.kind, target_kind, detail)
        if target_module.is_bound(port):
            raise DuplicateBindingError(target_module.id, port)

        target_module._attach(port, Binding(source_module, source_port, output.kind))  # noqa: SLF001
        self._invalidate()
        logger.debug("Bound %s[%d] -> %s[%d]", source_module.id, source_port, target_module.id, port)

    def unbind_input(self, target: ModuleRef, port: int) -> Link | None:
        """Remove the link feeding an input, returning it if there was one."""
        target_module = self._resolve(target)
        if not 0 <= port < len(target_module.input_ports):
            msg = f"Module '{target_module.id}' has no input {port}"
            raise PortIndexError(msg)
        previous = target_module._detach(port)  # noqa: SLF001
        if previous is None:
            return None
        self._invalidate()
        logger.debug("Unbound %s[%d]", target_module.id, port)
        return Link(previous.source.id, previous.output_index, target_module.id, port)

    def copy(self, name: str | None = None) -> Graph:
        """Return an independent graph with duplicates of every module and link.

        Changes to the copy, including module removal and rebinding, leave this
        graph untouched.
        """
        clone = Graph(self.name if name is None else name)
        for module in self._modules.values():
            clone.add_module(module.duplicate(module.id))
        for link in self.links:
            clone.bind_input(link.target_id, link.target_port, link.source_id, link.source_port)
        logger.debug("Copied graph '%s' to '%s'", self.name, clone.name)
        return clone

    # --- queries --------------------------------------------------------

    @property
    def links(self) -> list[Link]:
        """Every link in the graph, ordered by target module then input."""
        return [
            Link(binding.source.id, binding.output_index, module.id, index)
            for module in self._modules.values()
            for index, binding in enumerate(module.bindings)
            if binding is not None
        ]

    def dependency_graph(self) -> DependencyGraph[str]:
        """Snapshot of which modules read from which."""
        return DependencyGraph.from_edges(
            ((link.source_id, link.target_id) for link in self.links),
            nodes=self._modules,
        )

    def upstream_of(self, module: ModuleRef) -> frozenset[str]:
        """Ids of every module that ``module`` transitively reads from."""
        return self.dependency_graph().ancestors(self._resolve(module).id)

    # --- validation -----------------------------------------------------

    def _build_report(self) -> ValidationReport:
        deps = self.dependency_graph()
        order = deps.topological_order()
        depths = deps.depths()
        report = ValidationReport(order=tuple(order), max_depth=max(depths.values(), default=0))
        limit = sys.getrecursionlimit()
        if report.recursion_depth_hint > limit:
            logger.warning(
                "Graph '%s' has a dependency chain of %d modules; evaluation may exceed the recursion limit (%d)",
                self.name,
                report.max_depth,
                limit,
            )
        logger.debug("Validated graph '%s': %d modules, depth %d", self.name, len(order), report.max_depth)
        return report

    def validate(self) -> ValidationReport:
        """Check the graph for cycles and cache the result.

        Raises:
            CycleDetectedError: If some module transitively reads its own
                output. The error's ``chain`` names the modules on the cycle.

        """
        with self._lock:
            self._report = None
            self._report = self._build_report()
            return self._report

    def ensure_valid(self) -> ValidationReport:
        """Return the cached validation report, validating first if needed."""
        with self._lock:
            if self._report is None:
                self._report = self._build_report()
            return self._report
