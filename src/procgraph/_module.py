"""Base class shared by every module in the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ._color import RGBColor
from ._enums import ModuleCategory, PortKind

if TYPE_CHECKING:
    from ._context import EvaluationContext
    from ._ports import Port


@dataclass(frozen=True, slots=True)
class Binding:
    """The upstream end of a link feeding one input port.

    Attributes:
        source: The module whose output is read.
        output_index: Which output of ``source`` is read.
        kind: Kind of that output, cached so evaluation need not look it up.

    """

    source: Module
    output_index: int
    kind: PortKind


class Module:
    """A node of the procedural graph.

    Subclasses declare their ports as class attributes, an optional pydantic
    ``Params`` model for their configuration, and override the evaluation
    operations that apply to their outputs:

    - ``average_value`` for scalar and boolean outputs,
    - ``color_value`` for color outputs,
    - ``value_error`` for the uncertainty of either.

    All three are pure with respect to the graph. A module instance is shared
    by every thread evaluating the graph, so nothing computed during an
    evaluation may be stored on ``self``.
    """

    category: ClassVar[ModuleCategory] = ModuleCategory.VALUES
    display_name: ClassVar[str] = ""
    input_ports: ClassVar[tuple[Port, ...]] = ()
    output_ports: ClassVar[tuple[Port, ...]] = ()

    class Params(BaseModel):
        """Module configuration. The base module has none."""

        model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, module_id: str, /, **params: Any) -> None:
        if not module_id:
            msg = "Module id must be a non-empty string"
            raise ValueError(msg)
        self.id = module_id
        self.params = self.Params(**params)
        self._bindings: list[Binding | None] = [None] * len(self.input_ports)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"

    @classmethod
    def type_name(cls) -> str:
        return cls.__name__

    def duplicate(self, module_id: str) -> Module:
        """Create an unbound copy with the same parameters."""
        return type(self)(module_id, **self.params.model_dump())

    # --- bindings -------------------------------------------------------

    @property
    def bindings(self) -> tuple[Binding | None, ...]:
        return tuple(self._bindings)

    def binding(self, index: int) -> Binding | None:
        return self._bindings[index]

    def is_bound(self, index: int) -> bool:
        return self._bindings[index] is not None

    def _attach(self, index: int, binding: Binding) -> None:
        self._bindings[index] = binding

    def _detach(self, index: int) -> Binding | None:
        previous = self._bindings[index]
        self._bindings[index] = None
        return previous

    # --- input resolution -----------------------------------------------

    def input_value(self, index: int, ctx: EvaluationContext) -> float:
        """Resolve a numeric input: the linked upstream value or the port default."""
        binding = self._bindings[index]
        if binding is None:
            port = self.input_ports[index]
            if port.follows is not None:
                return ctx.point.coordinate(port.follows)
            if isinstance(port.default, RGBColor):
                return port.default.brightness
            return port.default
        return binding.source.average_value(binding.output_index, ctx)

    def input_error(self, index: int, ctx: EvaluationContext) -> float:
        """Resolve the uncertainty of an input; constants have none."""
        binding = self._bindings[index]
        if binding is None:
            port = self.input_ports[index]
            if port.follows is not None:
                return ctx.coordinate_error(port.follows)
            return 0.0
        return binding.source.value_error(binding.output_index, ctx)

    def input_color(self, index: int, ctx: EvaluationContext) -> RGBColor:
        """Resolve a color input, widening numeric sources to grey."""
        binding = self._bindings[index]
        if binding is None:
            default = self.input_ports[index].default
            return default if isinstance(default, RGBColor) else RGBColor.grey(default)
        if binding.kind is PortKind.COLOR:
            return binding.source.color_value(binding.output_index, ctx)
        return RGBColor.grey(binding.source.average_value(binding.output_index, ctx))

    # --- evaluation contract --------------------------------------------

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        """Area-averaged value of a numeric output (point value when blur is zero)."""
        return 0.0

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:
        """Area-averaged color of an output. Numeric outputs widen to grey."""
        return RGBColor.grey(self.average_value(which, ctx))

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        """Non-negative estimate of how much the output varies near this sample."""
        return 0.0
