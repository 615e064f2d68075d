"""Registry of module types and their presentation metadata."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from ._enums import ModuleCategory, PortKind
from ._errors import UnknownModuleError

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._module import Module
    from ._ports import Port

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="Module")

_REGISTRY: dict[str, type[Module]] = {}


class PortInfo(BaseModel):
    """Presentation view of a port."""

    index: int
    kind: PortKind
    name: str
    default: str


class ModuleInfo(BaseModel):
    """Presentation view of a module type, as shown by an editor."""

    type_name: str
    category: ModuleCategory
    display_name: str
    description: str
    inputs: list[PortInfo]
    outputs: list[PortInfo]
    parameters: dict[str, Any]


def register_module(category: ModuleCategory) -> Callable[[type[M]], type[M]]:
    """Class decorator adding a module type to the catalog.

    Example:
        >>> @register_module(ModuleCategory.VALUES)
        ... class HalfModule(Module):
        ...     output_ports = (Port.scalar(0, "Half"),)
        ...     def average_value(self, which, ctx):
        ...         return 0.5

    """

    def decorator(cls: type[M]) -> type[M]:
        name = cls.type_name()
        if name in _REGISTRY and _REGISTRY[name] is not cls:
            msg = f"Module type '{name}' is already registered"
            raise ValueError(msg)
        cls.category = category
        if not cls.display_name:
            cls.display_name = name.removesuffix("Module")
        _REGISTRY[name] = cls
        return cls

    return decorator


def _ensure_loaded() -> None:
    # Importing the catalog package runs every register_module decorator.
    from . import _modules  # noqa: F401, PLC0415


def _port_info(port: Port) -> PortInfo:
    return PortInfo(index=port.index, kind=port.kind, name=port.name, default=port.default_label)


def module_type(type_name: str) -> type[Module]:
    """Look up a registered module class by name.

    Raises:
        UnknownModuleError: If no module type has that name.

    """
    _ensure_loaded()
    try:
        return _REGISTRY[type_name]
    except KeyError:
        msg = f"Unknown module type '{type_name}'"
        raise UnknownModuleError(msg) from None


def module_info(type_name: str) -> ModuleInfo:
    cls = module_type(type_name)
    doc = (cls.__doc__ or "").strip()
    return ModuleInfo(
        type_name=type_name,
        category=cls.category,
        display_name=cls.display_name,
        description=doc.splitlines()[0] if doc else "",
        inputs=[_port_info(p) for p in cls.input_ports],
        outputs=[_port_info(p) for p in cls.output_ports],
        parameters=cls.Params.model_json_schema(),
    )


def catalog() -> list[ModuleInfo]:
    """Metadata for every registered module type, grouped by category."""
    _ensure_loaded()
    order = list(ModuleCategory)
    names = sorted(_REGISTRY, key=lambda n: (order.index(_REGISTRY[n].category), n))
    return [module_info(name) for name in names]


def create_module(type_name: str, module_id: str, **params: Any) -> Module:
    """Instantiate a module by its registered type name.

    Raises:
        UnknownModuleError: If no module type has that name.
        pydantic.ValidationError: If ``params`` do not fit the module's schema.

    """
    cls = module_type(type_name)
    logger.debug("Creating %s '%s' with %r", type_name, module_id, params)
    return cls(module_id, **params)
