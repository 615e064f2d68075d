"""Procedural computation graphs for textures, materials and displacement."""

__all__ = [
    "BLACK",
    "WHITE",
    "AdaptiveSampler",
    "Axis",
    "Binding",
    "CellMetric",
    "ConfigError",
    "CycleDetectedError",
    "DependencyGraph",
    "DuplicateBindingError",
    "DuplicateModuleError",
    "EvaluationContext",
    "EvaluationResult",
    "Graph",
    "GraphError",
    "Link",
    "Module",
    "ModuleCategory",
    "ModuleInfo",
    "Port",
    "PortIndexError",
    "PortInfo",
    "PortKind",
    "PortKindMismatchError",
    "RGBColor",
    "Sample",
    "SamplePoint",
    "SamplerSettings",
    "UnknownModuleError",
    "Unsolvable",
    "ValidationReport",
    "catalog",
    "create_module",
    "estimate_error",
    "evaluate_color",
    "evaluate_many",
    "evaluate_scalar",
    "get_config",
    "load_config",
    "module_info",
    "module_type",
    "register_module",
    "solve3",
]

from ._catalog import ModuleInfo, PortInfo, catalog, create_module, module_info, module_type, register_module
from ._color import BLACK, WHITE, RGBColor
from ._config import ConfigError, SamplerSettings, get_config, load_config
from ._context import EvaluationContext, SamplePoint
from ._enums import Axis, CellMetric, ModuleCategory, PortKind
from ._errors import (
    CycleDetectedError,
    DuplicateBindingError,
    DuplicateModuleError,
    GraphError,
    PortIndexError,
    PortKindMismatchError,
    UnknownModuleError,
)
from ._eval_engine import EvaluationResult, estimate_error, evaluate_color, evaluate_many, evaluate_scalar
from ._graph import DependencyGraph, Graph, Link, ValidationReport
from ._linalg import Unsolvable, solve3
from ._module import Binding, Module
from ._ports import Port
from ._sampler import AdaptiveSampler, Sample
