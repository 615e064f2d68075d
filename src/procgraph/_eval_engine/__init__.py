"""Evaluation engine for module graphs.

Evaluation is a recursive pull: asking a module for an output asks its bound
inputs in turn, down to constants and sample coordinates. Nothing is cached
between calls, so a validated graph can be evaluated from many threads.

Key entry points:
- evaluate_scalar / evaluate_color: one output at one point
- estimate_error: the matching uncertainty
- evaluate_many: a batch of points, optionally on a thread pool
"""

from ._engine import EvaluationResult, estimate_error, evaluate_color, evaluate_many, evaluate_scalar
from ._resolution import resolve_output

__all__ = [
    "EvaluationResult",
    "estimate_error",
    "evaluate_color",
    "evaluate_many",
    "evaluate_scalar",
    "resolve_output",
]
