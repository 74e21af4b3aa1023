"""Default constants and functions for CalcPipe expressions."""

import math
from typing import Dict, Mapping, Optional

from calcpipe.calcpipe_context import CalcPipeContext, CalcPipeFunction, FunctionSpec
from calcpipe.calcpipe_interpreter import power


def _round_half_up(x: float) -> float:
    """Round to the nearest integer, halves go towards positive infinity."""
    if not math.isfinite(x):
        return x

    return float(math.floor(x + 0.5))


def _floor(x: float) -> float:
    # math.floor returns an int and cannot represent infinities
    return x if not math.isfinite(x) else float(math.floor(x))


def _ceil(x: float) -> float:
    return x if not math.isfinite(x) else float(math.ceil(x))


def _minimum(*args: float) -> float:
    return min(args)


def _maximum(*args: float) -> float:
    return max(args)


DEFAULT_CONSTANTS: Dict[str, float] = {
    'pi': math.pi,
    'e': math.e,
    'tau': math.tau,
}


_UNARY_FUNCTIONS = {
    'sin': math.sin,
    'cos': math.cos,
    'tan': math.tan,
    'asin': math.asin,
    'acos': math.acos,
    'atan': math.atan,
    'sinh': math.sinh,
    'cosh': math.cosh,
    'tanh': math.tanh,
    'log': math.log,
    'log10': math.log10,
    'log2': math.log2,
    'exp': math.exp,
    'sqrt': math.sqrt,
    'abs': math.fabs,
    'floor': _floor,
    'ceil': _ceil,
    'round': _round_half_up,
}


def _build_default_functions() -> Dict[str, CalcPipeFunction]:
    functions = {name: CalcPipeFunction(name, impl) for name, impl in _UNARY_FUNCTIONS.items()}

    functions['atan2'] = CalcPipeFunction('atan2', math.atan2, min_args=2, max_args=2)
    functions['pow'] = CalcPipeFunction('pow', power, min_args=2, max_args=2)
    functions['min'] = CalcPipeFunction('min', _minimum, min_args=1, max_args=None)
    functions['max'] = CalcPipeFunction('max', _maximum, min_args=1, max_args=None)
    functions['hypot'] = CalcPipeFunction('hypot', math.hypot, min_args=1, max_args=None)
    return functions


DEFAULT_FUNCTIONS: Dict[str, CalcPipeFunction] = _build_default_functions()


def create_default_context(
    extra_constants: Optional[Mapping[str, float]] = None,
    extra_functions: Optional[Mapping[str, FunctionSpec]] = None
) -> CalcPipeContext:
    """
    Create a context with the standard constants and math functions.

    Args:
        extra_constants: Additional constants, replacing defaults of the same name
        extra_functions: Additional functions, replacing defaults of the same name

    Returns:
        A new evaluation context
    """
    context = CalcPipeContext(DEFAULT_CONSTANTS, DEFAULT_FUNCTIONS)
    if extra_constants or extra_functions:
        context = context.extend(extra_constants, extra_functions)

    return context
