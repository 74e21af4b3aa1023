"""Evaluation context: the named constants and functions an expression can use."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Union


@dataclass(frozen=True)
class CalcPipeFunction:
    """
    A named numeric function together with the argument counts it accepts.

    A max_args of None means the function is variadic.
    """
    name: str
    impl: Callable[..., float]
    min_args: int = 1
    max_args: Optional[int] = 1

    def accepts(self, count: int) -> bool:
        """Check whether the function can be applied to count arguments."""
        if count < self.min_args:
            return False

        return self.max_args is None or count <= self.max_args

    def describe_arity(self) -> str:
        """Describe the accepted argument counts, e.g. for error messages."""
        if self.max_args is None:
            return f"at least {self.min_args} argument{'s' if self.min_args != 1 else ''}"

        if self.min_args == self.max_args:
            return f"exactly {self.min_args} argument{'s' if self.min_args != 1 else ''}"

        return f"between {self.min_args} and {self.max_args} arguments"


FunctionSpec = Union[CalcPipeFunction, Callable[..., float]]


class CalcPipeContext:
    """
    Read-only bindings of lowercased names to constants and functions.

    Names are lowercased on construction so lookups are case-insensitive.  Bare
    callables are wrapped as variadic functions taking at least one argument.
    The context never changes after construction and can be shared freely.
    """

    def __init__(
        self,
        constants: Optional[Mapping[str, float]] = None,
        functions: Optional[Mapping[str, FunctionSpec]] = None
    ) -> None:
        """
        Initialize the context.

        Args:
            constants: Mapping of constant names to values
            functions: Mapping of function names to CalcPipeFunction objects or plain callables
        """
        constant_table: Dict[str, float] = {}
        for name, value in (constants or {}).items():
            constant_table[name.lower()] = float(value)

        function_table: Dict[str, CalcPipeFunction] = {}
        for name, spec in (functions or {}).items():
            key = name.lower()
            if isinstance(spec, CalcPipeFunction):
                function_table[key] = spec

            else:
                function_table[key] = CalcPipeFunction(key, spec, min_args=1, max_args=None)

        self._constants = MappingProxyType(constant_table)
        self._functions = MappingProxyType(function_table)

    @property
    def constants(self) -> Mapping[str, float]:
        """Constant table."""
        return self._constants

    @property
    def functions(self) -> Mapping[str, CalcPipeFunction]:
        """Function table."""
        return self._functions

    def lookup_constant(self, name: str) -> Optional[float]:
        """Return the value bound to name, or None."""
        return self._constants.get(name.lower())

    def lookup_function(self, name: str) -> Optional[CalcPipeFunction]:
        """Return the function bound to name, or None."""
        return self._functions.get(name.lower())

    def names(self) -> list[str]:
        """All bound names, functions and constants."""
        return list(self._functions) + list(self._constants)

    def extend(
        self,
        constants: Optional[Mapping[str, float]] = None,
        functions: Optional[Mapping[str, FunctionSpec]] = None
    ) -> 'CalcPipeContext':
        """
        Create a new context with additional bindings.

        Later bindings replace earlier ones with the same name.  This context is
        left unchanged.
        """
        merged_constants: Dict[str, float] = dict(self._constants)
        merged_constants.update({k.lower(): v for k, v in (constants or {}).items()})

        merged_functions: Dict[str, FunctionSpec] = dict(self._functions)
        merged_functions.update({k.lower(): v for k, v in (functions or {}).items()})

        return CalcPipeContext(merged_constants, merged_functions)

    def __repr__(self) -> str:
        return f"CalcPipeContext(constants={sorted(self._constants)}, functions={sorted(self._functions)})"
