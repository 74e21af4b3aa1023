"""Token types and token representation for CalcPipe expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class CalcPipeTokenType(Enum):
    """Token types for CalcPipe expressions."""
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    LPAREN = "("
    RPAREN = ")"
    IDENTIFIER = "IDENTIFIER"
    COMMA = ","
    PIPE = "|>"


# Single character infix operators
OPERATORS = frozenset({'+', '-', '*', '/', '^', '%'})


@dataclass(frozen=True)
class CalcPipeToken:
    """Represents a single token in a CalcPipe expression."""
    type: CalcPipeTokenType
    value: Union[float, str]

    def describe(self) -> str:
        """Return a short human readable form of the token for error messages."""
        if self.type == CalcPipeTokenType.NUMBER:
            return f"number {self.value!r}"

        if self.type == CalcPipeTokenType.IDENTIFIER:
            return f"identifier '{self.value}'"

        if self.type == CalcPipeTokenType.OPERATOR:
            return f"operator '{self.value}'"

        return f"'{self.value}'"

    def __repr__(self) -> str:
        return f"CalcPipeToken({self.type.name}, {self.value!r})"
