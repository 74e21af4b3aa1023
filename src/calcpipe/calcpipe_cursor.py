"""Immutable position marker into a token sequence."""

from dataclasses import dataclass
from typing import Collection, Optional, Tuple

from calcpipe.calcpipe_context import CalcPipeContext, CalcPipeFunction
from calcpipe.calcpipe_error import (
    CalcPipeUnexpectedTokenError, CalcPipeUnexpectedEndError, CalcPipeUnknownIdentifierError
)
from calcpipe.calcpipe_token import CalcPipeToken, CalcPipeTokenType


@dataclass(frozen=True)
class CalcPipeTokenCursor:
    """
    A (tokens, position) pair.

    Reading never changes a cursor: every read returns the token together with
    a new cursor positioned after it.
    """
    tokens: Tuple[CalcPipeToken, ...]
    position: int = 0

    def current(self) -> Optional[CalcPipeToken]:
        """Return the token under the cursor, or None at the end of input."""
        if self.position >= len(self.tokens):
            return None

        return self.tokens[self.position]

    def at_end(self) -> bool:
        """Check whether every token has been consumed."""
        return self.position >= len(self.tokens)

    def advance(self) -> 'CalcPipeTokenCursor':
        """Return a cursor one token further on."""
        return CalcPipeTokenCursor(self.tokens, self.position + 1)

    def read_if(
        self,
        types: Optional[Collection[CalcPipeTokenType]] = None,
        values: Optional[Collection[str]] = None
    ) -> Optional[Tuple[CalcPipeToken, 'CalcPipeTokenCursor']]:
        """
        Read the current token if it matches.

        Args:
            types: Acceptable token types, or None for any
            values: Acceptable token values, or None for any

        Returns:
            (token, next cursor) if the current token matches, otherwise None
        """
        token = self.current()
        if token is None:
            return None

        if types is not None and token.type not in types:
            return None

        if values is not None and token.value not in values:
            return None

        return token, self.advance()

    def read(
        self,
        types: Optional[Collection[CalcPipeTokenType]] = None,
        values: Optional[Collection[str]] = None,
        expected: Optional[str] = None
    ) -> Tuple[CalcPipeToken, 'CalcPipeTokenCursor']:
        """
        Read the current token, which must match.

        Raises:
            CalcPipeUnexpectedTokenError: If the current token does not match
            CalcPipeUnexpectedEndError: If there are no tokens left
        """
        result = self.read_if(types, values)
        if result is not None:
            return result

        token = self.current()
        if token is None:
            raise CalcPipeUnexpectedEndError(expected)

        raise CalcPipeUnexpectedTokenError(token, expected)

    def read_function_if(
        self,
        context: CalcPipeContext
    ) -> Optional[Tuple[CalcPipeFunction, 'CalcPipeTokenCursor']]:
        """Read an identifier bound to a function, if that is what comes next."""
        result = self.read_if((CalcPipeTokenType.IDENTIFIER,))
        if result is None:
            return None

        token, next_cursor = result
        function = context.lookup_function(str(token.value))
        if function is None:
            return None

        return function, next_cursor

    def read_function(self, context: CalcPipeContext) -> Tuple[CalcPipeFunction, 'CalcPipeTokenCursor']:
        """
        Read an identifier that must be bound to a function.

        Raises:
            CalcPipeUnknownIdentifierError: If the identifier is not a function
            CalcPipeUnexpectedTokenError: If the current token is not an identifier
            CalcPipeUnexpectedEndError: If there are no tokens left
        """
        result = self.read_function_if(context)
        if result is not None:
            return result

        token = self.current()
        if token is None:
            raise CalcPipeUnexpectedEndError("Function name")

        if token.type == CalcPipeTokenType.IDENTIFIER:
            raise CalcPipeUnknownIdentifierError(str(token.value), context.functions.keys())

        raise CalcPipeUnexpectedTokenError(token, "Function name")

    def read_constant_if(self, context: CalcPipeContext) -> Optional[Tuple[float, 'CalcPipeTokenCursor']]:
        """Read an identifier bound to a constant, if that is what comes next."""
        result = self.read_if((CalcPipeTokenType.IDENTIFIER,))
        if result is None:
            return None

        token, next_cursor = result
        value = context.lookup_constant(str(token.value))
        if value is None:
            return None

        return value, next_cursor
