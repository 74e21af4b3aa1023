"""Recursive descent interpreter that parses and evaluates CalcPipe tokens in one pass."""

import math
from typing import List, Sequence, Tuple

from calcpipe.calcpipe_context import CalcPipeContext, CalcPipeFunction
from calcpipe.calcpipe_cursor import CalcPipeTokenCursor
from calcpipe.calcpipe_error import (
    CalcPipeArityError, CalcPipeDepthError, CalcPipeDivisionByZeroError, CalcPipeFunctionError,
    CalcPipeInternalError, CalcPipeUnexpectedTokenError, CalcPipeUnknownIdentifierError
)
from calcpipe.calcpipe_token import CalcPipeToken, CalcPipeTokenType


# Result of every grammar rule: the value computed and where parsing got to
PartialResult = Tuple[float, CalcPipeTokenCursor]

_TERM_START_TYPES = frozenset({
    CalcPipeTokenType.NUMBER, CalcPipeTokenType.IDENTIFIER, CalcPipeTokenType.LPAREN
})


def power(base: float, exponent: float) -> float:
    """
    Raise base to exponent with IEEE 754 semantics.

    Overflow gives a signed infinity and undefined real results give NaN, so a
    complex number is never produced.
    """
    odd_integer_exponent = exponent.is_integer() and math.fmod(exponent, 2.0) != 0.0

    try:
        return math.pow(base, exponent)

    except OverflowError:
        if base < 0 and odd_integer_exponent:
            return -math.inf

        return math.inf

    except ValueError:
        # Zero to a negative power, or a negative base with a fractional exponent
        if base == 0:
            if odd_integer_exponent:
                return math.copysign(math.inf, base)

            return math.inf

        return math.nan


def remainder(dividend: float, divisor: float) -> float:
    """Truncated remainder, the sign follows the dividend."""
    if divisor == 0:
        raise CalcPipeDivisionByZeroError('%')

    try:
        return math.fmod(dividend, divisor)

    except ValueError:
        # Infinite dividend
        return math.nan


class CalcPipeInterpreter:
    """
    Parses and evaluates a token sequence against an evaluation context.

    Grammar, loosest binding first:

        Expression  := Term ('|>' Function Term?)*
        Term        := Factor (('+' | '-') Factor)*
        Factor      := Exponent (('*' | '/' | '%') Exponent)*
        Exponent    := Signed ('^' Signed)*
        Signed      := ('+' | '-')? CallOrUnit
        CallOrUnit  := Function ('(' Expression (',' Expression)* ')' | Signed)
                     | Constant
                     | Unit
        Unit        := Number | '(' Expression ')'

    All binary operators, '^' included, associate to the left.
    """

    def __init__(self, max_depth: int = 100):
        """
        Initialize the interpreter.

        Args:
            max_depth: Maximum nesting of parentheses, calls and pipes
        """
        self.max_depth = max_depth

    def interpret(self, tokens: Sequence[CalcPipeToken], context: CalcPipeContext) -> float:
        """
        Evaluate a complete token sequence.

        Args:
            tokens: Tokens produced by the tokenizer
            context: Constants and functions the expression may refer to

        Returns:
            The value of the expression

        Raises:
            CalcPipeParseError: If the tokens do not form a valid expression
            CalcPipeEvalError: If evaluation fails
        """
        cursor = CalcPipeTokenCursor(tuple(tokens))

        try:
            value, cursor = self._parse_expression(cursor, context, 0)

        except RecursionError as e:
            raise CalcPipeDepthError(self.max_depth) from e

        trailing = cursor.current()
        if trailing is not None:
            raise CalcPipeUnexpectedTokenError(trailing, "End of expression")

        return value

    def _parse_expression(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse a term followed by any number of pipe applications."""
        if depth > self.max_depth:
            raise CalcPipeDepthError(self.max_depth)

        value, cursor = self._parse_term(cursor, context, depth)

        while True:
            result = cursor.read_if((CalcPipeTokenType.PIPE,))
            if result is None:
                return value, cursor

            _pipe, cursor = result
            function, cursor = cursor.read_function(context)

            # The piped value becomes the last argument
            args = [value]
            if self._starts_term(cursor):
                extra, cursor = self._parse_term(cursor, context, depth + 1)
                args = [extra, value]

            value = self._apply_function(function, args)

    def _starts_term(self, cursor: CalcPipeTokenCursor) -> bool:
        """Check whether the next token can begin a term."""
        token = cursor.current()
        if token is None:
            return False

        if token.type in _TERM_START_TYPES:
            return True

        return token.type == CalcPipeTokenType.OPERATOR and token.value in ('+', '-')

    def _parse_term(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse factors joined by '+' and '-'."""
        value, cursor = self._parse_factor(cursor, context, depth)

        while True:
            result = cursor.read_if((CalcPipeTokenType.OPERATOR,), ('+', '-'))
            if result is None:
                return value, cursor

            operator, cursor = result
            right, cursor = self._parse_factor(cursor, context, depth)
            value = self._apply_operator(str(operator.value), value, right)

    def _parse_factor(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse exponents joined by '*', '/' and '%'."""
        value, cursor = self._parse_exponent(cursor, context, depth)

        while True:
            result = cursor.read_if((CalcPipeTokenType.OPERATOR,), ('*', '/', '%'))
            if result is None:
                return value, cursor

            operator, cursor = result
            right, cursor = self._parse_exponent(cursor, context, depth)
            value = self._apply_operator(str(operator.value), value, right)

    def _parse_exponent(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse signed operands joined by '^', folding left."""
        value, cursor = self._parse_signed(cursor, context, depth)

        while True:
            result = cursor.read_if((CalcPipeTokenType.OPERATOR,), ('^',))
            if result is None:
                return value, cursor

            operator, cursor = result
            right, cursor = self._parse_signed(cursor, context, depth)
            value = self._apply_operator(str(operator.value), value, right)

    def _parse_signed(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse an optional unary sign followed by a call or unit."""
        result = cursor.read_if((CalcPipeTokenType.OPERATOR,), ('+', '-'))
        if result is None:
            return self._parse_call_or_unit(cursor, context, depth)

        sign, cursor = result
        value, cursor = self._parse_call_or_unit(cursor, context, depth)

        if sign.value == '-':
            return -value, cursor

        if sign.value == '+':
            return value, cursor

        raise CalcPipeInternalError(sign.value)

    def _parse_call_or_unit(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse a function call, a constant or a unit."""
        function_result = cursor.read_function_if(context)
        if function_result is not None:
            function, cursor = function_result
            if depth + 1 > self.max_depth:
                raise CalcPipeDepthError(self.max_depth)

            paren = cursor.read_if((CalcPipeTokenType.LPAREN,))
            if paren is not None:
                _lparen, cursor = paren
                args, cursor = self._parse_arguments(cursor, context, depth + 1)
                return self._apply_function(function, args), cursor

            # Prefix form: "sin x" means "sin(x)"
            arg, cursor = self._parse_signed(cursor, context, depth + 1)
            return self._apply_function(function, [arg]), cursor

        constant_result = cursor.read_constant_if(context)
        if constant_result is not None:
            return constant_result

        token = cursor.current()
        if token is not None and token.type == CalcPipeTokenType.IDENTIFIER:
            raise CalcPipeUnknownIdentifierError(str(token.value), context.names())

        return self._parse_unit(cursor, context, depth)

    def _parse_arguments(
        self,
        cursor: CalcPipeTokenCursor,
        context: CalcPipeContext,
        depth: int
    ) -> Tuple[List[float], CalcPipeTokenCursor]:
        """Parse a comma separated argument list and the closing parenthesis."""
        first, cursor = self._parse_expression(cursor, context, depth)
        args = [first]

        while True:
            result = cursor.read_if((CalcPipeTokenType.COMMA,))
            if result is None:
                break

            _comma, cursor = result
            arg, cursor = self._parse_expression(cursor, context, depth)
            args.append(arg)

        _rparen, cursor = cursor.read((CalcPipeTokenType.RPAREN,), expected="',' or ')'")
        return args, cursor

    def _parse_unit(self, cursor: CalcPipeTokenCursor, context: CalcPipeContext, depth: int) -> PartialResult:
        """Parse a number or a parenthesised expression."""
        token, cursor = cursor.read(
            (CalcPipeTokenType.NUMBER, CalcPipeTokenType.LPAREN),
            expected="Number, identifier or '('"
        )

        if token.type == CalcPipeTokenType.NUMBER:
            return float(token.value), cursor

        if token.type == CalcPipeTokenType.LPAREN:
            value, cursor = self._parse_expression(cursor, context, depth + 1)
            _rparen, cursor = cursor.read((CalcPipeTokenType.RPAREN,), expected="')'")
            return value, cursor

        raise CalcPipeInternalError(token)

    def _apply_operator(self, operator: str, left: float, right: float) -> float:
        """Apply a binary operator."""
        if operator == '+':
            return left + right

        if operator == '-':
            return left - right

        if operator == '*':
            return left * right

        if operator == '/':
            if right == 0:
                raise CalcPipeDivisionByZeroError('/')

            return left / right

        if operator == '%':
            return remainder(left, right)

        if operator == '^':
            return power(left, right)

        raise CalcPipeInternalError(operator)

    def _apply_function(self, function: CalcPipeFunction, args: List[float]) -> float:
        """
        Apply a context function after checking its arity.

        Raises:
            CalcPipeArityError: If the function does not accept this many arguments
            CalcPipeFunctionError: If the function rejects the argument values
        """
        if not function.accepts(len(args)):
            raise CalcPipeArityError(function.name, len(args), function.describe_arity())

        try:
            return float(function.impl(*args))

        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise CalcPipeFunctionError(function.name, args, str(e)) from e
