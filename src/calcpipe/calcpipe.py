"""Main CalcPipe class and the tokenize/interpret entry points."""

import logging
import math
from typing import List, Optional, Sequence

from calcpipe.calcpipe_builtins import create_default_context
from calcpipe.calcpipe_context import CalcPipeContext
from calcpipe.calcpipe_interpreter import CalcPipeInterpreter
from calcpipe.calcpipe_token import CalcPipeToken
from calcpipe.calcpipe_tokenizer import CalcPipeTokenizer


logger = logging.getLogger(__name__)


def tokenize(expression: str) -> List[CalcPipeToken]:
    """
    Tokenize an expression.

    Raises:
        CalcPipeTokenError: If the expression contains an unrecognized character
    """
    return CalcPipeTokenizer().tokenize(expression)


def interpret(
    tokens: Sequence[CalcPipeToken],
    context: Optional[CalcPipeContext] = None,
    max_depth: int = 100
) -> float:
    """
    Evaluate a token sequence.

    Args:
        tokens: Tokens produced by tokenize()
        context: Constants and functions to use, the default context if None
        max_depth: Maximum nesting depth

    Raises:
        CalcPipeParseError: If the tokens do not form a valid expression
        CalcPipeEvalError: If evaluation fails
    """
    if context is None:
        context = create_default_context()

    return CalcPipeInterpreter(max_depth=max_depth).interpret(tokens, context)


class CalcPipe:
    """
    CalcPipe arithmetic expression calculator.

    Supports infix operators (+ - * / % ^), parentheses, unary signs, named
    constants, function calls with or without parentheses, and the pipe
    operator:

        >>> CalcPipe().evaluate("16 |> sqrt |> max 5")
        5.0

    The context is only read, so one CalcPipe can be shared between threads.
    """

    def __init__(self, context: Optional[CalcPipeContext] = None, max_depth: int = 100):
        """
        Initialize the calculator.

        Args:
            context: Constants and functions available to expressions, the default context if None
            max_depth: Maximum nesting of parentheses, calls and pipes
        """
        self.context = context if context is not None else create_default_context()
        self.max_depth = max_depth

    def evaluate(self, expression: str) -> float:
        """
        Evaluate an expression.

        Args:
            expression: Expression string to evaluate

        Returns:
            The result, with negative zero normalised to zero

        Raises:
            CalcPipeTokenError: If tokenization fails
            CalcPipeParseError: If the expression is malformed
            CalcPipeEvalError: If evaluation fails
        """
        logger.debug("Evaluating expression: %r", expression)

        tokens = CalcPipeTokenizer().tokenize(expression)
        interpreter = CalcPipeInterpreter(max_depth=self.max_depth)
        result = interpreter.interpret(tokens, self.context)

        if result == 0:
            result = 0.0

        logger.debug("Expression %r evaluated to %r", expression, result)
        return result

    def evaluate_and_format(self, expression: str) -> str:
        """
        Evaluate an expression and return the result as a display string.

        Integral results are shown without a fractional part.
        """
        return self.format_result(self.evaluate(expression))

    @staticmethod
    def format_result(value: float) -> str:
        """Format a result for display."""
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
            return str(int(value))

        return repr(value)
