"""CalcPipe arithmetic expression engine with function calls and a pipe operator."""

# Main API
from calcpipe.calcpipe import CalcPipe, tokenize, interpret

# Exceptions
from calcpipe.calcpipe_error import (
    CalcPipeError, CalcPipeTokenError, CalcPipeParseError, CalcPipeUnexpectedTokenError,
    CalcPipeUnexpectedEndError, CalcPipeEvalError, CalcPipeDivisionByZeroError,
    CalcPipeUnknownIdentifierError, CalcPipeArityError, CalcPipeFunctionError, CalcPipeDepthError,
    CalcPipeInternalError, ErrorMessageBuilder
)

# Evaluation context
from calcpipe.calcpipe_context import CalcPipeContext, CalcPipeFunction
from calcpipe.calcpipe_builtins import create_default_context, DEFAULT_CONSTANTS, DEFAULT_FUNCTIONS

# Lower-level components
from calcpipe.calcpipe_token import CalcPipeToken, CalcPipeTokenType
from calcpipe.calcpipe_tokenizer import CalcPipeTokenizer
from calcpipe.calcpipe_cursor import CalcPipeTokenCursor
from calcpipe.calcpipe_interpreter import CalcPipeInterpreter


__all__ = [
    # Main API
    "CalcPipe", "tokenize", "interpret",

    # Exceptions
    "CalcPipeError", "CalcPipeTokenError", "CalcPipeParseError", "CalcPipeUnexpectedTokenError",
    "CalcPipeUnexpectedEndError", "CalcPipeEvalError", "CalcPipeDivisionByZeroError",
    "CalcPipeUnknownIdentifierError", "CalcPipeArityError", "CalcPipeFunctionError", "CalcPipeDepthError",
    "CalcPipeInternalError", "ErrorMessageBuilder",

    # Evaluation context
    "CalcPipeContext", "CalcPipeFunction", "create_default_context", "DEFAULT_CONSTANTS", "DEFAULT_FUNCTIONS",

    # Lower-level components
    "CalcPipeToken", "CalcPipeTokenType", "CalcPipeTokenizer", "CalcPipeTokenCursor", "CalcPipeInterpreter"
]
