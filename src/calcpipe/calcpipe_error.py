"""Exception classes for CalcPipe expressions with detailed context."""

from typing import Any, Iterable, List, Optional
import difflib

from calcpipe.calcpipe_token import CalcPipeToken


class CalcPipeError(Exception):
    """
    Base class for every failure while tokenizing or evaluating an expression.

    Subclasses set ``reason`` to a stable code that callers can match on.  The
    string form of the exception lists whichever details were supplied, one
    per line, after the core message.
    """

    reason = "error"

    # Detail attributes in the order they appear in the formatted message
    DETAIL_LABELS = (
        ('position', "Position"),
        ('received', "Received"),
        ('expected', "Expected"),
        ('context', "Context"),
        ('suggestion', "Suggestion"),
        ('example', "Example"),
    )

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        position: Optional[int] = None
    ):
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.position = position

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        lines = [f"Error: {self.message}"]
        for attribute, label in self.DETAIL_LABELS:
            value = getattr(self, attribute)
            if value is None or value == "":
                continue

            lines.append(f"{label}: {value}")

        return "\n".join(lines)


class CalcPipeTokenError(CalcPipeError):
    """Raised when a character matches no tokenizer rule."""

    reason = "unrecognized_character"

    def __init__(self, character: str, position: int):
        self.character = character
        suggestion = ErrorMessageBuilder.get_character_suggestion(character)
        super().__init__(
            message=f"Unrecognized character: {character}",
            position=position,
            received=f"Character: {character} (code {ord(character)})",
            expected="Number, identifier, operator (+ - * / ^ %), parenthesis, ',' or '|>'",
            example="Valid: 2 * (3 + 4), sin(pi / 2), 16 |> sqrt",
            suggestion=suggestion
        )


class CalcPipeParseError(CalcPipeError):
    """Base class for errors caused by tokens appearing in the wrong place."""


class CalcPipeUnexpectedTokenError(CalcPipeParseError):
    """Raised when a token is found where the grammar required something else."""

    reason = "unexpected_token"

    def __init__(self, token: CalcPipeToken, expected: Optional[str] = None):
        self.token = token
        super().__init__(
            message=f"Unexpected token: {token.value}",
            received=f"Found {token.describe()}",
            expected=expected
        )


class CalcPipeUnexpectedEndError(CalcPipeParseError):
    """Raised when the grammar needs another token but the input has run out."""

    reason = "unexpected_end_of_input"

    def __init__(self, expected: Optional[str] = None):
        super().__init__(
            message="Unexpected end of input",
            expected=expected,
            suggestion="Check for a missing operand or closing parenthesis",
            example="Correct: (1 + 2)\nIncorrect: (1 + 2"
        )


class CalcPipeEvalError(CalcPipeError):
    """Base class for errors detected while computing a value."""


class CalcPipeDivisionByZeroError(CalcPipeEvalError):
    """Raised when the right operand of '/' or '%' is exactly zero."""

    reason = "division_by_zero"

    def __init__(self, operator: str = '/'):
        self.operator = operator
        super().__init__(
            message="Division by zero",
            context=f"Right operand of '{operator}' evaluated to 0"
        )


class CalcPipeUnknownIdentifierError(CalcPipeEvalError):
    """Raised when an identifier is bound to neither a function nor a constant."""

    reason = "unknown_identifier"

    def __init__(self, identifier: str, available: Iterable[str] = ()):
        self.identifier = identifier
        self.suggestions = ErrorMessageBuilder.suggest_similar_names(identifier, list(available))
        suggestion = None
        if self.suggestions:
            suggestion = f"Did you mean: {', '.join(self.suggestions)}?"

        super().__init__(
            message=f"Unknown identifier: {identifier}",
            received=f"Identifier: {identifier}",
            expected="A known constant or function name",
            suggestion=suggestion
        )


class CalcPipeArityError(CalcPipeEvalError):
    """Raised when a function is applied to the wrong number of arguments."""

    reason = "invalid_argument_count"

    def __init__(self, function_name: str, received: int, expected: str):
        self.function_name = function_name
        self.received_count = received
        super().__init__(
            message=f"Function '{function_name}' called with {received} argument{'s' if received != 1 else ''}",
            received=f"{received} argument{'s' if received != 1 else ''}",
            expected=expected,
            example=ErrorMessageBuilder.create_function_example(function_name)
        )


class CalcPipeFunctionError(CalcPipeEvalError):
    """Raised when a context function rejects its arguments."""

    reason = "function_domain_error"

    def __init__(self, function_name: str, arguments: List[float], detail: str):
        self.function_name = function_name
        self.arguments = arguments
        args_text = ", ".join(repr(a) for a in arguments)
        super().__init__(
            message=f"Function '{function_name}' failed: {detail}",
            received=f"{function_name}({args_text})",
            example=ErrorMessageBuilder.create_function_example(function_name)
        )


class CalcPipeDepthError(CalcPipeEvalError):
    """Raised when an expression nests deeper than the interpreter allows."""

    reason = "max_depth_exceeded"

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            message=f"Expression too deeply nested (max depth: {max_depth})",
            suggestion="Reduce nesting depth or increase max_depth limit"
        )


class CalcPipeInternalError(CalcPipeError):
    """Raised when a value reaches a branch every known variant should have covered."""

    reason = "exhaustive_check_failed"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            message=f"Internal error: unhandled value {value!r}",
            context="This indicates a bug in the interpreter, not in the expression"
        )


class ErrorMessageBuilder:
    """Helper class for building detailed error messages."""

    @staticmethod
    def suggest_similar_names(target: str, available_names: List[str], max_suggestions: int = 3) -> List[str]:
        """Suggest similar constant or function names using fuzzy matching."""
        if not target or not available_names:
            return []

        return difflib.get_close_matches(target, sorted(available_names), n=max_suggestions, cutoff=0.6)

    @staticmethod
    def create_function_example(func_name: str) -> str:
        """Create usage example for common functions."""
        examples = {
            'sin': "sin(pi / 2) → 1",
            'cos': "cos 0 → 1",
            'sqrt': "sqrt(16) → 4 or 16 |> sqrt → 4",
            'log': "log(e) → 1",
            'abs': "abs(-5) → 5",
            'round': "round(2.5) → 3",
            'min': "min(3, 1, 2) → 1",
            'max': "max(3, 1, 2) → 3 or -4 |> max 0 → 0",
            'atan2': "atan2(1, 1) → 0.785...",
            'pow': "pow(2, 10) → 1024",
            'hypot': "hypot(3, 4) → 5",
        }

        return examples.get(func_name, f"{func_name}(x) or x |> {func_name}")

    @staticmethod
    def get_character_suggestion(char: str) -> str:
        """Get suggestions for characters people commonly try to use."""
        suggestions = {
            '[': "Use parentheses ( ) for grouping, not brackets [ ]",
            ']': "Use parentheses ( ) for grouping, not brackets [ ]",
            '{': "Use parentheses ( ) for grouping, not braces { }",
            '}': "Use parentheses ( ) for grouping, not braces { }",
            '|': "The pipe operator is written |>",
            '>': "The pipe operator is written |>",
            '=': "Assignment is not supported, write the expression to evaluate",
            '!': "Factorial is not supported",
            '_': "Identifiers may only contain letters and digits",
        }

        return suggestions.get(char, f"'{char}' is not a valid character in an expression")
