"""Shared fixtures and utilities for CalcPipe tests."""

import math

import pytest

from calcpipe import CalcPipe, CalcPipeContext, CalcPipeFunction, create_default_context, tokenize, interpret


@pytest.fixture
def calcpipe():
    """Create a fresh CalcPipe instance with the default context for each test."""
    return CalcPipe()


@pytest.fixture
def calcpipe_custom():
    """Factory for CalcPipe instances with custom configuration."""
    def _create_calcpipe(context: CalcPipeContext | None = None, max_depth: int = 100) -> CalcPipe:
        return CalcPipe(context=context, max_depth=max_depth)
    return _create_calcpipe


@pytest.fixture
def empty_context():
    """A context with no constants and no functions."""
    return CalcPipeContext()


@pytest.fixture
def default_context():
    """The standard context."""
    return create_default_context()


@pytest.fixture
def ordered_context():
    """A context with non-commutative functions, useful for checking argument order."""
    return CalcPipeContext(
        constants={'two': 2.0},
        functions={
            'sub': CalcPipeFunction('sub', lambda a, b: a - b, min_args=2, max_args=2),
            'neg': CalcPipeFunction('neg', lambda a: -a),
            'first': CalcPipeFunction('first', lambda *args: args[0], min_args=1, max_args=None),
            'last': CalcPipeFunction('last', lambda *args: args[-1], min_args=1, max_args=None),
        }
    )


class CalcPipeTestHelpers:
    """Helper utilities for CalcPipe testing."""

    @staticmethod
    def evaluate(expression: str, context: CalcPipeContext | None = None) -> float:
        """Tokenize and interpret an expression."""
        return interpret(tokenize(expression), context)

    @staticmethod
    def assert_close(result: float, expected: float, rel_tol: float = 1e-9) -> None:
        """Assert that two floats match, treating NaN as equal to NaN."""
        if math.isnan(expected):
            assert math.isnan(result), f"Expected NaN, got {result!r}"
            return

        assert math.isclose(result, expected, rel_tol=rel_tol, abs_tol=1e-12), \
            f"Expected {expected!r}, got {result!r}"

    @staticmethod
    def build_nested_expression(depth: int, base_value: str = "1") -> str:
        """Build an expression nested in depth pairs of parentheses."""
        return "(" * depth + base_value + ")" * depth


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return CalcPipeTestHelpers
