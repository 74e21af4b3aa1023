"""Tests for the CalcPipe tokenizer."""

import pytest

from calcpipe import CalcPipeToken, CalcPipeTokenType, CalcPipeTokenError, CalcPipeTokenizer, tokenize


def number(value: float) -> CalcPipeToken:
    return CalcPipeToken(CalcPipeTokenType.NUMBER, value)


def op(value: str) -> CalcPipeToken:
    return CalcPipeToken(CalcPipeTokenType.OPERATOR, value)


def ident(value: str) -> CalcPipeToken:
    return CalcPipeToken(CalcPipeTokenType.IDENTIFIER, value)


LPAREN = CalcPipeToken(CalcPipeTokenType.LPAREN, '(')
RPAREN = CalcPipeToken(CalcPipeTokenType.RPAREN, ')')
COMMA = CalcPipeToken(CalcPipeTokenType.COMMA, ',')
PIPE = CalcPipeToken(CalcPipeTokenType.PIPE, '|>')


class TestTokenizerBasics:
    """Test tokenization of each kind of token."""

    def test_decimal_number(self):
        """Test that a decimal number becomes a single number token."""
        assert tokenize("3.14") == [number(3.14)]

    def test_parentheses(self):
        """Test that parentheses tokenize on their own."""
        assert tokenize("(") == [LPAREN]
        assert tokenize(")") == [RPAREN]

    def test_empty_and_whitespace_input(self):
        """Test that empty input gives no tokens."""
        assert tokenize("") == []
        assert tokenize(" \t\n\r ") == []

    @pytest.mark.parametrize("text,expected", [
        ("0", 0.0),
        ("42", 42.0),
        (".5", 0.5),
        ("0.125", 0.125),
        ("1e3", 1000.0),
        ("1E3", 1000.0),
        ("1.5e10", 1.5e10),
        ("2.5e-3", 2.5e-3),
        ("2.5e+3", 2500.0),
        (".5e1", 5.0),
    ])
    def test_number_formats(self, text, expected):
        """Test the accepted number formats."""
        assert tokenize(text) == [number(expected)]

    def test_number_values_are_floats(self):
        """Test that numbers are always converted to float."""
        [token] = tokenize("7")
        assert isinstance(token.value, float)

    def test_operators(self):
        """Test that every operator character becomes an operator token."""
        assert tokenize("+ - * / ^ %") == [op('+'), op('-'), op('*'), op('/'), op('^'), op('%')]

    def test_leading_sign_is_separate_operator(self):
        """Test that a sign before a number is never folded into the number."""
        assert tokenize("-5") == [op('-'), number(5.0)]
        assert tokenize("+.5") == [op('+'), number(0.5)]

    def test_identifiers_are_lowercased(self):
        """Test that identifiers are normalised to lower case."""
        assert tokenize("SIN Pi x1") == [ident('sin'), ident('pi'), ident('x1')]

    def test_dollar_identifiers(self):
        """Test identifiers starting with a dollar sign."""
        assert tokenize("$ $ans $X2") == [ident('$'), ident('$ans'), ident('$x2')]

    def test_comma_and_pipe(self):
        """Test comma and pipe tokens."""
        assert tokenize("max(1, 2) |> sqrt") == [
            ident('max'), LPAREN, number(1.0), COMMA, number(2.0), RPAREN, PIPE, ident('sqrt')
        ]

    def test_whitespace_is_optional(self):
        """Test that tokens do not need separating whitespace."""
        assert tokenize("2*(3+4)") == [number(2.0), op('*'), LPAREN, number(3.0), op('+'), number(4.0), RPAREN]
        assert tokenize("1|>f") == [number(1.0), PIPE, ident('f')]


class TestTokenizerEdgeCases:
    """Test the less obvious tokenizer rules."""

    def test_e_followed_by_digits_is_identifier(self):
        """Test that an exponent suffix needs a preceding digit."""
        assert tokenize("e5") == [ident('e5')]
        assert tokenize("E") == [ident('e')]

    def test_number_then_identifier(self):
        """Test that a number directly followed by letters splits in two."""
        assert tokenize("2pi") == [number(2.0), ident('pi')]
        assert tokenize("2e") == [number(2.0), ident('e')]
        assert tokenize("3ex") == [number(3.0), ident('ex')]

    def test_exponent_without_digits_is_not_consumed(self):
        """Test that 'e' followed by a sign but no digits is left alone."""
        assert tokenize("1e+") == [number(1.0), ident('e'), op('+')]

    def test_trailing_dot_is_not_part_of_number(self):
        """Test that a dot must be followed by digits."""
        with pytest.raises(CalcPipeTokenError) as exc_info:
            tokenize("5.")

        assert exc_info.value.character == '.'
        assert exc_info.value.position == 1

    def test_multiple_dots(self):
        """Test that a second fraction part starts a new number."""
        assert tokenize("1.2.3") == [number(1.2), number(0.3)]

    def test_identifier_digits_stay_in_identifier(self):
        """Test that digits after letters belong to the identifier."""
        assert tokenize("log10 100") == [ident('log10'), number(100.0)]

    def test_tokenizer_instance_is_reusable(self):
        """Test that the tokenizer keeps no state between calls."""
        tokenizer = CalcPipeTokenizer()
        assert tokenizer.tokenize("1 + 2") == tokenizer.tokenize("1 + 2")
        assert tokenizer.tokenize("3") == [number(3.0)]


class TestTokenizerErrors:
    """Test tokenization failures."""

    @pytest.mark.parametrize("text,character,position", [
        ("@", '@', 0),
        ("1 + #", '#', 4),
        ("a_b", '_', 1),
        ("[1]", '[', 0),
        ("1 | 2", '|', 2),
        ("x > 1", '>', 2),
        ("2 = 2", '=', 2),
        ("\u0663", '\u0663', 0),
        ("1\u0663", '\u0663', 1),
        ("2 * \uff15", '\uff15', 4),
    ])
    def test_unrecognized_character(self, text, character, position):
        """Test that the first unrecognized character is reported."""
        with pytest.raises(CalcPipeTokenError) as exc_info:
            tokenize(text)

        error = exc_info.value
        assert error.reason == "unrecognized_character"
        assert error.character == character
        assert error.position == position

    def test_first_bad_character_wins(self):
        """Test that tokenizing stops at the first failure."""
        with pytest.raises(CalcPipeTokenError) as exc_info:
            tokenize("1 + @ + #")

        assert exc_info.value.character == '@'

    def test_error_message_is_detailed(self):
        """Test that the error message includes position and a suggestion."""
        with pytest.raises(CalcPipeTokenError, match="Unrecognized character: \\[") as exc_info:
            tokenize("[1]")

        message = str(exc_info.value)
        assert "Position: 0" in message
        assert "Suggestion: Use parentheses" in message
