"""Tokenizer for CalcPipe expressions."""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Union

from calcpipe.calcpipe_error import CalcPipeTokenError
from calcpipe.calcpipe_token import CalcPipeToken, CalcPipeTokenType


@dataclass(frozen=True)
class TokenRule:
    """A single tokenizer rule: what to match and how to build the token."""
    test: Union[Pattern[str], str]
    create_token: Callable[[str], CalcPipeToken]

    def match(self, expression: str, pos: int) -> Optional[str]:
        """
        Match the rule anchored at pos.

        Returns:
            The matched text, or None if the rule does not match here
        """
        if isinstance(self.test, str):
            return self.test if expression.startswith(self.test, pos) else None

        m = self.test.match(expression, pos)
        if m is None or not m.group(0):
            return None

        return m.group(0)


class CalcPipeTokenizer:
    """Tokenizes CalcPipe expressions into a flat list of tokens."""

    # Rules are tried in this order and the first one to match wins.  The
    # exponent suffix needs a digit immediately before it, so "e5" is left
    # for the identifier rule.  Only ASCII digits form numbers.
    RULES = (
        TokenRule(
            re.compile(r'(?:\d+(?:\.\d+)?|\.\d+)(?:(?<=\d)[eE][-+]?\d+)?', re.ASCII),
            lambda text: CalcPipeToken(CalcPipeTokenType.NUMBER, float(text))
        ),
        TokenRule(
            re.compile(r'[-+*/^%]'),
            lambda text: CalcPipeToken(CalcPipeTokenType.OPERATOR, text)
        ),
        TokenRule('(', lambda text: CalcPipeToken(CalcPipeTokenType.LPAREN, text)),
        TokenRule(')', lambda text: CalcPipeToken(CalcPipeTokenType.RPAREN, text)),
        TokenRule(
            re.compile(r'\$[a-zA-Z0-9]*|[a-zA-Z][a-zA-Z0-9]*'),
            lambda text: CalcPipeToken(CalcPipeTokenType.IDENTIFIER, text.lower())
        ),
        TokenRule(',', lambda text: CalcPipeToken(CalcPipeTokenType.COMMA, text)),
        TokenRule('|>', lambda text: CalcPipeToken(CalcPipeTokenType.PIPE, text)),
    )

    def tokenize(self, expression: str) -> List[CalcPipeToken]:
        """
        Tokenize a CalcPipe expression.

        Args:
            expression: The expression string to tokenize

        Returns:
            List of tokens

        Raises:
            CalcPipeTokenError: If a character matches no rule
        """
        tokens = []
        i = 0

        while i < len(expression):
            # Skip whitespace
            if expression[i].isspace():
                i += 1
                continue

            for rule in self.RULES:
                text = rule.match(expression, i)
                if text is not None:
                    tokens.append(rule.create_token(text))
                    i += len(text)
                    break

            else:
                raise CalcPipeTokenError(expression[i], i)

        return tokens
