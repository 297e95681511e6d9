"""Arithmetic expression evaluation utilities."""

import re
from typing import List, Optional, Tuple, Union

Number = Union[int, float]

_ALLOWED_CHARS = re.compile(r'[^0-9+\-*/().\s]')
_TOKEN = re.compile(r'\d+\.?\d*|\.\d+|[+\-*/()]')


class _ParseError(Exception):
    """Raised internally when the token stream is not a valid expression."""


def sanitize_expression(text: str) -> str:
    """
    Strip everything that is not a digit, operator, parenthesis or dot.

    Whitespace is removed as well, so "7 5" reads as 75.
    """
    if not text:
        return ""
    cleaned = _ALLOWED_CHARS.sub('', text)
    return re.sub(r'\s+', '', cleaned)


def tokenize(text: str) -> List[str]:
    """
    Split a sanitized expression into number and operator tokens.

    Raises:
        _ParseError: If some characters could not be tokenized
    """
    tokens = _TOKEN.findall(text)
    if ''.join(tokens) != text:
        raise _ParseError(f"Unexpected characters in '{text}'")
    return tokens


class _Parser:
    """Recursive-descent parser over a token list.

    Grammar:
        expr   := term (('+' | '-') term)*
        term   := factor (('*' | '/') factor)*
        factor := ('+' | '-') factor | NUMBER | '(' expr ')'
    """

    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> str:
        token = self.peek()
        if token is None:
            raise _ParseError("Unexpected end of expression")
        self.pos += 1
        return token

    def parse(self) -> Number:
        value = self.expr()
        if self.peek() is not None:
            raise _ParseError(f"Unexpected token '{self.peek()}'")
        return value

    def expr(self) -> Number:
        value = self.term()
        while self.peek() in ('+', '-'):
            op = self.take()
            rhs = self.term()
            value = value + rhs if op == '+' else value - rhs
        return value

    def term(self) -> Number:
        value = self.factor()
        while self.peek() in ('*', '/'):
            op = self.take()
            rhs = self.factor()
            if op == '*':
                value = value * rhs
            else:
                if rhs == 0:
                    raise ZeroDivisionError("division by zero")
                value = value / rhs
        return value

    def factor(self) -> Number:
        token = self.take()
        if token == '+':
            return self.factor()
        if token == '-':
            return -self.factor()
        if token == '(':
            value = self.expr()
            if self.take() != ')':
                raise _ParseError("Missing closing parenthesis")
            return value
        if token in ('*', '/', ')'):
            raise _ParseError(f"Unexpected token '{token}'")
        return float(token) if '.' in token else int(token)


def _normalize(value: Number) -> Number:
    """Collapse integral floats back to int (300.0 -> 300)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def evaluate_expression(text: Optional[str]) -> Optional[Number]:
    """
    Evaluate an arithmetic expression with standard precedence.

    Characters outside digits, + - * /, parentheses and dots are ignored.
    Empty or unparseable input and division by zero yield None.

    Args:
        text: Expression as typed or built from clicks (e.g. "75 * 4")

    Returns:
        The numeric value, or None if the expression is invalid
    """
    if not text or not text.strip():
        return None

    sanitized = sanitize_expression(text)
    if sanitized == '':
        return None

    try:
        result = _Parser(tokenize(sanitized)).parse()
    except (_ParseError, ZeroDivisionError, ValueError):
        return None

    return _normalize(result)


def check_expression(text: str, claimed: Number) -> Tuple[bool, Optional[Number]]:
    """
    Compare a claimed result with the evaluated expression.

    Returns:
        Tuple of (matches, evaluated_value)
    """
    value = evaluate_expression(text)
    if value is None:
        return False, None
    return abs(value - claimed) < 1e-9, value
