from enum import Enum
from typing import Any, NamedTuple


class Kind(Enum):
    NUMBER = 'number'
    OPERATOR = 'operator'
    FUNCTION = 'function'
    LEFT_PAREN = 'lparen'
    RIGHT_PAREN = 'rparen'
    COMMA = 'comma'
    CONSTANT = 'constant'
    # Name the lexer couldn't resolve. Only fails once evaluated.
    IDENTIFIER = 'identifier'


class Token(NamedTuple):
    '''
    One lexeme, classified.

    value is the float for numbers, the Operator for operators and the
    Function for functions. Everything else only needs its text.
    '''
    kind: Kind
    text: str
    value: Any = None

    def __str__(self):
        return self.text


def number(text):
    return Token(Kind.NUMBER, text, float(text))


def operator(op):
    return Token(Kind.OPERATOR, op.value, op)


def function(f):
    return Token(Kind.FUNCTION, f.value, f)


LEFT_PAREN = Token(Kind.LEFT_PAREN, '(')
RIGHT_PAREN = Token(Kind.RIGHT_PAREN, ')')
COMMA = Token(Kind.COMMA, ',')
