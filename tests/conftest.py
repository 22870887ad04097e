from typing import Callable

from pytest import fixture

from scicalc.converter import to_postfix
from scicalc.lexer import tokenize
from scicalc.session import Session


@fixture
def session() -> Session:
    '''
    Fresh session: radians, empty memory and history.
    '''
    return Session()


@fixture
def rpn() -> Callable[[str], str]:
    '''
    Render the RPN of an infix expression as space separated text.
    '''
    def convert(expression: str) -> str:
        return ' '.join(map(str, to_postfix(tokenize(expression))))
    return convert
