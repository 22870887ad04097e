'''
Lexer tests
'''

import regex

from scicalc.util import LexError
from scicalc.lexer import Lexer, tokenize
from scicalc.table import Function, Operator
from scicalc.tokens import Kind

from pytest import raises


def kinds(line):
    return [t.kind for t in tokenize(line)]


def test_numbers():
    assert [t.value for t in tokenize('1 12.5 .25 3.')] == [1, 12.5, .25, 3]


def test_second_dot_starts_new_number():
    assert [t.text for t in tokenize('1.2.3')] == ['1.2', '.3']


def test_operators_and_structure():
    assert kinds('(1+2)*3,4') == [Kind.LEFT_PAREN, Kind.NUMBER,
                                  Kind.OPERATOR, Kind.NUMBER,
                                  Kind.RIGHT_PAREN, Kind.OPERATOR,
                                  Kind.NUMBER, Kind.COMMA, Kind.NUMBER]
    assert [t.value for t in tokenize('+ - * / % ^')] == list(Operator)


def test_functions_ignore_case():
    found = tokenize('SIN Cos nCr NPR factorial')
    assert {t.kind for t in found} == {Kind.FUNCTION}
    assert [t.value for t in found] == [Function.SIN, Function.COS,
                                        Function.NCR, Function.NPR,
                                        Function.FACTORIAL]
    # Keeps what was typed.
    assert found[0].text == 'SIN'


def test_constants():
    assert kinds('pi PI e E M m') == [Kind.CONSTANT] * 6


def test_unknown_names_are_deferred():
    assert kinds('foo(1)')[0] is Kind.IDENTIFIER
    assert kinds('$x_y')[0] is Kind.IDENTIFIER


def test_sign_functions_are_not_names():
    assert kinds('uminus')[0] is Kind.IDENTIFIER


def test_identifier_stops_at_digits():
    found = tokenize('sin2.5')
    assert [t.kind for t in found] == [Kind.FUNCTION, Kind.NUMBER]
    assert found[1].value == 2.5


def test_whitespace_only():
    assert tokenize(' \t ') == []


def test_unexpected_character():
    with raises(LexError, match=regex.escape("Unexpected character '#' "
                                             "at position 2")) as info:
        tokenize('2 # 3')
    assert info.value.character == '#'
    assert info.value.position == 2


def test_lone_dot():
    with raises(LexError) as info:
        tokenize('1 + .')
    assert info.value.position == 4


def test_lex_yields_space():
    l = Lexer()
    matches = list(l.lex('1 +2'))
    assert [m.group() for m in matches] == ['1', ' ', '+', '2']
    assert [l.isfeedable(m) for m in matches] == [True, False, True, True]
