from functools import reduce
import logging
import operator

import regex

from . import tokens
from .tokens import Kind, Token
from .table import Function, Operator, isconstant
from .util import LexError


logger = logging.getLogger(__name__)


class Lexer:
    '''
    Lexer for infix expressions, a *regular* grammar.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Number. ASCII digits only; float() would take any Unicode digit.
    NUMBER = r'''
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  [0-9]+
                  (?:
                      \.
                      [0-9]*
                  )?
              )|(?:
                  # .2, but not a lone .
                  \.
                  [0-9]+
              )
              '''
    # Function or constant name. Stops at digits and dots, so sin2 is sin 2.
    IDENTIFIER = r'[A-Za-z_$]+'

    assert not [op
                for op
                in Operator
                if len(op.value) != 1]
    OPERATOR = r'(?:' + r'|'.join(regex.escape(op.value)
                                  for op
                                  in Operator) + r')'
    SPACE = r'\s+'

    # All possible lexemes. Exactly one group matches.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<comma>,)|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all lexemes, whitespace included.

        Doesn't yield incomplete or incorrect lexemes, raising on first bad.
        '''
        position = 0
        while position < len(line):
            match = self.PATTERN.match(line, position)
            if match is None:
                raise LexError(line[position], position)
            yield match
            position = match.end()

    def isfeedable(self, match):
        '''
        Return True if lexeme means anything to the converter.
        '''
        return match.lastgroup != 'space'

    def classify(self, match):
        '''
        Turn a feedable lexeme match into a token.
        '''
        group = match.lastgroup
        text = match.group()
        if group == 'number':
            return tokens.number(text)
        elif group == 'identifier':
            function = Function.lookup(text)
            if function is not None:
                return Token(Kind.FUNCTION, text, function)
            elif isconstant(text):
                return Token(Kind.CONSTANT, text)
            return Token(Kind.IDENTIFIER, text)
        elif group == 'operator':
            return tokens.operator(Operator(text))
        elif group == 'lparen':
            return tokens.LEFT_PAREN
        elif group == 'rparen':
            return tokens.RIGHT_PAREN
        elif group == 'comma':
            return tokens.COMMA
        raise ValueError('Not a feedable lexeme: {!r}'.format(text))

    def tokenize(self, line):
        '''
        Return the tokens of line, in source order.
        '''
        result = [self.classify(match)
                  for match
                  in self.lex(line)
                  if self.isfeedable(match)]
        logger.debug('tokens: %s', ' '.join(map(str, result)))
        return result


def tokenize(line):
    return Lexer().tokenize(line)
