'''
Scientific expression calculator.

Reads infix arithmetic, one line at a time: the usual operators with their
usual precedence, unary signs, function calls, pi, e and a memory slot.

Each line goes through three stages:

- the lexer turns text into tokens,
- the converter reorders tokens into postfix (RPN), shunting-yard style,
- the machine runs the RPN on a stack and leaves a single number.

Around that, a session handles the commands which aren't expressions (angle
mode, memory, history, help), and the CLI feeds it lines.
'''

from .cli import CLI
from .lexer import Lexer, tokenize
from .converter import to_postfix
from .machine import AngleMode, Machine, evaluate
from .session import Session, calculate
from .util import CalcError, LexError, ConvertError, EvalError


__all__ = ('CLI', 'Lexer', 'Machine', 'Session', 'AngleMode',
           'tokenize', 'to_postfix', 'evaluate', 'calculate',
           'CalcError', 'LexError', 'ConvertError', 'EvalError')
