'''
Line at a time calculator session: commands, memory, angle mode, history.
'''

from collections import deque
import logging
import math

from .lexer import tokenize
from .converter import to_postfix
from .machine import AngleMode, evaluate
from .util import CalcError, SessionError


logger = logging.getLogger(__name__)


HELP = '''\
Scientific calculator - Help:
Basic usage: <number> <operator> <number>  (e.g. 3 + 4)
Operators: + - * / ^ %
Functions: sin cos tan asin acos atan sinh cosh tanh
           sqrt cbrt ln log exp pow abs floor ceil fact nCr nPr gcd lcm
Constants: pi e M (memory recall)
Angle mode: mode rad|deg (default is rad)
Memory: m+ <value>, m- <value>, mr (recall), mc (clear)
History: h (show), h <n> (show last n), !<n> (recall n), !! (repeat last)
Help: ? or help
Quit: exit or quit'''


def fmt(value):
    return '{:.10g}'.format(value)


def calculate(line, angle_mode=AngleMode.RADIANS, memory=0.0):
    '''
    Tokenize, convert and evaluate line in one go.
    '''
    return evaluate(to_postfix(tokenize(line)),
                    angle_mode=angle_mode,
                    memory=memory)


class History:
    '''
    Bounded record of evaluated lines, oldest first, numbered from 1.
    '''

    CAPACITY = 256

    def __init__(self, capacity=None):
        self.entries = deque(maxlen=capacity or type(self).CAPACITY)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def add(self, line):
        self.entries.append(line)

    def last(self, n=None):
        '''
        Return (number, line) pairs of the n most recent entries, or all.
        '''
        numbered = list(enumerate(self.entries, start=1))
        if n is None:
            return numbered
        return numbered[max(len(numbered) - n, 0):] if n > 0 else []

    def __getitem__(self, number):
        '''
        Return entry by its 1-based number, as listed.
        '''
        if not 1 <= number <= len(self.entries):
            raise SessionError('No such history entry: {}'.format(number))
        return self.entries[number - 1]


class Session:
    '''
    Calculator state owner, fed one line at a time.

    feed() returns the text to show for a line, or None, and raises CalcError
    for anything the user got wrong. Nothing is fatal; carry on with the next
    line.
    '''

    DEFAULT_ANGLE_MODE = AngleMode.RADIANS

    def __init__(self, angle_mode=None):
        self.angle_mode = angle_mode or type(self).DEFAULT_ANGLE_MODE
        self.memory = 0.0
        self.history = History()
        self.done = False

    def feed(self, line):
        '''
        Run a command or evaluate an expression.
        '''
        line = line.strip()
        words = line.lower().split()
        if not words:
            return None
        elif words[0] in {'exit', 'quit'} and len(words) == 1:
            self.done = True
            return None
        elif line.startswith('?') or words == ['help']:
            return HELP
        elif words[0] == 'mode':
            return self.mode(*words[1:])
        elif line[:2] in {'m+', 'm-'}:
            return self.memorize(line[1], line[2:])
        elif words == ['mr']:
            return 'Memory recall: {}'.format(fmt(self.memory))
        elif words == ['mc']:
            self.memory = 0.0
            return 'Memory cleared'
        elif words[0] == 'h':
            return self.show_history(*words[1:])
        elif line.startswith('!'):
            return self.recall(line[1:].strip())
        return 'Result: {}'.format(fmt(self.calculate(line)))

    def calculate(self, line):
        '''
        Evaluate expression with current state, recording it in history.

        Lines which don't even tokenize aren't worth remembering.
        '''
        tokens = tokenize(line)
        self.history.add(line)
        return evaluate(to_postfix(tokens),
                        angle_mode=self.angle_mode,
                        memory=self.memory)

    def mode(self, *args):
        '''
        Set angle mode, or report it.
        '''
        if not args:
            return 'Angle mode is {}'.format(self.angle_mode.name)
        if len(args) != 1 or args[0] not in {m.value for m in AngleMode}:
            raise SessionError('Unknown angle mode: {}'.format(' '.join(args)))
        self.angle_mode = AngleMode(args[0])
        logger.debug('angle mode %s', self.angle_mode)
        return 'Angle mode set to {}'.format(self.angle_mode.name)

    def memorize(self, sign, operand):
        '''
        Add (sign +) or subtract (sign -) operand to memory.

        The operand is any expression, evaluated before memory changes.
        '''
        if not operand.strip():
            raise SessionError('Invalid memory operation')
        try:
            value = calculate(operand,
                              angle_mode=self.angle_mode,
                              memory=self.memory)
        except CalcError as e:
            raise SessionError('Invalid memory operation', e) from e
        if sign == '+':
            self.memory += value
            verb = 'added to'
        else:
            self.memory -= value
            verb = 'subtracted from'
        return 'Memory slot {}: {}'.format(verb, fmt(math.fabs(value)))

    def show_history(self, *args):
        '''
        List all history entries, or only the last n.
        '''
        if len(args) > 1:
            raise SessionError('Usage: h [n]')
        n = None
        if args:
            try:
                n = int(args[0])
            except ValueError:
                raise SessionError('Not a count: {}'.format(args[0])) \
                    from None
        return '\n'.join('{}: {}'.format(number, line)
                         for number, line
                         in self.history.last(n)) or None

    def recall(self, which):
        '''
        Re-run the last history entry (!!), or entry number which (!n).
        '''
        if which == '!':
            if not self.history:
                raise SessionError('No history yet')
            line = self.history[len(self.history)]
        else:
            try:
                number = int(which)
            except ValueError:
                raise SessionError('Not a history entry: !{}'.format(which)) \
                    from None
            line = self.history[number]
        return '{}\nResult: {}'.format(line, fmt(self.calculate(line)))
