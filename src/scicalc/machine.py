from collections import deque
from enum import Enum
import logging
import math

from .tokens import Kind
from .table import (ARGUMENT, CONSTANTS, FUNCTIONS, MEMORY, OPERATORS,
                    RESULT)
from .util import (EvalError, MalformedStack, StackUnderflow,
                   UnknownConstant, UnknownFunction, wrap_user_errors)


logger = logging.getLogger(__name__)


class AngleMode(Enum):
    RADIANS = 'rad'
    DEGREES = 'deg'


class Machine:
    '''
    Arithmetic stack machine, run over one RPN token sequence.

    Holds no state beyond the evaluation at hand: the angle mode and memory
    value are handed in by whoever owns them.
    '''

    def __init__(self, angle_mode=AngleMode.RADIANS, memory=0.0):
        '''
        Create empty stack machine.

        :param angle_mode: How trigonometric functions read and write angles.
        :param memory: Value recalled by the M constant.
        '''
        self.stack = deque()
        self.angle_mode = angle_mode
        self.memory = memory

    def feed(self, token):
        '''
        Stack or run one RPN token on machine.
        '''
        if token.kind is Kind.NUMBER:
            self._pshstack(token.value)
        elif token.kind is Kind.CONSTANT:
            self._pshstack(self._constant(token.text))
        elif token.kind is Kind.OPERATOR:
            self._apply(token.text, 2, OPERATORS[token.value])
        elif token.kind is Kind.FUNCTION:
            self._function(token.value)
        elif token.kind is Kind.IDENTIFIER:
            raise UnknownFunction('Unknown function: {}'.format(token.text))
        else:
            raise EvalError('Unexpected token in RPN evaluation: {}'
                            .format(token.text))

    def result(self):
        '''
        Return the single value left on the stack.
        '''
        if len(self.stack) != 1:
            raise MalformedStack('Evaluation error: stack has {} elements '
                                 'after evaluation'.format(len(self.stack)))
        return self.stack[0]

    def _constant(self, name):
        name = name.lower()
        if name == MEMORY:
            return self.memory
        try:
            return CONSTANTS[name]
        except KeyError:
            raise UnknownConstant('Unknown constant: {}'.format(name)) \
                from None

    def _function(self, function):
        '''
        Run function, converting angles per the machine's angle mode.
        '''
        spec = FUNCTIONS[function]
        impl = spec.impl
        if self.angle_mode is AngleMode.DEGREES:
            if spec.angle == ARGUMENT:
                impl = _radians_in(impl)
            elif spec.angle == RESULT:
                impl = _degrees_out(impl)
        self._apply(function.value, spec.arity, impl)

    @wrap_user_errors('Error evaluating function: {1}')
    def _apply(self, name, arity, impl):
        '''
        Pop arity arguments, leftmost deepest, and push impl applied to them.
        '''
        # If you don't reverse, you'll do 2**9 when you say 9 ^ 2 instead of
        # 9**2.
        args = reversed(self._popstack(arity))
        self._pshstack(impl(*args))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise StackUnderflow('Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]


def _radians_in(f):
    return lambda x: f(math.radians(x))


def _degrees_out(f):
    return lambda x: math.degrees(f(x))


def evaluate(rpn, angle_mode=AngleMode.RADIANS, memory=0.0):
    '''
    Run RPN token sequence and return its value.

    :raises EvalError: on the first failure; nothing partial is returned.
    '''
    machine = Machine(angle_mode=angle_mode, memory=memory)
    for token in rpn:
        machine.feed(token)
    result = machine.result()
    logger.debug('result: %r', result)
    return result
