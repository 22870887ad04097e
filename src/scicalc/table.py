'''
Operators, functions and constants known to the calculator.

Everything the converter needs (precedence, associativity) and everything the
machine needs (arity, numeric behaviour) lives here, keyed on closed enums so
that names are resolved once, by the lexer.
'''

from collections import namedtuple
from functools import reduce
from enum import Enum
import operator
import math

from .util import DivisionByZero, DomainError, ieee


class Operator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '^'

    @property
    def precedence(self):
        return PRECEDENCE[self]

    @property
    def right_associative(self):
        return self in RIGHT_ASSOCIATIVE


PRECEDENCE = {
    Operator.ADD: 2,
    Operator.SUB: 2,
    Operator.MUL: 3,
    Operator.DIV: 3,
    Operator.MOD: 3,
    Operator.POW: 4,
}
RIGHT_ASSOCIATIVE = {Operator.POW}


class Function(Enum):
    # Unary signs, as rewritten by the converter. Not lexable.
    UPLUS = 'uplus'
    UMINUS = 'uminus'

    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'
    SINH = 'sinh'
    COSH = 'cosh'
    TANH = 'tanh'
    SQRT = 'sqrt'
    CBRT = 'cbrt'
    LN = 'ln'
    LOG = 'log'
    EXP = 'exp'
    POW = 'pow'
    ABS = 'abs'
    FLOOR = 'floor'
    CEIL = 'ceil'
    FACT = 'fact'
    FACTORIAL = 'factorial'
    NCR = 'nCr'
    NPR = 'nPr'
    GCD = 'gcd'
    LCM = 'lcm'

    @classmethod
    def lookup(cls, name):
        '''
        Return the function called name, ignoring case, or None.
        '''
        return _NAMES.get(name.lower())


_NAMES = {f.value.lower(): f
          for f
          in Function
          if f not in {Function.UPLUS, Function.UMINUS}}


# Memory recall isn't a constant as such; the machine supplies it.
MEMORY = 'm'
CONSTANTS = {
    'pi': math.pi,
    'e': math.e,
}


def isconstant(name):
    name = name.lower()
    return name in CONSTANTS or name == MEMORY


# Which side of a trigonometric function sees degrees in degree mode.
ARGUMENT = 'argument'
RESULT = 'result'

FunctionSpec = namedtuple('FunctionSpec', ['arity', 'impl', 'angle'],
                          defaults=[None])


def _isoddinteger(x):
    return math.isfinite(x) and x == math.floor(x) and x % 2 == 1


def _divide(a, b):
    if b == 0:
        raise DivisionByZero('Math error: division by zero')
    return a / b


@ieee()
def _fmod(a, b):
    return math.fmod(a, b)


def _modulo(a, b):
    if b == 0:
        raise DivisionByZero('Math error: modulo by zero')
    return _fmod(a, b)


@ieee(overflow=lambda a, b: -math.inf
      if a < 0 and _isoddinteger(b)
      else math.inf)
def _power(a, b):
    '''
    a to the b, the way C's pow() answers: NaN or ±inf rather than raising.
    '''
    if a == 0 and b < 0:
        return math.copysign(math.inf, a) if _isoddinteger(b) else math.inf
    return math.pow(a, b)


def _nonnegative(name):
    def check(x):
        if x < 0:
            raise DomainError('{}: argument {:.10g} is negative'
                              .format(name, x))
        return x
    return check


def _positive(name):
    def check(x):
        if x <= 0:
            raise DomainError('{}: argument {:.10g} is not positive'
                              .format(name, x))
        return x
    return check


def _sqrt(x):
    return math.sqrt(_nonnegative('sqrt')(x))


def _ln(x):
    return math.log(_positive('ln')(x))


def _log(x):
    return math.log10(_positive('log')(x))


@ieee(overflow=lambda x: x)
def _floor(x):
    return float(math.floor(x))


@ieee(overflow=lambda x: x)
def _ceil(x):
    return float(math.ceil(x))


_sinh = ieee(overflow=lambda x: math.copysign(math.inf, x))(math.sinh)


def _round_half_up(name, x):
    if not math.isfinite(x):
        raise DomainError('{}: argument {:.10g} is not finite'.format(name, x))
    return math.floor(x + 0.5)


def _round_half_away(name, x):
    n = _round_half_up(name, abs(x))
    return n if x >= 0 else -n


def _factorial(x):
    '''
    n! as a float, for integral 0 <= n <= 170. 171! overflows a double.
    '''
    if x < 0:
        raise DomainError('fact: argument {:.10g} is negative'.format(x))
    n = _round_half_up('fact', x)
    if abs(x - n) > 1e-9:
        raise DomainError('fact: argument {:.10g} is not an integer'
                          .format(x))
    if n > 170:
        raise DomainError('fact: argument {:.10g} is too large'.format(x))
    return reduce(operator.mul, range(2, n + 1), 1.0)


def _choose_range(name, n, k):
    n = _round_half_up(name, n)
    k = _round_half_up(name, k)
    if n < 0 or k < 0 or k > n:
        raise DomainError('{}: need 0 <= k <= n, got n={}, k={}'
                          .format(name, n, k))
    return n, k


def _combinations(n, k):
    n, k = _choose_range('nCr', n, k)
    k = min(k, n - k)
    result = 1.0
    for i in range(1, k + 1):
        result = result * (n - k + i) / i
        # Monotonic from here on.
        if math.isinf(result):
            break
    return result


def _permutations(n, k):
    n, k = _choose_range('nPr', n, k)
    result = 1.0
    for i in range(k):
        result *= n - i
        if math.isinf(result):
            break
    return result


def _gcd(a, b):
    return float(math.gcd(_round_half_away('gcd', a),
                          _round_half_away('gcd', b)))


@ieee()
def _lcm(a, b):
    a = _round_half_away('lcm', a)
    b = _round_half_away('lcm', b)
    if a == 0 or b == 0:
        return 0.0
    return float(abs(a // math.gcd(a, b) * b))


OPERATORS = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: _divide,
    Operator.MOD: _modulo,
    Operator.POW: _power,
}

FUNCTIONS = {
    Function.UPLUS: FunctionSpec(1, operator.pos),
    Function.UMINUS: FunctionSpec(1, operator.neg),

    # Trigonometric
    Function.SIN: FunctionSpec(1, ieee()(math.sin), ARGUMENT),
    Function.COS: FunctionSpec(1, ieee()(math.cos), ARGUMENT),
    Function.TAN: FunctionSpec(1, ieee()(math.tan), ARGUMENT),
    Function.ASIN: FunctionSpec(1, ieee()(math.asin), RESULT),
    Function.ACOS: FunctionSpec(1, ieee()(math.acos), RESULT),
    Function.ATAN: FunctionSpec(1, math.atan, RESULT),

    # Hyperbolic, angle mode independent
    Function.SINH: FunctionSpec(1, _sinh),
    Function.COSH: FunctionSpec(1, ieee()(math.cosh)),
    Function.TANH: FunctionSpec(1, math.tanh),

    # Powers and logarithms
    Function.SQRT: FunctionSpec(1, _sqrt),
    Function.CBRT: FunctionSpec(1, math.cbrt),
    Function.LN: FunctionSpec(1, _ln),
    Function.LOG: FunctionSpec(1, _log),
    Function.EXP: FunctionSpec(1, ieee()(math.exp)),
    Function.POW: FunctionSpec(2, _power),

    # Rounding
    Function.ABS: FunctionSpec(1, math.fabs),
    Function.FLOOR: FunctionSpec(1, _floor),
    Function.CEIL: FunctionSpec(1, _ceil),

    # Combinatorics and number theory
    Function.FACT: FunctionSpec(1, _factorial),
    Function.FACTORIAL: FunctionSpec(1, _factorial),
    Function.NCR: FunctionSpec(2, _combinations),
    Function.NPR: FunctionSpec(2, _permutations),
    Function.GCD: FunctionSpec(2, _gcd),
    Function.LCM: FunctionSpec(2, _lcm),
}

assert FUNCTIONS.keys() == set(Function)
