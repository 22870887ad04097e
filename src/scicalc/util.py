from functools import wraps
import math


class CalcError(Exception):
    pass


class LexError(CalcError):
    def __init__(self, character, position):
        super().__init__("Unexpected character {0!r} at position {1}"
                         .format(character, position))
        self.character = character
        self.position = position


class ConvertError(CalcError):
    pass


class MisplacedComma(ConvertError):
    pass


class MismatchedParentheses(ConvertError):
    pass


class EvalError(CalcError):
    pass


class UnknownConstant(EvalError):
    pass


class UnknownFunction(EvalError):
    pass


class DivisionByZero(EvalError):
    pass


class DomainError(EvalError):
    pass


class StackUnderflow(EvalError):
    pass


class MalformedStack(EvalError):
    pass


class SessionError(CalcError):
    pass


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts stray exceptions to evaluation errors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise EvalError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def ieee(overflow=lambda *args: math.inf):
    '''
    Make a math module function answer like its C counterpart.

    math raises where libm returns NaN (domain) or ±inf (range). Domain errors
    become NaN, overflows become whatever overflow(*args) says.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args):
            try:
                return f(*args)
            except OverflowError:
                return overflow(*args)
            except ValueError:
                return math.nan
        return wrapper
    return decorator
