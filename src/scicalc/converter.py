'''
Infix to postfix (RPN) conversion, by way of Dijkstra's shunting-yard.

Functions are stack operators that bind tighter than anything else, so f(x)
always completes before any enclosing binary operator. Unary signs are
rewritten as the one argument functions uplus and uminus, which lets the
machine treat them like any other function.
'''

import logging

from . import tokens
from .tokens import Kind
from .table import Function, Operator
from .util import ConvertError, MisplacedComma, MismatchedParentheses


logger = logging.getLogger(__name__)

# Tokens after which a sign can only be unary.
_PREFIXES = {Kind.OPERATOR, Kind.LEFT_PAREN, Kind.COMMA,
             Kind.FUNCTION, Kind.IDENTIFIER}
_SIGNS = {
    Operator.ADD: tokens.function(Function.UPLUS),
    Operator.SUB: tokens.function(Function.UMINUS),
}


def isunary(previous, token):
    '''
    Return True if operator token is a sign, given the token before it.
    '''
    return token.value in _SIGNS and \
        (previous is None or previous.kind in _PREFIXES)


def _isfunction(token):
    return token.kind in {Kind.FUNCTION, Kind.IDENTIFIER}


def _yields(top, op):
    '''
    Return True if stacked top must be output before pushing op.
    '''
    if _isfunction(top):
        return True
    if top.kind is not Kind.OPERATOR:
        return False
    if op.right_associative:
        return op.precedence < top.value.precedence
    return op.precedence <= top.value.precedence


def to_postfix(infix):
    '''
    Return the RPN equivalent of the infix token sequence.

    :raises ConvertError: on misplaced commas or unbalanced parentheses.
    '''
    output = []
    stack = []
    previous = None
    for token in infix:
        if token.kind in {Kind.NUMBER, Kind.CONSTANT}:
            output.append(token)
        elif _isfunction(token):
            stack.append(token)
        elif token.kind is Kind.COMMA:
            while stack and stack[-1].kind is not Kind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise MisplacedComma('Error: misplaced comma or mismatched '
                                     'parentheses')
        elif token.kind is Kind.OPERATOR:
            if isunary(previous, token):
                stack.append(_SIGNS[token.value])
            else:
                while stack and _yields(stack[-1], token.value):
                    output.append(stack.pop())
                stack.append(token)
        elif token.kind is Kind.LEFT_PAREN:
            stack.append(token)
        elif token.kind is Kind.RIGHT_PAREN:
            while stack and stack[-1].kind is not Kind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParentheses('Error: mismatched parentheses')
            stack.pop()
            # Attach function to its now complete argument list.
            if stack and _isfunction(stack[-1]):
                output.append(stack.pop())
        else:
            raise ConvertError('Unknown token in parsing: {}'.format(token))
        previous = token

    while stack:
        token = stack.pop()
        if token.kind in {Kind.LEFT_PAREN, Kind.RIGHT_PAREN}:
            raise MismatchedParentheses('Error: mismatched parentheses')
        output.append(token)

    logger.debug('rpn: %s', ' '.join(map(str, output)))
    return output
