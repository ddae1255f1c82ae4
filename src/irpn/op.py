'''
Operations understood by the machine, and the tokens naming them.

Each enum's values are the tokens themselves, so the token table is just the
union of their members. Any other token is a literal, run as a Push.
'''

from collections import namedtuple
from enum import Enum


class CalcOp(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    MOD = '%'
    POW = '^'
    AND = '&'
    OR = '|'
    XOR = 'x'
    NOT = '!'
    SHL = '<'
    SHR = '>'


class PrintOp(Enum):
    PRINT = 'p'
    DUMP = 'f'
    OUTPUT = 'o'


class StackOp(Enum):
    POP = 'n'
    DUP = 'd'
    CLEAR = 'c'
    REV = 'r'


class RegOp(Enum):
    PUSH = 's'
    GET = 'l'
    POP = 'L'
    DUMP = 'F'


class CastOp(Enum):
    U = 'u'
    I = 'i'


class ControlOp(Enum):
    QUIT = 'q'


class Push(namedtuple('Push', 'value')):
    '''
    Push a literal value onto the stack.
    '''
    __slots__ = ()


# Token to operation.
OPERATIONS = dict()
for namespace in CalcOp, PrintOp, StackOp, RegOp, CastOp, ControlOp:
    OPERATIONS.update((member.value, member) for member in namespace)

assert not [token
            for token
            in OPERATIONS
            if len(token) != 1]
