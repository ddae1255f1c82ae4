'''
Integer RPN calculator.

Supports 64-bit unsigned and signed arithmetic, bitwise operators, shifts,
casts between the two, binary/decimal/hexadecimal output, and registers that
are themselves stacks. Much like dc, if dc were a programmer's calculator.

Mixing signedness promotes to signed when the right-hand operand is signed;
otherwise the left-hand operand's signedness wins. All arithmetic wraps.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .registers import Registers
from .value import Radix, Signed, Unsigned, Value


__all__ = ('Machine', 'Lexer', 'CLI', 'Registers',
           'Value', 'Unsigned', 'Signed', 'Radix')
