from collections import deque
import operator

from .util import EndOfStack
from .op import CalcOp, CastOp, ControlOp, PrintOp, Push, RegOp, StackOp
from .value import Radix, Value
from .lexer import Lexer
from .registers import Registers


class Machine:
    '''
    Integer stack machine (RPN calculator).

    Takes operations and runs them. Every operation either completes or
    raises an RPNError with the stack, registers and radix left as they were.
    '''

    DEFAULT_RADIX = Radix.DEC

    # Value operators, applied to the deepest operand first: 9 2 ^ is 9**2.
    CALCULATIONS = {
        CalcOp.ADD: operator.__add__,
        CalcOp.SUB: operator.__sub__,
        CalcOp.MUL: operator.__mul__,
        CalcOp.DIV: operator.__truediv__,
        CalcOp.MOD: operator.__mod__,
        CalcOp.POW: operator.__pow__,
        CalcOp.AND: operator.__and__,
        CalcOp.OR: operator.__or__,
        CalcOp.XOR: operator.__xor__,
        CalcOp.NOT: operator.__invert__,
        CalcOp.SHL: operator.__lshift__,
        CalcOp.SHR: operator.__rshift__,
    }
    UNARY = {CalcOp.NOT}

    CASTS = {
        CastOp.U: Value.to_unsigned,
        CastOp.I: Value.to_signed,
    }

    def __init__(self, output=None):
        '''
        Create empty stack machine.

        :param output: File to print to. Standard output, as of each print, if
                       not given.
        '''
        self.stack = deque()
        self.registers = Registers()
        self.radix = type(self).DEFAULT_RADIX
        self.output = output
        self.lexer = Lexer()

    def feed(self, token):
        '''
        Parse and run a single token.

        Return True if the machine should quit.
        '''
        return self.op(self.lexer.parse(token))

    def op(self, operation):
        '''
        Run a parsed operation.

        Return True if the machine should quit.
        '''
        if operation is ControlOp.QUIT:
            return True
        elif isinstance(operation, Push):
            self._pshstack(operation.value)
        elif isinstance(operation, CalcOp):
            self.calculate(operation)
        elif isinstance(operation, CastOp):
            self.cast(operation)
        else:
            type(self).FUNCTIONS[operation](self)
        return False

    def top(self):
        '''
        Return the element on the top of the stack, None if empty.
        '''
        return self.stack[-1] if self.stack else None

    def print(self, value):
        '''
        Print value in the current output radix.
        '''
        print(self.radix.format(value), file=self.output)

    def calculate(self, calcop):
        '''
        Replace the operand(s) on top of the stack by the result of calcop.
        '''
        arity = 1 if calcop in type(self).UNARY else 2
        self._mapstack(type(self).CALCULATIONS[calcop], arity)

    def cast(self, castop):
        '''
        Reinterpret the element on top of the stack as the other variant.
        '''
        self._mapstack(type(self).CASTS[castop], 1)

    def _mapstack(self, f, n):
        '''
        Replace the top n elements with f applied to them, deepest first.
        '''
        res = f(*self._peekstack(n))
        self._popstack(n)
        self._pshstack(res)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    pshstack = _pshstack

    def _peekstack(self, n=1):
        '''
        Return top n elements of the stack, deepest first, leaving them.
        '''
        if len(self.stack) < n:
            raise EndOfStack()
        return [self.stack[i] for i in range(-n, 0)]

    def _popstack(self, n=1):
        '''
        Pop specified number of elements from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise EndOfStack()
        return [self.stack.pop() for _ in range(n)]

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def printtop(self):
        '''
        Print the element on the top of the stack, if any.
        '''
        if self.stack:
            self.print(self.stack[-1])

    def printstack(self):
        '''
        Print all elements on the stack, bottom of the stack first.
        '''
        for value in self.stack:
            self.print(value)

    def dupstack(self):
        '''
        Duplicate element at top of stack.
        '''
        self._pshstack(*self._peekstack())

    def popstack(self):
        '''
        Pop and print element at top of stack.
        '''
        self.print(self._popstack()[0])

    def revstack(self):
        '''
        Swap two elements at top of stack.
        '''
        self._pshstack(*self._popstack(n=2))

    def storeradix(self):
        '''
        Pop the output radix: 2, 10 or 16.
        '''
        value, = self._peekstack()
        self.radix = Radix.from_value(value)
        self._popstack()

    def store(self):
        '''
        Pop a register id, then push the value below it onto that register.
        '''
        value, id = self._peekstack(2)
        self.registers.push(id, value)
        self._popstack(2)

    def load(self):
        '''
        Replace register id on top of stack by the register's last value.
        '''
        id, = self._peekstack()
        value = self.registers.get(id)
        self._popstack()
        self._pshstack(value)

    def loadpop(self):
        '''
        Like load, but also removes the value from the register.
        '''
        id, = self._peekstack()
        value = self.registers.pop(id)
        self._popstack()
        self._pshstack(value)

    def printregister(self):
        '''
        Pop a register id and print its contents, oldest first.
        '''
        id, = self._peekstack()
        values = self.registers.dump(id)
        self._popstack()
        for value in values:
            self.print(value)

    # Non-calculating operations.
    FUNCTIONS = {
        StackOp.POP: popstack,
        StackOp.DUP: dupstack,
        StackOp.CLEAR: clrstack,
        StackOp.REV: revstack,
        PrintOp.PRINT: printtop,
        PrintOp.DUMP: printstack,
        PrintOp.OUTPUT: storeradix,
        RegOp.PUSH: store,
        RegOp.GET: load,
        RegOp.POP: loadpop,
        RegOp.DUMP: printregister,
    }
