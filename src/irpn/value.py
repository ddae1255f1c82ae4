'''
64-bit integer values.

A Value is either Unsigned or Signed. Binary operators promote their operands
following a fixed table, keyed on the left (deeper) operand first:

    Unsigned ∘ Unsigned -> Unsigned
    Unsigned ∘ Signed   -> Signed
    Signed   ∘ Unsigned -> Signed
    Signed   ∘ Signed   -> Signed

Moving a payload between the two variants reinterprets its two's complement
bit pattern, and every result wraps modulo 2**64.
'''

from enum import Enum
import operator

from .util import BadRadix, DivideByZero, wrap_user_errors


BITS = 64
MODULUS = 1 << BITS
MASK = MODULUS - 1
SIGN = 1 << (BITS - 1)
U32 = (1 << 32) - 1


def _unsigned(n):
    return n & MASK


def _signed(n):
    n &= MASK
    return n - MODULUS if n & SIGN else n


def _truncdiv(x, y):
    '''
    Integer division rounding toward zero, unlike Python's floor division.
    '''
    quotient = abs(x) // abs(y)
    return -quotient if (x < 0) != (y < 0) else quotient


def _truncmod(x, y):
    '''
    Remainder of _truncdiv. Takes the sign of the dividend.
    '''
    return x - y * _truncdiv(x, y)


class Value:
    '''
    A 64-bit integer: an Unsigned or a Signed.

    Not instantiated directly. Constructing a variant from an int wraps it
    into range; constructing it from another Value reinterprets that value's
    bit pattern.
    '''

    __slots__ = '_payload',

    SUFFIX = None

    def __init__(self, payload):
        if isinstance(payload, Value):
            payload = payload.payload
        self._payload = self._wrap(int(payload))

    @staticmethod
    def _wrap(n):
        raise NotImplementedError

    @property
    def payload(self):
        return self._payload

    @property
    def bits(self):
        '''
        Payload's bit pattern, as a non-negative int.
        '''
        return _unsigned(self.payload)

    def is_zero(self):
        return self.payload == 0

    def as_u32(self):
        '''
        Low 32 bits of the bit pattern.
        '''
        return self.payload & U32

    def to_unsigned(self):
        return Unsigned(self)

    def to_signed(self):
        return Signed(self)

    def _promote(self, other):
        '''
        Return result variant, and both payloads converted to it.
        '''
        if isinstance(self, Unsigned):
            if isinstance(other, Unsigned):
                return Unsigned, self.payload, other.payload
            elif isinstance(other, Signed):
                return Signed, _signed(self.payload), other.payload
        elif isinstance(self, Signed):
            if isinstance(other, Unsigned):
                return Signed, self.payload, _signed(other.payload)
            elif isinstance(other, Signed):
                return Signed, self.payload, other.payload
        raise TypeError('Cannot promote {!r} and {!r}'.format(self, other))

    def _binary(self, other, f):
        if not isinstance(other, Value):
            return NotImplemented
        variant, left, right = self._promote(other)
        return variant(f(left, right))

    def __add__(self, other):
        return self._binary(other, operator.__add__)

    def __sub__(self, other):
        return self._binary(other, operator.__sub__)

    def __mul__(self, other):
        return self._binary(other, operator.__mul__)

    def __truediv__(self, other):
        '''
        Integer division, truncating toward zero.
        '''
        if isinstance(other, Value) and other.is_zero():
            raise DivideByZero()
        return self._binary(other, _truncdiv)

    def __mod__(self, other):
        if isinstance(other, Value) and other.is_zero():
            raise DivideByZero()
        return self._binary(other, _truncmod)

    def __pow__(self, other):
        '''
        Raise to the low 32 bits of other, taken as unsigned.

        Negative exponents therefore become large ones.
        '''
        def power(base, _):
            return pow(base, other.as_u32(), MODULUS)
        return self._binary(other, power)

    def __and__(self, other):
        return self._binary(other, operator.__and__)

    def __or__(self, other):
        return self._binary(other, operator.__or__)

    def __xor__(self, other):
        return self._binary(other, operator.__xor__)

    # Shift counts are taken as unsigned; anything from 64 up shifts out every
    # bit, leaving 0, or -1 for a negative Signed shifted right.
    def __lshift__(self, other):
        return self._binary(other,
                            lambda n, count: n << min(_unsigned(count), BITS))

    def __rshift__(self, other):
        return self._binary(other,
                            lambda n, count: n >> min(_unsigned(count), BITS))

    def __invert__(self):
        return type(self)(~self.payload)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) is type(other) and self.payload == other.payload

    def __hash__(self):
        return hash((type(self).__name__, self.payload))

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.payload)

    def __str__(self):
        return format(self, '')

    def __format__(self, spec):
        '''
        Format as decimal ('' or right aligned 'd'), 'b' or 'x'.

        Binary and hexadecimal show the full, zero padded bit pattern. All
        carry the variant's suffix.
        '''
        if spec == 'b':
            text = '0b{:064b}'.format(self.bits)
        elif spec == 'x':
            text = '0x{:016x}'.format(self.bits)
        elif spec == 'd':
            text = '{:>20d}'.format(self.payload)
        elif not spec:
            text = str(self.payload)
        else:
            raise ValueError('Unknown format code {!r} for {}'.format(
                spec, type(self).__name__))
        return text + self.SUFFIX


class Unsigned(Value):
    __slots__ = ()

    SUFFIX = 'u64'
    _wrap = staticmethod(_unsigned)


class Signed(Value):
    __slots__ = ()

    SUFFIX = 'i64'
    _wrap = staticmethod(_signed)


class Radix(Enum):
    '''
    Output numeral base.
    '''
    BIN = 2
    DEC = 10
    HEX = 16

    @classmethod
    @wrap_user_errors(lambda cls, value: BadRadix(value))
    def from_value(cls, value):
        '''
        Radix named by the low 32 bits of value.
        '''
        return cls(value.as_u32())

    def format(self, value):
        return format(value, _SPECS[self])


_SPECS = {
    Radix.BIN: 'b',
    Radix.DEC: 'd',
    Radix.HEX: 'x',
}
