from functools import reduce
import operator

import regex

from .util import InvalidInput
from .op import OPERATIONS, Push
from .value import Signed, Unsigned, MASK, SIGN


class Lexer:
    '''
    Lexer for the RPN *regular* grammar.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Tokens are separated by ASCII whitespace only
    TOKEN = r'[^\x20\t\n\r\f\v]+'

    # Magnitudes take an optional sign, like the fixed width integer parsers
    # of other languages: unsigned ones only +, signed ones + or -.
    # Only one alternative ever matches a token, so there's no falling back
    # from a bad 0x to decimal.
    LITERAL = r'''
               (?<bin>
                   # 0b101, 0b+101
                   0b
                   (?<magnitude> \+? [01]+ )
               )|(?<negbin>
                   # -0b101; the magnitude is signed, so -0b-1 is 1
                   -0b
                   (?<magnitude> [+-]? [01]+ )
               )|(?<hex>
                   # 0xff, 0xFF
                   0x
                   (?<magnitude> \+? [0-9a-fA-F]+ )
               )|(?<neghex>
                   -0x
                   (?<magnitude> [+-]? [0-9a-fA-F]+ )
               )|(?<dec>
                   # Unsigned if it fits, else signed: 5, +5, -5
                   (?<magnitude> [+-]? [0-9]+ )
               )
               '''
    BASES = {
        'bin': 2,
        'negbin': 2,
        'hex': 16,
        'neghex': 16,
        'dec': 10,
    }
    NEGATED = {'negbin', 'neghex'}
    # Most digits a 64-bit magnitude can need, per base
    WIDTHS = {
        2: 64,
        10: 20,
        16: 16,
    }

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all its tokens, left to right.
        '''
        for match in regex.finditer(type(self).TOKEN, line,
                                    flags=type(self).FLAGS):
            yield match.group(0)

    def parse(self, token):
        '''
        Parse token into an operation; literals become a Push.
        '''
        try:
            return OPERATIONS[token]
        except KeyError:
            return Push(self.parse_value(token))

    def parse_value(self, token):
        '''
        Parse literal token into a Value.
        '''
        match = regex.fullmatch(type(self).LITERAL, token,
                                flags=type(self).FLAGS)
        if match is None:
            raise InvalidInput(token)
        kind, = self.matchedgroups(match).keys() - {'magnitude'}
        magnitude = match.group('magnitude')
        base = type(self).BASES[kind]
        # Any number of leading zeros is fine; too many digits never fits,
        # and would be slow (or refused) to convert.
        sign = magnitude[0] if magnitude[0] in '+-' else ''
        digits = magnitude[len(sign):].lstrip('0') or '0'
        if len(digits) > type(self).WIDTHS[base]:
            raise InvalidInput(token)
        magnitude = sign + digits
        n = int(magnitude, base)
        if kind in type(self).NEGATED:
            if -SIGN <= n < SIGN:
                return Signed(-n)
        elif kind == 'dec':
            if not magnitude.startswith('-') and n <= MASK:
                return Unsigned(n)
            elif -SIGN <= n < SIGN:
                return Signed(n)
        elif n <= MASK:
            return Unsigned(n)
        raise InvalidInput(token)

    def matchedgroups(self, match):
        '''
        Return the groups that took part in match.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value is not None}
