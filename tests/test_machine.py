'''
RPN machine tests
'''

import regex

from irpn.util import (BadRadix, DivideByZero, EndOfRegister, EndOfStack,
                       InvalidInput)
from irpn.machine import Machine
from irpn.op import CalcOp, ControlOp, Push, StackOp
from irpn.value import Radix, Signed, Unsigned

from pytest import mark, raises


MAX_U64 = 2**64 - 1


def lines(output):
    return [line.strip() for line in output.getvalue().splitlines()]


def test_subtract_and_print(machine, output, run):
    run('100 16 -')
    assert list(machine.stack) == [Unsigned(84)]
    run('p')
    assert lines(output) == ['84u64']


def test_session(machine, output, run):
    run('100 0x10 r r 0b1 + - 13 1 d + r s 13 l ^ 13 L / p f i d n')
    assert list(machine.stack) == [Signed(((100 - (16 + 1))**2) // 2)]
    assert lines(output) == ['3444u64', '3444u64', '3444i64']
    assert machine.registers.dump(Unsigned(13)) == ()


def test_op_returns_quit(machine):
    assert machine.op(Push(Unsigned(3))) is False
    assert machine.op(StackOp.DUP) is False
    assert machine.op(ControlOp.QUIT) is True
    assert list(machine.stack) == [Unsigned(3), Unsigned(3)]


def test_quit_leaves_stack(machine, run):
    assert run('1 2 q 3') is True
    assert list(machine.stack) == [Unsigned(1), Unsigned(2)]


def test_invalid_input(machine, run):
    run('1')
    with raises(InvalidInput, match=regex.escape("Invalid input: '1.5'")):
        machine.feed('1.5')
    assert list(machine.stack) == [Unsigned(1)]


def test_rev(machine, run):
    run('1 3 4 r')
    assert list(machine.stack) == [Unsigned(1), Unsigned(4), Unsigned(3)]


def test_rev_one(machine, run):
    run('3')
    with raises(EndOfStack, match='Stack is empty'):
        machine.feed('r')
    assert list(machine.stack) == [Unsigned(3)]


def test_dup(machine, run):
    run('-1 d')
    assert list(machine.stack) == [Signed(-1), Signed(-1)]


@mark.parametrize('token', ['d', 'n', 'u', 'i', '!', 's', 'l', 'L', 'F', 'o'])
def test_empty(machine, token):
    with raises(EndOfStack):
        machine.feed(token)
    assert not machine.stack


@mark.parametrize('token', ['+', '-', '*', '/', '%', '^', '&', '|', 'x',
                            '<', '>', 's'])
def test_one_short(machine, token):
    machine.feed('7')
    with raises(EndOfStack):
        machine.feed(token)
    assert list(machine.stack) == [Unsigned(7)]


def test_clear(machine, run):
    run('1 2 3 c')
    assert not machine.stack
    run('c')
    assert not machine.stack


def test_pop_prints(machine, output, run):
    run('1 2 n')
    assert list(machine.stack) == [Unsigned(1)]
    assert lines(output) == ['2u64']


def test_print_empty(machine, output):
    machine.feed('p')
    assert output.getvalue() == ''


def test_dump_bottom_first(machine, output, run):
    run('1 2 3 f')
    assert lines(output) == ['1u64', '2u64', '3u64']
    assert len(machine.stack) == 3


@mark.parametrize('line', ['1 0 /', '1 0 %', '1 0 i /', '1 i 0 %'])
def test_divide_by_zero(machine, run, line):
    *setup, operator = line.split()
    run(' '.join(setup))
    before = list(machine.stack)
    with raises(DivideByZero):
        machine.feed(operator)
    assert list(machine.stack) == before


@mark.parametrize('line, result', [
    ('1 2 +', Unsigned(3)),
    ('1 -1 +', Signed(0)),
    ('-1 1 +', Signed(0)),
    ('0 1 -', Unsigned(MAX_U64)),
    ('9 2 ^', Unsigned(81)),
    ('-7 2 /', Signed(-3)),
    ('-7 2 %', Signed(-1)),
    ('0b1100 0b1010 &', Unsigned(0b1000)),
    ('0b1100 0b1010 |', Unsigned(0b1110)),
    ('0b1100 0b1010 x', Unsigned(0b0110)),
    ('0 !', Unsigned(MAX_U64)),
    ('1 4 <', Unsigned(16)),
    ('16 4 >', Unsigned(1)),
    ('1 64 <', Unsigned(0)),
])
def test_calculations(machine, run, line, result):
    run(line)
    assert list(machine.stack) == [result]


def test_calculate_direct(machine):
    machine.pshstack(Unsigned(6), Unsigned(7))
    machine.calculate(CalcOp.MUL)
    assert machine.top() == Unsigned(42)


def test_cast_round_trip(machine, run):
    run('18446744073709551615 i')
    assert machine.top() == Signed(-1)
    run('u')
    assert machine.top() == Unsigned(MAX_U64)
    assert len(machine.stack) == 1


def test_output_radix(machine, output, run):
    run('16 o 255 p 2 o 5 p 10 o 5 p')
    assert lines(output) == ['0x00000000000000ffu64',
                             '0b' + '0' * 61 + '101u64',
                             '5u64']
    assert machine.radix is Radix.DEC
    assert list(machine.stack) == [Unsigned(255), Unsigned(5), Unsigned(5)]


def test_output_radix_low_bits(machine, run):
    run('0x100000010 o')
    assert machine.radix is Radix.HEX


def test_bad_radix(machine, run):
    run('16 o 7')
    with raises(BadRadix):
        machine.feed('o')
    assert machine.radix is Radix.HEX
    assert list(machine.stack) == [Unsigned(7)]


def test_registers(machine, run):
    run('42 1 s')
    assert not machine.stack
    run('1 l')
    assert list(machine.stack) == [Unsigned(42)]
    run('1 L')
    assert list(machine.stack) == [Unsigned(42), Unsigned(42)]
    with raises(EndOfRegister):
        machine.feed('1')
        machine.feed('L')
    assert list(machine.stack) == [Unsigned(42), Unsigned(42), Unsigned(1)]


def test_register_absent(machine, run):
    run('1')
    with raises(EndOfRegister, match=regex.escape('Register 1u64 is empty')):
        machine.feed('l')
    assert list(machine.stack) == [Unsigned(1)]


def test_register_ids_keep_variant(machine, run):
    run('42 1 s 1 i')
    with raises(EndOfRegister):
        machine.feed('l')
    assert list(machine.stack) == [Signed(1)]


def test_register_dump(machine, output, run):
    run('10 1 s 20 1 s 16 o 1 F')
    assert lines(output) == ['0x000000000000000au64',
                             '0x0000000000000014u64']
    assert not machine.stack
    run('1 l')
    assert machine.top() == Unsigned(20)


def test_register_dump_absent(machine, output, run):
    run('5 F')
    assert output.getvalue() == ''
    assert not machine.stack


def test_independent_machines(output):
    first = Machine(output=output)
    second = Machine(output=output)
    first.feed('1')
    first.feed('1')
    first.feed('s')
    assert not second.stack
    with raises(EndOfRegister):
        second.op(Push(Unsigned(1)))
        second.feed('l')


def test_prints_to_stdout(capsys):
    machine = Machine()
    machine.feed('3')
    machine.feed('p')
    assert capsys.readouterr().out.strip() == '3u64'
