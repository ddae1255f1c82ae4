from io import StringIO

from pytest import fixture

from irpn.machine import Machine


@fixture
def output():
    return StringIO()


@fixture
def machine(output):
    '''
    Machine printing into the output fixture rather than stdout.
    '''
    return Machine(output=output)


@fixture
def run(machine):
    '''
    Feed every token of a line to the machine, stopping on quit.

    Returns True if it quit.
    '''
    def run(line):
        for token in line.split():
            if machine.feed(token):
                return True
        return False
    return run
