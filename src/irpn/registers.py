from .util import EndOfRegister, wrap_user_errors


class Registers:
    '''
    Register bank: a stack of values per register id.

    Ids are themselves values, so Unsigned(1) and Signed(1) name different
    registers.
    '''

    def __init__(self):
        self.registers = dict()

    def __contains__(self, id):
        return bool(self.registers.get(id))

    def push(self, id, value):
        '''
        Push value onto register id, creating it if need be.
        '''
        self.registers.setdefault(id, []).append(value)

    @wrap_user_errors(lambda self, id: EndOfRegister(id))
    def get(self, id):
        '''
        Return the value last pushed onto register id, leaving it there.
        '''
        return self.registers[id][-1]

    @wrap_user_errors(lambda self, id: EndOfRegister(id))
    def pop(self, id):
        '''
        Remove and return the value last pushed onto register id.
        '''
        return self.registers[id].pop()

    def dump(self, id):
        '''
        Return the contents of register id, oldest first.

        Empty if there's no such register.
        '''
        if id not in self:
            return ()
        return tuple(self.registers[id])
