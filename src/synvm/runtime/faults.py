class Fault(Exception):
    ''' Fatal machine condition; moves the machine to ERRORED '''
    pass


class InvalidOperand(Fault):
    pass


class UnknownOpcode(Fault):
    pass


class StackUnderflow(Fault):
    pass


class DivisionByZero(Fault):
    pass


class InvalidAddress(Fault):
    pass


class InputExhausted(Fault):
    pass


class InvalidInput(Fault):
    pass
