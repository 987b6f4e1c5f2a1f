import logging as lg
from array import array
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Sequence, Tuple

import synvm.common.ops as ops
from synvm.common.hwconf import MEMORY_SIZE, NREGS, MAX_VALUE, MODULUS, REG_BASE, REG_LAST, WORD_MASK
from synvm.runtime.faults import (
    Fault, InvalidOperand, UnknownOpcode, DivisionByZero, InvalidAddress, InputExhausted,
    InvalidInput
)
from synvm.runtime.stack import Stack
from synvm.runtime.terminal import Console


Target = Tuple[List[int] | array, int]


class RunState(Enum):
    RUNNING = 'running'
    HALTED = 'halted'
    ERRORED = 'errored'


class Halt(Exception):
    pass


def is_reg(operand: int) -> bool:
    return REG_BASE <= operand <= REG_LAST


def is_value(operand: int) -> bool:
    return 0 <= operand <= MAX_VALUE


class Machine():
    memory: array           # 16-bit cells
    regs: List[int]         # General purpose registers
    stack: Stack
    pc: int                 # Program counter
    npc: int                # Program counter after the current instruction
    state: RunState
    error: Fault | None
    pending: Deque[int]     # Buffered input not yet consumed
    consumed: List[int]     # Every input code handed to the program
    steps: int

    def __init__(self, image: Sequence[int], console: Console | None = None):
        if len(image) > MEMORY_SIZE:
            raise ValueError(f'Image of {len(image)} words exceeds memory of {MEMORY_SIZE} words')

        for word in image:
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f'Image word {word} is not a 16-bit value')

        self.memory = array('H', image)
        self.memory.extend([0] * (MEMORY_SIZE - len(image)))

        self.regs = [0] * NREGS
        self.stack = Stack()
        self.console = console if console is not None else Console()

        self.pc = 0
        self.npc = 0
        self.state = RunState.RUNNING
        self.error = None

        self.pending = deque()
        self.consumed = []
        self.steps = 0

    # - Helpers - #

    @property
    def halted(self) -> bool:
        return self.state != RunState.RUNNING

    def debug_dump(self):
        state = [f'PC:{self.pc}', f'STATE:{self.state.name}', f'SP:{len(self.stack)}']
        state.extend([f'{i}:{self.regs[i]}' for i in range(NREGS)])
        lg.debug(' '.join(state))

    def peek(self, addr: int) -> int:
        if not 0 <= addr < MEMORY_SIZE:
            raise InvalidAddress(f'Address {addr} is outside memory')

        return self.memory[addr]

    def fetch(self, addr: int) -> Tuple[int, List[int]]:
        op = self.peek(addr)

        if not ops.is_valid(op):
            raise UnknownOpcode(f'Unknown opcode {op} at {addr}')

        args = [self.peek(addr + 1 + i) for i in range(ops.ARGS[op])]
        return op, args

    def value(self, operand: int) -> int:
        if is_value(operand):
            return operand

        if is_reg(operand):
            return self.regs[operand - REG_BASE]

        raise InvalidOperand(f'Invalid operand {operand}')

    def target(self, operand: int) -> Target:
        if is_reg(operand):
            return self.regs, operand - REG_BASE

        if is_value(operand):
            return self.memory, operand

        raise InvalidOperand(f'Invalid destination {operand}')

    def store(self, target: Target, val: int):
        bank, index = target
        bank[index] = val % MODULUS

    def arithm_pair(self, a: int, b: int, c: int, op: Callable[[int, int], int]):
        dest = self.target(a)
        self.store(dest, op(self.value(b), self.value(c)))

    def next_input(self) -> int:
        if not self.pending:
            line = self.console.read_line()

            if not line:
                raise InputExhausted('Input source is exhausted')

            codes = [ord(c) for c in line]

            if max(codes) > MAX_VALUE:
                raise InvalidInput(f'Input character {chr(max(codes))!r} is outside the 15-bit range')

            self.pending.extend(codes)

        return self.pending.popleft()

    # - Operations - #

    def halt(self):
        raise Halt()

    def set(self, a: int, b: int):
        dest = self.target(a)
        self.store(dest, self.value(b))

    def push(self, a: int):
        self.stack.push(self.value(a))

    def pop(self, a: int):
        dest = self.target(a)
        self.store(dest, self.stack.pop())

    def eq(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: int(x == y))

    def gt(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: int(x > y))

    def jmp(self, a: int):
        self.npc = self.value(a)

    def jt(self, a: int, b: int):
        cond = self.value(a)

        if cond != 0:
            self.npc = self.value(b)

    def jf(self, a: int, b: int):
        cond = self.value(a)

        if cond == 0:
            self.npc = self.value(b)

    def add(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: x + y)

    def mult(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: x * y)

    def mod(self, a: int, b: int, c: int):
        dest = self.target(a)
        x = self.value(b)
        y = self.value(c)

        if y == 0:
            raise DivisionByZero(f'Remainder of {x} divided by zero')

        self.store(dest, x % y)

    def band(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: x & y)

    def bor(self, a: int, b: int, c: int):
        self.arithm_pair(a, b, c, lambda x, y: x | y)

    def inv(self, a: int, b: int):
        dest = self.target(a)
        self.store(dest, self.value(b) ^ MAX_VALUE)

    def rmem(self, a: int, b: int):
        dest = self.target(a)
        self.store(dest, self.peek(self.value(b)))

    def wmem(self, a: int, b: int):
        dest = self.target(self.value(a))
        self.store(dest, self.value(b))

    def call(self, a: int):
        addr = self.value(a)
        self.stack.push(self.npc)
        self.npc = addr

    def ret(self):
        # Returning from the outermost frame ends the program
        if self.stack.is_empty():
            raise Halt()

        self.npc = self.stack.pop()

    def out(self, a: int):
        self.console.write(chr(self.value(a) & 0xFF))

    def read(self, a: int):
        dest = self.target(a)
        code = self.next_input()
        self.consumed.append(code)
        self.store(dest, code)

    def noop(self):
        pass

    HANDLERS = (
        halt, set, push, pop, eq, gt, jmp, jt, jf, add, mult,
        mod, band, bor, inv, rmem, wmem, call, ret, out, read, noop
    )

    # -- Implementation -- #

    def step(self):
        if self.halted:
            return

        self.steps += 1

        try:
            op, args = self.fetch(self.pc)
            self.npc = self.pc + ops.width(op)
            handler = self.HANDLERS[op]
            handler(self, *args)
            self.pc = self.npc

        except Halt:
            lg.info(f'Halted at {self.pc}')
            self.state = RunState.HALTED
            self.debug_dump()

        except Fault as e:
            lg.error(f'{type(e).__name__}: {e}')
            self.error = e
            self.state = RunState.ERRORED
            self.debug_dump()

    def run(self) -> RunState:
        while not self.halted:
            self.step()

        return self.state
