import pytest

import synvm.runtime.cpu as cpu
from synvm.runtime.faults import DivisionByZero

from unit_utils import R, run_image


def binary(op: int, b: int, c: int) -> int:
    machine, _ = run_image([op, R, b, c, 0])
    assert machine.state == cpu.RunState.HALTED
    return machine.regs[0]


def test_add():
    assert binary(9, 2, 3) == 5


def test_add_wraps():
    assert binary(9, 32767, 32767) == 32766
    assert binary(9, 32758, 15) == 5


def test_mult_wraps():
    assert binary(10, 300, 200) == 27232
    assert binary(10, 32767, 32767) == 1


@pytest.mark.parametrize('b,c', [(0, 0), (1, 32767), (16384, 2), (12345, 6789), (32767, 1)])
def test_results_in_range(b, c):
    total = binary(9, b, c)
    product = binary(10, b, c)

    assert total == (b + c) % 32768
    assert product == (b * c) % 32768
    assert 0 <= total <= 32767
    assert 0 <= product <= 32767


def test_mod():
    assert binary(11, 10, 3) == 1
    assert binary(11, 3, 10) == 3


def test_mod_by_zero():
    machine, _ = run_image([11, R, 10, 0, 0])

    assert machine.state == cpu.RunState.ERRORED
    assert isinstance(machine.error, DivisionByZero)
    assert machine.regs[0] == 0
    assert machine.pc == 0


def test_bitwise():
    assert binary(12, 0b1100, 0b1010) == 0b1000
    assert binary(13, 0b1100, 0b1010) == 0b1110


def test_comparisons():
    assert binary(4, 5, 5) == 1
    assert binary(4, 5, 6) == 0
    assert binary(5, 6, 5) == 1
    assert binary(5, 5, 5) == 0
    assert binary(5, 5, 6) == 0


def test_not():
    machine, _ = run_image([14, R, 0, 14, R + 1, 0x5555, 0])
    assert machine.regs[:2] == [32767, 0x2AAA]


def test_not_is_involutive():
    for x in list(range(0, 32768, 97)) + [32767]:
        machine, _ = run_image([14, R, x, 14, R + 1, R, 0])
        assert machine.regs[1] == x


def test_memory_destination():
    machine, _ = run_image([9, 200, 2, 3, 0])

    assert machine.peek(200) == 5
    assert machine.regs == [0] * 8


def test_rmem_wmem():
    machine, _ = run_image([16, 300, 42, 15, R, 300, 0])

    assert machine.peek(300) == 42
    assert machine.regs[0] == 42


def test_wmem_through_register():
    machine, _ = run_image([1, R, 400, 16, R, 9, 15, R + 1, R, 0])

    assert machine.peek(400) == 9
    assert machine.regs[1] == 9
