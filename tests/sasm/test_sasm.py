import pytest

import synvm.runtime.cpu as cpu
import synvm.sasm.asm as asm
from synvm.sasm.fpp import AsmError

from unit_utils import R, execute_sasm_source, load_file, run_image


def test_halt():
    assert asm.compile_source('halt') == [0]


def test_registers_and_literals():
    words = asm.compile_source('add r0 r1 4\nout r0\nhalt')
    assert words == [9, R, R + 1, 4, 19, R, 0]


def test_hex_and_chars():
    assert asm.compile_source('set r7 0x10') == [1, R + 7, 16]
    assert asm.compile_source("out 'A'") == [19, 65]
    assert asm.compile_source("out '\\n'") == [19, 10]


def test_labels():
    assert asm.compile_source('start: jmp &start') == [6, 0]
    assert asm.compile_source('jmp &end\nnoop\nend:\nhalt') == [6, 3, 21, 0]


def test_comments():
    source = '// leading\nnoop // trailing\n\nhalt\n// closing'
    assert asm.compile_source(source) == [21, 0]


def test_data():
    assert asm.compile_source('DATA 1 2 "ab" \'c\' r1') == [1, 2, 97, 98, 99, R + 1]


def test_print():
    assert asm.compile_source('PRINT "hi"') == [19, 104, 19, 105]


def test_namespaces():
    main = asm.make_item('main', 'call &lib.greet::greet\nhalt')
    lib = asm.make_item('greet', 'greet: PRINT "x"\nret').set_package('lib')

    words = asm.assemble([main, lib])
    assert words == [17, 3, 0, 19, 120, 18]

    machine, output = run_image(words)
    assert machine.state == cpu.RunState.HALTED
    assert output == 'x'


def test_compile_items():
    item = asm.make_item('main', 'noop\nhalt')
    assert asm.compile_items([item]) == b'\x15\x00\x00\x00'


@pytest.mark.parametrize('source', [
    'jmp &nowhere',
    'a: noop\na: halt',
    'frob r0',
    'add r0 r1',
    'set r0 40000',
    'noop extra',
])
def test_errors(source):
    with pytest.raises(AsmError):
        asm.compile_source(source)


def test_hello():
    machine, output = execute_sasm_source('testdata/sasm/hello.sasm')

    assert machine.state == cpu.RunState.HALTED
    assert machine.stack.is_empty()
    assert output == load_file('testdata/sasm/hello.log')


def test_echo():
    machine, output = execute_sasm_source('testdata/sasm/echo.sasm', 'Hello, vm\n')

    assert machine.state == cpu.RunState.HALTED
    assert output == load_file('testdata/sasm/echo.log')
    assert machine.consumed == [ord(c) for c in 'Hello, vm\n']
