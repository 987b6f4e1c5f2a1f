# type: ignore
import pytest

from synvm.runtime.loader import words_to_bytes

import unit_utils


@pytest.fixture
def console():
    yield unit_utils.make_console()


@pytest.fixture
def hello_rom(tmp_path):
    rom = tmp_path / 'hello.bin'
    rom.write_bytes(words_to_bytes(unit_utils.assemble_file('testdata/sasm/hello.sasm')))
    yield rom
