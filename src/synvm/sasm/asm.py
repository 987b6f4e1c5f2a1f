from pathlib import Path
import logging as lg
from typing import List, Tuple, cast

import click

from synvm.common.hwconf import MEMORY_SIZE
from synvm.runtime.loader import words_to_bytes
from synvm.sasm.fpp import FPP, AsmError
import synvm.sasm.grammar as grammar


class CompilationItem:
    package: str | None = None
    modulename: str
    contents: str

    def namespace(self) -> str:
        if self.package is None:
            return f'{self.modulename}'

        return f'{self.package}.{self.modulename}'

    def set_package(self, package: str):
        self.package = package
        return self


def make_item(modulename: str, contents: str) -> CompilationItem:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = contents
    return item


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return make_item(filepath.stem, filepath.read_text())


def assemble(compile_items: List[CompilationItem]) -> List[int]:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info("Processing {0}".format(compile_item.namespace()))
        first_pass.namespace = compile_item.namespace()
        actions = grammar.program.parse_string(compile_item.contents, parse_all=True)

        for (func, arg) in actions:  # type: ignore
            func(first_pass, arg)

    if first_pass.offset > MEMORY_SIZE:
        raise AsmError(f'Program of {first_pass.offset} words does not fit into memory')

    # Second pass
    words: List[int] = []

    for (t, d) in first_pass.cmd_list:
        if t == 'word':
            words.append(cast(int, d))

        if t == 'ref':
            labelname = cast(str, d)

            if labelname not in first_pass.label_dict:
                raise AsmError(f'Unknown label {labelname}')

            words.append(first_pass.label_dict[labelname])

    return words


def compile_source(contents: str, modulename: str = 'main') -> List[int]:
    return assemble([make_item(modulename, contents)])


def compile_items(compile_items: List[CompilationItem]) -> bytes:
    return words_to_bytes(assemble(compile_items))


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("SYNVM ASM")

    items = [collect_file(path) for path in sources]

    try:
        bytestr = compile_items(items)

    except AsmError as e:
        raise click.ClickException(str(e))

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Written {len(bytestr)} bytes to {binary}')


if __name__ == "__main__":
    compile()
