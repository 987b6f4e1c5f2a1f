import sys
from pathlib import Path
import logging as lg
from typing import Sequence

import click

import synvm.runtime.cpu as cpu
from synvm.runtime.loader import LoadError, load_image
from synvm.runtime.terminal import Console


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(image: Sequence[int], console: Console | None = None) -> cpu.Machine:
    machine = cpu.Machine(image, console)
    machine.run()
    return machine


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--prompt', default='', help='Text shown before each line of input is read')
@click.argument('rom_filename', type=Path)
def run(verbose: bool, prompt: str, rom_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("SYNVM")

    try:
        image = load_image(rom_filename)

    except (OSError, LoadError) as e:
        lg.error(f'Unable to load {rom_filename}: {e}')
        sys.exit(EXIT_LOAD_ERROR)

    try:
        machine = execute(image, Console(prompt=prompt))

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    lg.info(f'Executed {machine.steps} instructions')

    if machine.state == cpu.RunState.ERRORED:
        lg.info(f'Execution halted on error: {machine.error}')
        sys.exit(EXIT_EXEC_ERROR)

    lg.info('Execution halted gracefully')
    sys.exit(EXIT_HALT)


if __name__ == '__main__':
    run()
