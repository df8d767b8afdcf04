import sys
from pathlib import Path
import logging as lg

import click

from wsemu.sasm.asm import compile_string
from wsemu.sasm.fpp import AsmError


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('output', type=Path)
def compile(verbose: bool, source: Path, output: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('WSEMU ASM')

    try:
        text = compile_string(source.read_text())

    except AsmError as e:
        lg.error(f'Assembly failed: {e}')
        sys.exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    lg.info(f'Wrote {output}')


if __name__ == "__main__":
    compile()
