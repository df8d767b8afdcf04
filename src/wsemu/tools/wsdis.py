import sys
from pathlib import Path
import logging as lg

import click

import wsemu.common.ops as ops
from wsemu.decode.decoder import decode, DecodeError
from wsemu.runtime.program import Program, label_repr
from wsemu.common.conf import EXIT_DECODE_ERROR


def listing(program: Program, with_lines: bool = False) -> str:
    lines = []

    for index, ins in enumerate(program):
        if ins.op == ops.LABEL:
            assert isinstance(ins.arg, str)
            text = f'{label_repr(ins.arg)}:'
        else:
            text = f'    {ins}'

        if with_lines:
            text = f'{text:<32}// {index} @ line {ins.line}'

        lines.append(text)

    return '\n'.join(lines) + '\n' if lines else ''


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-n', '--numbered', is_flag=True, help='Annotates instructions with their index and line')
@click.argument('source', type=Path)
def disassemble(verbose: bool, numbered: bool, source: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)

    try:
        program = decode(source.read_text())

    except DecodeError as e:
        lg.error(f'Decoding failed: {e}')
        sys.exit(EXIT_DECODE_ERROR)

    click.echo(listing(program, numbered), nl=False)


if __name__ == '__main__':
    disassemble()
