import sys
from pathlib import Path
import logging as lg
from typing import TextIO

import click

from wsemu.common.conf import EXIT_OK, EXIT_DECODE_ERROR, EXIT_KEYBOARD, EXIT_EXEC_ERROR
from wsemu.decode.decoder import Decoder, DecodeError, AlreadyDecoded
from wsemu.runtime.program import Program
import wsemu.runtime.cpu as cpu


class Emulator:
    ''' One decode pass and one execution pass over a single source '''
    decoder: Decoder
    program: Program | None
    decoded: bool

    def __init__(
        self,
        source: str,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        trace: bool = False
    ):
        self.decoder = Decoder(source)
        self.program = None
        self.decoded = False
        self.proc = None

        self.stdin = stdin
        self.stdout = stdout
        self.trace = trace

    def decode(self) -> Program:
        # A failed pass still counts
        if self.decoded:
            raise AlreadyDecoded('Already decoded source')

        self.decoded = True
        self.program = Program(self.decoder.decode_all())
        lg.debug(f'Decoded {len(self.program)} instructions')
        return self.program

    def run(self) -> cpu.CPU:
        if self.program is None:
            self.decode()

        if self.proc is not None:
            raise cpu.Fault('Program has already been executed')

        assert self.program is not None
        self.proc = cpu.CPU(self.program, self.stdin, self.stdout, self.trace)
        self.proc.run()
        return self.proc


def execute(
    source: str,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    trace: bool = False
) -> cpu.CPU:
    return Emulator(source, stdin, stdout, trace).run()


def load_source(source: str) -> str:
    ''' A path to an existing file, or the program text itself '''
    try:
        path = Path(source)

        if path.is_file():
            lg.debug(f'Reading source from {path}')
            return path.read_text()

    except (OSError, ValueError):
        pass

    return source


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-t', '--trace', is_flag=True, help='Dumps machine state after every step')
@click.argument('source')
def run(verbose: bool, trace: bool, source: str):
    lg.basicConfig(level=lg.DEBUG if verbose or trace else lg.INFO)
    lg.info('WSEMU')

    try:
        execute(load_source(source), trace=trace)
        sys.exit(EXIT_OK)

    except DecodeError as e:
        lg.error(f'Decoding failed: {e}')
        sys.exit(EXIT_DECODE_ERROR)

    except cpu.Fault as e:
        lg.error(f'Execution halted on error: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)


if __name__ == '__main__':
    run()
