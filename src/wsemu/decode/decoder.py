import logging as lg

import wsemu.common.ops as ops
from wsemu.common.conf import SPACE, TAB, LF, INT_MAX
from wsemu.decode.cursor import Cursor
from wsemu.runtime.program import Instruction, Program


class DecodeError(Exception):
    pass


class AlreadyDecoded(DecodeError):
    pass


class Decoder:
    cursor: Cursor

    def __init__(self, source: str):
        self.cursor = Cursor(source)

    # - Helpers - #

    def fail(self, message: str) -> DecodeError:
        # Always make progress past the offending character
        self.cursor.advance()
        return DecodeError(message)

    def match(self, table: dict[str, str]) -> str | None:
        ''' Consumes the longest code found in the table (codes are prefix-free) '''
        first = self.cursor.peek(0)

        if first is None:
            return None

        if first in table:
            self.cursor.skip(1)
            return table[first]

        second = self.cursor.peek(1)

        if second is not None and first + second in table:
            self.cursor.skip(2)
            return table[first + second]

        return None

    def read_terminated(self, what: str) -> str:
        chars = []

        while self.cursor.peek() in (SPACE, TAB):
            chars.append(self.cursor.advance())

        c = self.cursor.peek()

        if c is None:
            raise DecodeError(f'Source unexpectedly ended while parsing {what}')

        if c != LF:
            raise DecodeError(
                f'{what.capitalize()} on line {self.cursor.line} did not terminate with a linefeed'
            )

        self.cursor.advance()
        return ''.join(chars)

    # - Operands - #

    def read_number(self) -> int:
        line = self.cursor.line
        text = self.read_terminated('number')
        bits = text.replace(SPACE, '0').replace(TAB, '1')

        # Magnitude only, no sign bit
        if not bits or int(bits, 2) > INT_MAX:
            raise DecodeError(f'Unable to parse number on line {line}')

        return int(bits, 2)

    def read_label(self) -> str:
        return self.read_terminated('label')

    # - Instructions - #

    def read_imp(self) -> str:
        imp = self.match(ops.IMPS)

        if imp is None:
            raise self.fail(f'Could not parse IMP on line {self.cursor.line}')

        return imp

    def read_command(self, imp: str) -> str:
        op = self.match(ops.COMMANDS[imp])

        if op is None:
            raise self.fail(f'Could not parse {imp} command on line {self.cursor.line}')

        return op

    def decode_next(self) -> Instruction:
        start = self.cursor.pos
        line = self.cursor.line

        imp = self.read_imp()
        op = self.read_command(imp)

        arg: int | str | None = None
        operand = ops.OPERANDS.get(op)

        if operand == ops.NUMBER:
            arg = self.read_number()
        elif operand == ops.NAME:
            arg = self.read_label()

        ins = Instruction(op, arg, line, start, self.cursor.pos)
        lg.debug(f'Decoded {ins} on line {line}')
        return ins

    def decode_all(self) -> list[Instruction]:
        instructions = []

        while not self.cursor.at_end():
            instructions.append(self.decode_next())

        return instructions


def decode(source: str) -> Program:
    return Program(Decoder(source).decode_all())
