import re
import sys
import logging as lg
from typing import Callable, TextIO

import wsemu.common.ops as ops
from wsemu.common.conf import INT_MIN, INT_MAX
from wsemu.runtime.program import Instruction, Program, label_repr


DECIMAL = re.compile(r'[+-]?[0-9]+')


class Halt(Exception):
    pass


class Fault(Exception):
    pass


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_mod(a: int, b: int) -> int:
    return a - b * trunc_div(a, b)


class CPU():
    program: Program
    ip: int             # Instruction pointer
    next_ip: int        # Set by control transfers
    stack: list[int]    # Evaluation stack
    heap: dict[int, int]
    calls: list[int]    # Return addresses

    def __init__(
        self,
        program: Program,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        trace: bool = False
    ):
        self.program = program
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.trace = trace

        self.ip = 0
        self.next_ip = 0
        self.stack = []
        self.heap = dict()
        self.calls = []

        self.current: Instruction | None = None

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v}' for k, v in {
            'IP': self.ip,
            'SD': len(self.stack),
            'CD': len(self.calls),
            'HS': len(self.heap)
        }.items()]

        if self.stack:
            state.append(f'TOP:{self.stack[-1]}')

        lg.debug(' '.join(state))

    def fault(self, message: str) -> Fault:
        if self.current is None:
            return Fault(message)

        return Fault(f'{message} (instruction {self.ip} "{self.current}", line {self.current.line})')

    def peek(self, depth: int = 0) -> int:
        if not self.stack:
            raise self.fault('Stack is empty')

        if depth >= len(self.stack):
            raise self.fault(f'Stack index {depth} out of bounds')

        return self.stack[-1 - depth]

    def do_pop(self) -> int:
        if not self.stack:
            raise self.fault('Stack is empty')

        return self.stack.pop()

    def do_push(self, val: int):
        self.stack.append(val)

    def checked(self, val: int) -> int:
        if val < INT_MIN or val > INT_MAX:
            raise self.fault('Arithmetic overflow')

        return val

    def address(self, addr: int) -> int:
        if addr < 0:
            raise self.fault(f'Heap index {addr} can not be negative')

        return addr

    def jump_to(self, name: str):
        index = self.program.find_label(name)

        if index is None:
            raise self.fault(f'Label {label_repr(name)} does not exist')

        # Resume after the label marker itself
        self.next_ip = index + 1

    def arithm_pair(self, op: Callable[[int, int], int], divides: bool = False):
        b = self.do_pop()
        a = self.do_pop()

        if divides and b == 0:
            raise self.fault('Division by zero')

        self.do_push(self.checked(op(a, b)))

    # - Stack - #

    def push(self, ins: Instruction):
        assert isinstance(ins.arg, int)
        self.do_push(ins.arg)

    def dup(self, ins: Instruction):
        self.do_push(self.peek())

    def copy(self, ins: Instruction):
        assert isinstance(ins.arg, int)
        self.do_push(self.peek(ins.arg))

    def swap(self, ins: Instruction):
        a = self.do_pop()
        b = self.do_pop()
        self.do_push(a)
        self.do_push(b)

    def drop(self, ins: Instruction):
        self.do_pop()

    def slide(self, ins: Instruction):
        assert isinstance(ins.arg, int)
        top = self.do_pop()

        for _ in range(ins.arg):
            self.do_pop()

        self.do_push(top)

    # - Arithmetic - #

    def add(self, ins: Instruction):
        self.arithm_pair(lambda a, b: a + b)

    def sub(self, ins: Instruction):
        self.arithm_pair(lambda a, b: a - b)

    def mul(self, ins: Instruction):
        self.arithm_pair(lambda a, b: a * b)

    def div(self, ins: Instruction):
        self.arithm_pair(trunc_div, divides=True)

    def mod(self, ins: Instruction):
        self.arithm_pair(trunc_mod, divides=True)

    # - Heap - #

    def store(self, ins: Instruction):
        val = self.do_pop()
        addr = self.address(self.do_pop())
        self.heap[addr] = val

    def retrieve(self, ins: Instruction):
        addr = self.address(self.do_pop())

        if addr not in self.heap:
            lg.debug(f'Heap index {addr} initialised on read')
            self.heap[addr] = 0

        self.do_push(self.heap[addr])

    # - Flow - #

    def label(self, ins: Instruction):
        pass

    def call(self, ins: Instruction):
        assert isinstance(ins.arg, str)
        self.jump_to(ins.arg)
        self.calls.append(self.ip)

    def jmp(self, ins: Instruction):
        assert isinstance(ins.arg, str)
        self.jump_to(ins.arg)

    def jz(self, ins: Instruction):
        assert isinstance(ins.arg, str)

        if self.do_pop() == 0:
            self.jump_to(ins.arg)

    def jn(self, ins: Instruction):
        assert isinstance(ins.arg, str)

        if self.do_pop() < 0:
            self.jump_to(ins.arg)

    def ret(self, ins: Instruction):
        # Returning with an empty call stack just moves on
        if self.calls:
            self.next_ip = self.calls.pop() + 1

    def end(self, ins: Instruction):
        raise Halt()

    # - IO - #

    def outc(self, ins: Instruction):
        val = self.do_pop()

        try:
            char = chr(val)
        except (ValueError, OverflowError):
            raise self.fault(f'Value {val} is not a character')

        self.stdout.write(char)

    def outi(self, ins: Instruction):
        self.stdout.write(str(self.do_pop()))

    def readc(self, ins: Instruction):
        addr = self.address(self.peek())
        char = self.stdin.read(1)

        if not char:
            raise self.fault('Could not read from user input')

        self.heap[addr] = ord(char)

    def readi(self, ins: Instruction):
        addr = self.address(self.peek())
        text = self.stdin.readline()

        if not text:
            raise self.fault('Could not read from user input')

        digits = text.strip()

        if not DECIMAL.fullmatch(digits):
            raise self.fault(f'Could not read number {digits!r}')

        val = int(digits)

        if val < INT_MIN or val > INT_MAX:
            raise self.fault(f'Number {val} out of range')

        self.heap[addr] = val

    HANDLERS = {
        ops.PUSH: push,
        ops.DUP: dup,
        ops.COPY: copy,
        ops.SWAP: swap,
        ops.DROP: drop,
        ops.SLIDE: slide,

        ops.ADD: add,
        ops.SUB: sub,
        ops.MUL: mul,
        ops.DIV: div,
        ops.MOD: mod,

        ops.STORE: store,
        ops.RETRIEVE: retrieve,

        ops.LABEL: label,
        ops.CALL: call,
        ops.JMP: jmp,
        ops.JZ: jz,
        ops.JN: jn,
        ops.RET: ret,
        ops.END: end,

        ops.OUTC: outc,
        ops.OUTI: outi,
        ops.READC: readc,
        ops.READI: readi
    }

    # -- Implementation -- #

    def finished(self) -> bool:
        return self.ip == len(self.program)

    def exec_next(self):
        if self.ip < 0 or self.ip >= len(self.program):
            raise Fault(f'Program pointer out of range (at {self.ip})')

        ins = self.program[self.ip]
        self.current = ins
        self.next_ip = self.ip + 1

        handler = self.HANDLERS.get(ins.op)

        if handler is None:
            raise self.fault('Invalid command')

        handler(self, ins)
        self.ip = self.next_ip

    def run(self):
        try:
            while not self.finished():
                self.exec_next()

                if self.trace:
                    self.debug_dump()

        except Halt:
            lg.debug(f'Halted at instruction {self.ip}')

        finally:
            self.stdout.flush()
