import pytest

import wsemu.common.ops as ops
import wsemu.runtime.cpu as cpu
from wsemu.runtime.program import Instruction as I

from unit_utils import run_instructions


def stack_after(*instructions):
    proc, _ = run_instructions(instructions)
    return proc.stack


def test_push():
    assert stack_after(I(ops.PUSH, 1), I(ops.PUSH, 2)) == [1, 2]


def test_dup():
    assert stack_after(I(ops.PUSH, 5), I(ops.DUP)) == [5, 5]


def test_dup_then_drops():
    program = [I(ops.PUSH, 5), I(ops.DUP), I(ops.DROP), I(ops.DROP), I(ops.DROP)]

    with pytest.raises(cpu.Fault, match='Stack is empty'):
        run_instructions(program)


def test_dup_empty():
    with pytest.raises(cpu.Fault, match='Stack is empty'):
        run_instructions([I(ops.DUP)])


def test_copy():
    base = [I(ops.PUSH, 10), I(ops.PUSH, 20), I(ops.PUSH, 30)]

    assert stack_after(*base, I(ops.COPY, 0)) == [10, 20, 30, 30]
    assert stack_after(*base, I(ops.COPY, 2)) == [10, 20, 30, 10]


def test_copy_too_deep():
    with pytest.raises(cpu.Fault, match='out of bounds'):
        run_instructions([I(ops.PUSH, 1), I(ops.COPY, 1)])


def test_swap():
    assert stack_after(I(ops.PUSH, 1), I(ops.PUSH, 2), I(ops.SWAP)) == [2, 1]


def test_swap_single():
    with pytest.raises(cpu.Fault):
        run_instructions([I(ops.PUSH, 1), I(ops.SWAP)])


def test_slide():
    program = [I(ops.PUSH, n) for n in (1, 2, 3, 4)] + [I(ops.SLIDE, 2)]
    assert stack_after(*program) == [1, 4]


def test_slide_zero():
    assert stack_after(I(ops.PUSH, 1), I(ops.PUSH, 2), I(ops.SLIDE, 0)) == [1, 2]


def test_slide_too_shallow():
    with pytest.raises(cpu.Fault, match='Stack is empty'):
        run_instructions([I(ops.PUSH, 1), I(ops.PUSH, 2), I(ops.SLIDE, 2)])


def test_fault_names_instruction():
    with pytest.raises(cpu.Fault, match=r'instruction 1 "drop", line 7'):
        run_instructions([I(ops.LABEL, ''), I(ops.DROP, line=7)])
