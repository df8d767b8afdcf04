import pytest

import wsemu.common.ops as ops
from wsemu.decode.decoder import decode
from wsemu.sasm.asm import compile_string
from wsemu.sasm.fpp import AsmError, encode_number

from unit_utils import load_file, run_sasm, ws


def ops_of(source: str):
    return [(ins.op, ins.arg) for ins in decode(compile_string(source))]


def test_encode_number():
    assert encode_number(0) == ws('SL')
    assert encode_number(5) == ws('TSTL')


def test_single_statements():
    assert compile_string('push 1') == ws('SS TL')
    assert compile_string('end') == ws('LLL')
    assert compile_string('add') == ws('TSSS')


def test_every_mnemonic():
    source = '''
        push 1 dup copy 0 swap drop slide 1
        add sub mul div mod
        store retrieve
        x: call x jmp x jz x jn x ret end
        outc outi readc readi
    '''
    assert [op for op, _ in ops_of(source)] == [
        ops.PUSH, ops.DUP, ops.COPY, ops.SWAP, ops.DROP, ops.SLIDE,
        ops.ADD, ops.SUB, ops.MUL, ops.DIV, ops.MOD,
        ops.STORE, ops.RETRIEVE,
        ops.LABEL, ops.CALL, ops.JMP, ops.JZ, ops.JN, ops.RET, ops.END,
        ops.OUTC, ops.OUTI, ops.READC, ops.READI,
    ]


def test_labels_by_first_appearance():
    assert ops_of('jmp later first: later: end') == [
        (ops.JMP, ' '),
        (ops.LABEL, '\t'),
        (ops.LABEL, ' '),
        (ops.END, None),
    ]


def test_comments():
    assert ops_of('// nothing\npush 2 // two\n// end') == [(ops.PUSH, 2)]


def test_keyword_prefix_is_a_label():
    assert ops_of('ending: jmp ending') == [(ops.LABEL, ' '), (ops.JMP, ' ')]


def test_negative_number():
    with pytest.raises(AsmError, match='Negative'):
        compile_string('push -1')


def test_unknown_command():
    with pytest.raises(AsmError, match='Unknown command'):
        compile_string('push 1\npop 2\n')


def test_missing_operand():
    with pytest.raises(AsmError, match='Unknown command'):
        compile_string('jmp\n')


@pytest.mark.parametrize('name', ['hello', 'count', 'fact'])
def test_programs(name):
    assert run_sasm(f'testdata/{name}.wsa') == load_file(f'testdata/{name}.log')


def test_echo():
    assert run_sasm('testdata/echo.wsa', stdin='abc\ndef\n') == 'abc'


def test_sum():
    assert run_sasm('testdata/sum.wsa', stdin='40\n2\n') == '42'
