# type: ignore
''' Mnemonic grammar '''

import pyparsing as pp

import wsemu.common.ops as ops
from wsemu.sasm.fpp import FPP


def g_cmd(literal, op):
    return pp.Keyword(literal).set_parse_action(lambda _: (FPP.issue_op, op))


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Suppress(pp.Literal('//') + pp.rest_of_line)

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.issue_label, r[0]))
ref = id.copy().set_parse_action(lambda r: (FPP.issue_ref, r[0]))
number = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: (FPP.issue_number, r[0]))


def g_cmd_n(literal, op):
    return g_cmd(literal, op) + number


def g_cmd_l(literal, op):
    return g_cmd(literal, op) + ref


# Stack
push_cmd = g_cmd_n('push', ops.PUSH)
dup_cmd = g_cmd('dup', ops.DUP)
copy_cmd = g_cmd_n('copy', ops.COPY)
swap_cmd = g_cmd('swap', ops.SWAP)
drop_cmd = g_cmd('drop', ops.DROP)
slide_cmd = g_cmd_n('slide', ops.SLIDE)

# Arithmetic
add_cmd = g_cmd('add', ops.ADD)
sub_cmd = g_cmd('sub', ops.SUB)
mul_cmd = g_cmd('mul', ops.MUL)
div_cmd = g_cmd('div', ops.DIV)
mod_cmd = g_cmd('mod', ops.MOD)

# Heap
store_cmd = g_cmd('store', ops.STORE)
retrieve_cmd = g_cmd('retrieve', ops.RETRIEVE)

# Flow
call_cmd = g_cmd_l('call', ops.CALL)
jmp_cmd = g_cmd_l('jmp', ops.JMP)
jz_cmd = g_cmd_l('jz', ops.JZ)
jn_cmd = g_cmd_l('jn', ops.JN)
ret_cmd = g_cmd('ret', ops.RET)
end_cmd = g_cmd('end', ops.END)

# IO
outc_cmd = g_cmd('outc', ops.OUTC)
outi_cmd = g_cmd('outi', ops.OUTI)
readc_cmd = g_cmd('readc', ops.READC)
readi_cmd = g_cmd('readi', ops.READI)

cmd = push_cmd \
    ^ dup_cmd \
    ^ copy_cmd \
    ^ swap_cmd \
    ^ drop_cmd \
    ^ slide_cmd \
    ^ add_cmd \
    ^ sub_cmd \
    ^ mul_cmd \
    ^ div_cmd \
    ^ mod_cmd \
    ^ store_cmd \
    ^ retrieve_cmd \
    ^ call_cmd \
    ^ jmp_cmd \
    ^ jz_cmd \
    ^ jn_cmd \
    ^ ret_cmd \
    ^ end_cmd \
    ^ outc_cmd \
    ^ outi_cmd \
    ^ readc_cmd \
    ^ readi_cmd

# Fail on unknown command
unknown = pp.Regex('.+').set_parse_action(lambda r: (FPP.on_fail, r[0]))

# First match, so several statements may share a line
program = pp.ZeroOrMore(comment | label | cmd | unknown) + pp.StringEnd()
