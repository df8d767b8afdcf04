import logging as lg
from typing import List, Tuple, Dict

import wsemu.common.ops as ops
from wsemu.common.conf import SPACE, TAB, LF


class AsmError(Exception):
    pass


def encode_number(value: int) -> str:
    if value < 0:
        raise AsmError(f'Negative number {value} can not be encoded')

    bits = format(value, 'b')
    return bits.replace('0', SPACE).replace('1', TAB) + LF


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, str | int]]
    label_dict: Dict[str, str]

    def __init__(self):
        self.cmd_list = list()
        self.label_dict = dict()

    def label_code(self, name: str) -> str:
        if name not in self.label_dict:
            # Ordinal of first appearance, spelled in binary
            code = encode_number(len(self.label_dict))[:-1]
            self.label_dict[name] = code
            lg.debug(f'Label {name} -> {code!r}')

        return self.label_dict[name]

    # Handlers
    def issue_op(self, op: str):
        lg.debug(f'Issuing command {op}')
        self.cmd_list.append(('op', op))

    def issue_number(self, word: str):
        value = int(word)

        if value < 0:
            raise AsmError(f'Negative number {value} is not supported')

        self.cmd_list.append(('number', value))

    def issue_label(self, name: str):
        self.issue_op(ops.LABEL)
        self.issue_ref(name)

    def issue_ref(self, name: str):
        self.cmd_list.append(('ref', self.label_code(name)))

    def on_fail(self, rest: str):
        raise AsmError(f'Unknown command {rest}')

    # Second pass
    def emit(self) -> str:
        chunks = []

        for (t, d) in self.cmd_list:
            if t == 'op':
                chunks.append(ops.encoding(str(d)))

            if t == 'number':
                chunks.append(encode_number(int(d)))

            if t == 'ref':
                chunks.append(str(d) + LF)

        return ''.join(chunks)
