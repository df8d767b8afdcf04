import logging as lg
from dataclasses import dataclass
from typing import Iterable, Iterator

import wsemu.common.ops as ops


@dataclass(frozen=True)
class Instruction:
    op: str
    arg: int | str | None = None
    line: int = 0   # Source line, diagnostics only
    start: int = 0  # Span in the filtered source
    end: int = 0

    def __str__(self):
        if self.arg is None:
            return self.op

        if isinstance(self.arg, str):
            return f'{self.op} {label_repr(self.arg)}'

        return f'{self.op} {self.arg}'


def label_repr(name: str) -> str:
    return 'l_' + name.replace(' ', 's').replace('\t', 't')


class Program:
    instructions: list[Instruction]
    labels: dict[str, int]

    def __init__(self, instructions: Iterable[Instruction]):
        self.instructions = list(instructions)
        self.labels = dict()

        # Redefined labels: the last definition wins
        for index, ins in enumerate(self.instructions):
            if ins.op == ops.LABEL:
                assert isinstance(ins.arg, str)
                lg.debug(f'Label {label_repr(ins.arg)} @ {index}')
                self.labels[ins.arg] = index

    def __len__(self):
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def find_label(self, name: str) -> int | None:
        return self.labels.get(name)
