import logging as lg

from wsemu.sasm.fpp import FPP
import wsemu.sasm.grammar as grammar


def compile_string(contents: str) -> str:
    # First pass
    first_pass = FPP()
    actions = grammar.program.parse_string(contents)

    for (func, arg) in actions:  # type: ignore
        func(first_pass, arg)

    lg.debug(f'{len(first_pass.label_dict)} labels')

    # Second pass
    return first_pass.emit()
