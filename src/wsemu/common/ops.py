from wsemu.common.conf import SPACE as S, TAB as T, LF as L

# IMPs
STACK = 'Stack'
ARITHMETIC = 'Arithmetic'
HEAP = 'Heap'
FLOW = 'Flow'
IO = 'IO'

# Stack
PUSH = 'push'       # N -> [SP++]
DUP = 'dup'         # [SP-1] -> [SP++]
COPY = 'copy'       # [SP-1-N] -> [SP++]
SWAP = 'swap'       # [SP-1] <-> [SP-2]
DROP = 'drop'       # [--SP]
SLIDE = 'slide'     # pop top; drop N; push top

# Arithmetic
ADD = 'add'         # A +  B -> [SP++]
SUB = 'sub'         # A -  B -> [SP++]
MUL = 'mul'         # A *  B -> [SP++]
DIV = 'div'         # A /  B -> [SP++], truncating
MOD = 'mod'         # A %  B -> [SP++], sign of A

# Heap
STORE = 'store'     # V, A -> H[A] = V
RETRIEVE = 'retrieve'  # A -> H[A] -> [SP++]

# Flow
LABEL = 'label'     # mark position
CALL = 'call'       # push IP; jmp L
JMP = 'jmp'         # goto L
JZ = 'jz'           # if [--SP] .eq 0 jmp L
JN = 'jn'           # if [--SP] .lt 0 jmp L
RET = 'ret'         # IP <- pop call stack
END = 'end'         # halt

# IO
OUTC = 'outc'       # [--SP] -> char out
OUTI = 'outi'       # [--SP] -> decimal out
READC = 'readc'     # char in -> H[[SP-1]]
READI = 'readi'     # line in -> H[[SP-1]]

# Operand kinds
NUMBER = 'number'
NAME = 'label'

IMPS = {
    S: STACK,
    T + S: ARITHMETIC,
    T + T: HEAP,
    T + L: IO,
    L: FLOW,
}

COMMANDS = {
    STACK: {
        S: PUSH,
        L + S: DUP,
        T + S: COPY,
        L + T: SWAP,
        L + L: DROP,
        T + L: SLIDE,
    },
    ARITHMETIC: {
        S + S: ADD,
        S + T: SUB,
        S + L: MUL,
        T + S: DIV,
        T + T: MOD,
    },
    HEAP: {
        S: STORE,
        T: RETRIEVE,
    },
    FLOW: {
        S + S: LABEL,
        S + T: CALL,
        S + L: JMP,
        T + S: JZ,
        T + T: JN,
        T + L: RET,
        L + L: END,
    },
    IO: {
        S + S: OUTC,
        S + T: OUTI,
        T + S: READC,
        T + T: READI,
    },
}

OPERANDS = {
    PUSH: NUMBER,
    COPY: NUMBER,
    SLIDE: NUMBER,
    LABEL: NAME,
    CALL: NAME,
    JMP: NAME,
    JZ: NAME,
    JN: NAME,
}


def encoding(op: str) -> str:
    ''' Whitespace characters of an opcode without its operand '''
    for imp_code, imp in IMPS.items():
        for code, cmd in COMMANDS[imp].items():
            if cmd == op:
                return imp_code + code

    raise KeyError(op)
