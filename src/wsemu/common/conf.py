# Source alphabet
SPACE = ' '
TAB = '\t'
LF = '\n'

CHARSET = SPACE + TAB + LF

# Machine word
WORD_BITS = 32
INT_MIN = -(1 << (WORD_BITS - 1))
INT_MAX = (1 << (WORD_BITS - 1)) - 1

# Driver exit codes
EXIT_OK = 0
EXIT_DECODE_ERROR = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100
