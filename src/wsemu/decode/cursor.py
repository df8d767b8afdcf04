from wsemu.common.conf import CHARSET, LF


class Cursor:
    ''' Read position over the whitespace-only view of a source text '''
    chars: str
    pos: int
    line: int

    def __init__(self, source: str):
        self.chars = ''.join(c for c in source if c in CHARSET)
        self.pos = 0
        self.line = 1

    def peek(self, offset: int = 0) -> str | None:
        index = self.pos + offset

        if index >= len(self.chars):
            return None

        return self.chars[index]

    def advance(self) -> str | None:
        c = self.peek()

        if c is None:
            return None

        self.pos += 1

        if c == LF:
            self.line += 1

        return c

    def skip(self, count: int):
        for _ in range(count):
            self.advance()

    def at_end(self) -> bool:
        return self.pos >= len(self.chars)
