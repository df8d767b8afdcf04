from wsemu.decode.cursor import Cursor


def test_filters_insignificant_characters():
    cursor = Cursor('a b\tc\r\nd')
    assert cursor.chars == ' \t\n'


def test_peek_does_not_consume():
    cursor = Cursor(' \t\n')

    assert cursor.peek() == ' '
    assert cursor.peek(1) == '\t'
    assert cursor.peek(2) == '\n'
    assert cursor.peek(3) is None
    assert cursor.pos == 0


def test_advance_counts_lines():
    cursor = Cursor('\n \n')

    assert cursor.line == 1
    assert cursor.advance() == '\n'
    assert cursor.line == 2
    assert cursor.advance() == ' '
    assert cursor.line == 2
    assert cursor.advance() == '\n'
    assert cursor.line == 3


def test_end_of_input():
    cursor = Cursor('x \ty')

    assert not cursor.at_end()
    cursor.skip(2)
    assert cursor.at_end()
    assert cursor.advance() is None
    assert cursor.peek() is None
    assert cursor.pos == 2


def test_empty_source():
    assert Cursor('').at_end()
    assert Cursor('only text').at_end()
