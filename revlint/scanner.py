import enum


class Token(enum.Enum):
    EOF = 'eof'
    COLON = 'colon'
    TILDE = 'tilde'
    CARET = 'caret'
    DOT = 'dot'
    SLASH = 'slash'
    CONTROL = 'control'
    SPACE = 'space'
    NUMBER = 'number'
    CHAR = 'char'


_SINGLE_CHAR_TOKENS = {
    ':': Token.COLON,
    '~': Token.TILDE,
    '^': Token.CARET,
    '.': Token.DOT,
    '/': Token.SLASH,
    ' ': Token.SPACE,
}


class Scanner:
    """Split a revision string into tokens, one per call to `scan`.

    Every token is a single character except digit runs, which come out as
    one NUMBER token. A NUL character ends the input like the end of the
    string does.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def _read(self) -> str:
        if self._pos >= len(self._text):
            return '\x00'
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def scan(self) -> tuple[Token, str]:
        ch = self._read()

        if ch == '\x00':
            return Token.EOF, ''
        if ch.isdecimal() and ch.isascii():
            return Token.NUMBER, self._scan_number(ch)
        if ch in _SINGLE_CHAR_TOKENS:
            return _SINGLE_CHAR_TOKENS[ch], ch
        if ord(ch) < 0x20 or ord(ch) == 0x7f:
            return Token.CONTROL, ch
        return Token.CHAR, ch

    def _scan_number(self, first: str) -> str:
        digits = first
        while self._pos < len(self._text):
            ch = self._text[self._pos]
            if not (ch.isdecimal() and ch.isascii()):
                break
            digits += ch
            self._pos += 1
        return digits
