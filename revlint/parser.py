"""Parser for extended revision names such as ``master~3^2``.

A revision is a branch name followed by parent selectors. ``^`` selects a
parent of a merge commit (``^1`` or ``^2``, ``^`` alone meaning ``^1``) and
``~N`` follows the first parent N times. The result is flattened into the list
of parent indexes to walk, so ``master~2^2`` becomes ``[1, 1, 2]``.
"""
import logging

from . import types
from .errors import InvalidReferenceSyntax
from .scanner import Scanner, Token

logger = logging.getLogger(__name__)

_NAME_TERMINATORS = (Token.TILDE, Token.CARET, Token.EOF)

# deepest parent walk a revision may ask for
MAX_PATH_LENGTH = 1_000_000


class Parser:

    def __init__(self, text: str):
        self._scanner = Scanner(text)
        self._last: tuple[Token, str] = (Token.EOF, '')
        self._peeked = False

    def scan(self) -> tuple[Token, str]:
        if self._peeked:
            self._peeked = False
            return self._last
        self._last = self._scanner.scan()
        return self._last

    def unscan(self):
        self._peeked = True

    def parse_symbolic_reference_path(self) -> types.SymbolicRefPathStmt:
        branch_name = self.parse_branch_name()
        ref_path = self.parse_ref_path()
        logger.debug('parsed branch %r with path %s', branch_name, ref_path)
        return types.SymbolicRefPathStmt(branch_name=branch_name, ref_path=ref_path)

    def parse_branch_name(self) -> str:
        buf = ''
        previous = None
        while True:
            tok, lit = self.scan()
            _check_branch_name_token(tok)
            _check_branch_name_conditions(tok, previous, buf)

            if tok in (Token.TILDE, Token.CARET):
                self.unscan()
                return buf
            if tok == Token.EOF:
                return buf

            buf += lit
            previous = tok

    def parse_ref_path(self) -> list[int]:
        path = []
        while True:
            tok, _ = self.scan()
            if tok == Token.CARET:
                level = self._parse_caret_level()
                _check_path_length(len(path) + 1)
                path.append(level)
            elif tok == Token.TILDE:
                level = self._parse_tilde_level()
                _check_path_length(len(path) + level)
                path.extend([1] * level)
            elif tok == Token.EOF:
                return path
            else:
                raise InvalidReferenceSyntax('must be a caret or a tilde, optionally followed by a number')

    def _parse_caret_level(self) -> int:
        tok, lit = self.scan()
        if tok != Token.NUMBER:
            self.unscan()
            return 1

        level = _number(lit)
        if level not in (1, 2):
            raise InvalidReferenceSyntax('level associated with a caret must be 1 or 2')
        return level

    def _parse_tilde_level(self) -> int:
        tok, lit = self.scan()
        if tok != Token.NUMBER:
            self.unscan()
            return 1
        return _number(lit)


def _check_branch_name_token(tok):
    if tok == Token.COLON:
        raise InvalidReferenceSyntax('branch name must not contain a colon')
    if tok == Token.SLASH:
        # any slash, hierarchical names aren't supported
        raise InvalidReferenceSyntax('branch name must not end with a slash')
    if tok == Token.SPACE:
        raise InvalidReferenceSyntax('branch name contains a space character')
    if tok == Token.CONTROL:
        raise InvalidReferenceSyntax('branch name contains a control character')


def _check_branch_name_conditions(tok, previous, buf):
    if tok == Token.DOT and buf == '':
        raise InvalidReferenceSyntax('branch name must not start with a dot')
    if tok == Token.DOT and previous == Token.DOT:
        raise InvalidReferenceSyntax('branch name must not contain a double dot')
    if tok in _NAME_TERMINATORS and buf[-5:].lower() == '.lock':
        raise InvalidReferenceSyntax('branch name cannot end with .lock')
    if tok in _NAME_TERMINATORS and buf == '':
        raise InvalidReferenceSyntax('branch name must not be empty')


def _check_path_length(length):
    if length > MAX_PATH_LENGTH:
        raise InvalidReferenceSyntax(f'parent path must not be longer than {MAX_PATH_LENGTH} steps')


def _number(lit):
    # clamped so that huge digit runs never reach int()
    digits = lit.lstrip('0') or '0'
    if len(digits) > len(str(MAX_PATH_LENGTH)):
        return MAX_PATH_LENGTH + 1
    return int(digits)


def parse_symbolic_reference_path(text: str) -> types.SymbolicRefPathStmt:
    return Parser(text).parse_symbolic_reference_path()
