"""Tests for the extended revision grammar."""

from __future__ import annotations

import pytest

from revlint.errors import InvalidReferenceSyntax
from revlint.parser import MAX_PATH_LENGTH, Parser, parse_symbolic_reference_path
from revlint.scanner import Token
from revlint.types import SymbolicRefPathStmt


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("master", SymbolicRefPathStmt("master", [])),
        ("master~^", SymbolicRefPathStmt("master", [1, 1])),
        ("master^2", SymbolicRefPathStmt("master", [2])),
        ("master~0", SymbolicRefPathStmt("master", [])),
        ("v1.0", SymbolicRefPathStmt("v1.0", [])),
        ("HEAD~2^2", SymbolicRefPathStmt("HEAD", [1, 1, 2])),
        ("feature-42^1", SymbolicRefPathStmt("feature-42", [1])),
        (
            "master~3^2~2^1^~5^^~10",
            SymbolicRefPathStmt("master", [1, 1, 1, 2, 1, 1, 1, 1] + [1] * 5 + [1, 1] + [1] * 10),
        ),
    ],
)
def test_parse_symbolic_reference_path(text: str, expected: SymbolicRefPathStmt) -> None:
    """Ensure tildes expand to first-parent steps and carets keep their level."""
    assert parse_symbolic_reference_path(text) == expected


def test_parse_long_path_length() -> None:
    """Ensure the full expansion of a mixed path has one entry per step."""
    stmt = parse_symbolic_reference_path("master~3^2~2^1^~5^^~10")
    assert len(stmt.ref_path) == 25
    assert stmt.ref_path.count(2) == 1


@pytest.mark.parametrize(
    ("text", "error"),
    [
        (".test", "branch name must not start with a dot"),
        ("te..st", "branch name must not contain a double dot"),
        ("test..", "branch name must not contain a double dot"),
        ("test/", "branch name must not end with a slash"),
        ("test/~", "branch name must not end with a slash"),
        ("test/^", "branch name must not end with a slash"),
        ("feature/x", "branch name must not end with a slash"),
        ("test:", "branch name must not contain a colon"),
        ("test.lock", "branch name cannot end with .lock"),
        ("test.lock~", "branch name cannot end with .lock"),
        ("test.lock^", "branch name cannot end with .lock"),
        ("test.LOCK", "branch name cannot end with .lock"),
        ("te st", "branch name contains a space character"),
        ("te\tst", "branch name contains a control character"),
        ("~1", "branch name must not be empty"),
        ("master~^22", "level associated with a caret must be 1 or 2"),
        ("master^3", "level associated with a caret must be 1 or 2"),
        ("master~tg^", "must be a caret or a tilde, optionally followed by a number"),
        ("master~.", "must be a caret or a tilde, optionally followed by a number"),
    ],
)
def test_parse_symbolic_reference_path_with_errors(text: str, error: str) -> None:
    """Ensure every naming and path rule reports its own message."""
    with pytest.raises(InvalidReferenceSyntax) as excinfo:
        parse_symbolic_reference_path(text)
    assert str(excinfo.value) == error


@pytest.mark.parametrize(
    "text",
    ["master~99999999999", "master~" + "9" * 5000, f"master~{MAX_PATH_LENGTH}^", f"master~{MAX_PATH_LENGTH - 1}~2"],
)
def test_parse_path_too_long(text: str) -> None:
    """Ensure paths deeper than any walkable history are rejected while parsing."""
    with pytest.raises(InvalidReferenceSyntax) as excinfo:
        parse_symbolic_reference_path(text)
    assert str(excinfo.value) == f"parent path must not be longer than {MAX_PATH_LENGTH} steps"


def test_parse_path_at_length_limit() -> None:
    """Ensure the deepest allowed path still parses, leading zeros included."""
    assert len(parse_symbolic_reference_path(f"master~0{MAX_PATH_LENGTH}").ref_path) == MAX_PATH_LENGTH
    assert parse_symbolic_reference_path("master^02").ref_path == [2]
    with pytest.raises(InvalidReferenceSyntax, match="caret must be 1 or 2"):
        parse_symbolic_reference_path("master^" + "9" * 5000)


def test_lock_inside_name_is_allowed() -> None:
    """Ensure only a trailing .lock is rejected."""
    assert parse_symbolic_reference_path("test.locked").branch_name == "test.locked"


def test_unscan_replays_one_token() -> None:
    """Ensure a pushed back token is returned by the next scan."""
    parser = Parser("a~")
    assert parser.scan() == (Token.CHAR, "a")
    parser.unscan()
    assert parser.scan() == (Token.CHAR, "a")
    assert parser.scan() == (Token.TILDE, "~")
