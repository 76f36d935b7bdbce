from typing import TypeAlias, NamedTuple, Literal

OID: TypeAlias = str  # hash
RefName: TypeAlias = str  # e.g. refs/heads/master
ObjectType: TypeAlias = Literal['blob', 'tree', 'commit']
Matchers: TypeAlias = dict[str, str]  # name -> regexp


class Commit(NamedTuple):
    oid: OID
    tree: OID | None
    parents: list[OID]
    message: str


class RefValue(NamedTuple):
    symbolic: bool
    value: OID | RefName | None


class SymbolicRefPathStmt(NamedTuple):
    branch_name: str
    ref_path: list[int]  # 1 = first parent, 2 = second parent


class Options(NamedTuple):
    check_summary_length: bool = False
    exclude_merge_commits: bool = False
    summary_length: int = 50


class Matching(NamedTuple):
    oid: OID | None  # None when a bare message was checked
    message: str
    message_error: str | None
    summary_error: str | None
