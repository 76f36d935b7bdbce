from typing import Iterator, Protocol

from . import data, types


class Repository(Protocol):
    """What revision resolution needs from a commit store.

    Lookups of an absent object raise `ObjectNotFound`, any other read
    failure raises `RepositoryError`.
    """

    def head(self) -> types.Commit: ...

    def resolve_symbolic_name(self, name: str) -> types.Commit: ...

    def commit_by_id(self, oid: types.OID) -> types.Commit: ...

    def parents_of(self, commit_: types.Commit) -> Iterator[types.Commit]: ...

    def iter_commits(self) -> Iterator[types.Commit]: ...


def open_repository(path) -> Repository:
    store = data.ObjectStore(path)
    if store.exists():
        return store

    from .gitrepo import GitRepository
    return GitRepository.discover(path)
