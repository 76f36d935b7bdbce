"""Repository backend reading real git repositories through pygit2."""
import logging
from typing import Iterator

import pygit2

from . import types
from .errors import ObjectNotFound, ReferenceNotFound, RepositoryError

logger = logging.getLogger(__name__)


def _to_commit(commit_: pygit2.Commit) -> types.Commit:
    return types.Commit(
        oid=str(commit_.id),
        tree=str(commit_.tree_id),
        parents=[str(oid) for oid in commit_.parent_ids],
        message=commit_.message,
    )


class GitRepository:
    """Read-only view over a git repository.

    A handle is not safe to share between threads, open one per resolution
    when linting concurrently.
    """

    def __init__(self, repo: pygit2.Repository):
        self.repo = repo

    @classmethod
    def discover(cls, path) -> 'GitRepository':
        repo_path = pygit2.discover_repository(str(path))
        if repo_path is None:
            raise RepositoryError(f'No git repository found at "{path}"')
        try:
            return cls(pygit2.Repository(repo_path))
        except pygit2.GitError as e:
            raise RepositoryError(f'Git repository at "{path}" can\'t be read: {e}') from e

    def _lookup(self, oid: types.OID) -> types.Commit:
        try:
            obj = self.repo.get(oid)
        except ValueError:
            raise ObjectNotFound(oid) from None
        except pygit2.GitError as e:
            raise RepositoryError(f'Object {oid} can\'t be read: {e}') from e
        if obj is None:
            raise ObjectNotFound(oid)

        try:
            commit_ = obj.peel(pygit2.Commit)
        except (ValueError, pygit2.GitError) as e:
            raise RepositoryError(f'Object {oid} is not a commit') from e
        return _to_commit(commit_)

    def head(self) -> types.Commit:
        if self.repo.head_is_unborn:
            raise ReferenceNotFound('HEAD')
        try:
            target = self.repo.head.target
        except pygit2.GitError as e:
            raise ReferenceNotFound('HEAD') from e
        return self._lookup(str(target))

    def resolve_symbolic_name(self, name: str) -> types.Commit:
        refs_to_try = [
            f'{name}',
            f'refs/{name}',
            f'refs/tags/{name}',
            f'refs/heads/{name}',
            f'refs/remotes/{name}',
        ]
        for ref in refs_to_try:
            try:
                reference = self.repo.references.get(ref)
            except (ValueError, pygit2.InvalidSpecError):
                continue
            if reference is not None:
                logger.debug('%s resolved through %s', name, ref)
                return self._lookup(str(reference.resolve().target))
        raise ReferenceNotFound(name)

    def commit_by_id(self, oid: types.OID) -> types.Commit:
        return self._lookup(oid)

    def parents_of(self, commit_: types.Commit) -> Iterator[types.Commit]:
        for parent in commit_.parents:
            yield self._lookup(parent)

    def iter_commits(self) -> Iterator[types.Commit]:
        try:
            for oid in self.repo:
                obj = self.repo.get(oid)
                if isinstance(obj, pygit2.Commit):
                    yield _to_commit(obj)
        except pygit2.GitError as e:
            raise RepositoryError(f'Objects of "{self.repo.path}" can\'t be listed: {e}') from e
