import logging
from collections import deque
from typing import Iterable, Iterator

from . import types
from .data import is_oid
from .errors import (
    BrowsingTreeFailure,
    NoDiffBetweenReferences,
    ObjectNotFound,
    ParentNotFound,
    ReferenceNotFound,
    RepositoryError,
)
from .parser import parse_symbolic_reference_path
from .repository import Repository

logger = logging.getLogger(__name__)


def resolve_ref(ref: str, repository: Repository) -> types.Commit:
    return resolve(parse_symbolic_reference_path(ref), repository)


def resolve(stmt: types.SymbolicRefPathStmt, repository: Repository) -> types.Commit:
    commit_ = _resolve_branch_name(stmt.branch_name, repository)

    for level in stmt.ref_path:
        if not commit_.parents:
            raise ParentNotFound("can't find reference")
        if level > len(commit_.parents):
            raise ParentNotFound("can't find parent")
        try:
            commit_ = repository.commit_by_id(commit_.parents[level - 1])
        except ObjectNotFound:
            raise ParentNotFound("can't find parent") from None

    logger.debug('%s%s resolved to %s', stmt.branch_name, _format_path(stmt.ref_path), commit_.oid)
    return commit_


def _format_path(ref_path):
    return ''.join(f'^{level}' for level in ref_path)


def _resolve_branch_name(name: str, repository: Repository) -> types.Commit:
    if name.lower() == 'head':
        try:
            return repository.head()
        except (ReferenceNotFound, ObjectNotFound):
            logger.debug('HEAD can\'t be resolved, trying refs')

    try:
        return repository.resolve_symbolic_name(name)
    except ReferenceNotFound:
        pass
    except ObjectNotFound:
        raise ReferenceNotFound(name) from None

    if is_oid(name):
        return fetch_commit_by_id(repository, name)

    raise ReferenceNotFound(name)


def fetch_commit_by_id(repository: Repository, oid: types.OID) -> types.Commit:
    """Find a commit by its full id.

    Falls back to scanning every commit object when the direct lookup fails,
    shallow clones may not index some commits. Ids naming something other
    than a readable commit are reported as unknown references.
    """
    try:
        return repository.commit_by_id(oid)
    except ObjectNotFound:
        logger.debug('direct lookup of %s failed, scanning commit objects', oid)
    except RepositoryError as e:
        logger.debug('%s is not a readable commit (%s), scanning commit objects', oid, e)

    wanted = oid.lower()
    try:
        for commit_ in repository.iter_commits():
            if commit_.oid == wanted:
                return commit_
    except RepositoryError as e:
        raise ReferenceNotFound(oid) from e
    raise ReferenceNotFound(oid)


def _iter_parents(repository: Repository, commit_: types.Commit) -> Iterator[types.Commit]:
    """Yield the parents that are present, stopping at a shallow boundary."""
    try:
        yield from repository.parents_of(commit_)
    except ObjectNotFound as e:
        logger.debug('parent %s of %s is missing, treating it as a leaf', e.oid, commit_.oid)
    except RepositoryError as e:
        raise BrowsingTreeFailure(commit_.oid) from e


def iter_commits_and_parents(repository: Repository, commits: Iterable[types.Commit]) -> Iterator[types.Commit]:
    """Breadth-first walk over every parent edge, each commit yielded once."""
    commits = deque(commits)
    visited = {commit_.oid for commit_ in commits}

    while commits:
        commit_ = commits.popleft()
        yield commit_

        for parent in _iter_parents(repository, commit_):
            if parent.oid not in visited:
                visited.add(parent.oid)
                commits.append(parent)


def get_ancestors(repository: Repository, commit_: types.Commit) -> set[types.OID]:
    return {c.oid for c in iter_commits_and_parents(repository, [commit_])}


def fetch_interval(repository: Repository, from_ref: str, to_ref: str) -> list[types.Commit]:
    """Return the commits reachable from `to_ref` but not from `from_ref`.

    Same set and order as ``git log from_ref..to_ref``: newest first, a merge
    commit comes before the commits it brings in from its second parent.
    """
    from_commit = resolve_ref(from_ref, repository)
    to_commit = resolve_ref(to_ref, repository)

    excluded = get_ancestors(repository, from_commit)
    if to_commit.oid in excluded:
        raise NoDiffBetweenReferences(from_ref, to_ref)

    result = []
    commits = deque([to_commit])
    seen = {to_commit.oid}

    while commits:
        commit_ = commits.popleft()
        if commit_.oid not in excluded:
            result.append(commit_)

        # pushed one at a time to the front: the last parent is walked first
        for parent in _iter_parents(repository, commit_):
            if parent.oid not in seen:
                seen.add(parent.oid)
                commits.appendleft(parent)

    if not result:
        raise NoDiffBetweenReferences(from_ref, to_ref)

    logger.debug('%d commits between %s and %s', len(result), from_ref, to_ref)
    return result
