import hashlib
import logging
import os
import string
from typing import Iterable, Iterator

from . import types
from .errors import ObjectNotFound, ReferenceNotFound, RepositoryError
from .types import RefValue

logger = logging.getLogger(__name__)

STORE_DIR = '.revlint'


def is_oid(name: str) -> bool:
    return len(name) == 40 and all(c in string.hexdigits for c in name)


class ObjectStore:
    """Plain-file commit store: one file per object, one file per ref.

    Objects live in ``objects/<oid>`` as ``<type>\\0<content>``, refs are text
    files holding either an oid or ``ref: <target>`` for symbolic refs.
    """

    def __init__(self, root):
        self.git_dir = f'{root}/{STORE_DIR}'

    def init(self):
        os.makedirs(f'{self.git_dir}/objects', exist_ok=True)
        self.update_ref('HEAD', RefValue(symbolic=True, value='refs/heads/master'), deref=False)

    def exists(self) -> bool:
        return os.path.isdir(f'{self.git_dir}/objects')

    def hash_object(self, data: bytes, type_: types.ObjectType = 'blob') -> types.OID:
        obj = type_.encode() + b'\x00' + data
        oid = hashlib.sha1(obj).hexdigest()
        with open(f'{self.git_dir}/objects/{oid}', 'wb') as out:
            out.write(obj)
        return oid

    def get_object(self, oid: types.OID, expected: types.ObjectType | None = 'blob') -> bytes:
        type_, content = self._read_object(oid)
        if expected is not None and type_ != expected:
            raise RepositoryError(f'Expected {expected}, got {type_} for object {oid}')
        return content

    def _read_object(self, oid: types.OID) -> tuple[str, bytes]:
        if not is_oid(oid):
            raise ObjectNotFound(oid)
        try:
            with open(f'{self.git_dir}/objects/{oid}', 'rb') as f:
                obj = f.read()
        except FileNotFoundError:
            raise ObjectNotFound(oid) from None
        except OSError as e:
            raise RepositoryError(f'Object {oid} can\'t be read: {e}') from e

        type_, _, content = obj.partition(b'\x00')
        return type_.decode(errors='replace'), content

    def update_ref(self, ref: types.RefName, value: RefValue, deref=True):
        ref = self._get_ref_internal(ref, deref)[0]

        if not value.value:
            raise ValueError(f'Empty value for ref {ref}')
        if value.symbolic:
            value = f'ref: {value.value}'
        else:
            value = value.value
        ref_path = f'{self.git_dir}/{ref}'
        os.makedirs(os.path.dirname(ref_path), exist_ok=True)
        with open(ref_path, 'w') as f:
            f.write(value)

    def get_ref(self, ref: types.RefName, deref=True) -> RefValue:
        return self._get_ref_internal(ref, deref)[1]

    def _get_ref_internal(self, ref: types.RefName, deref: bool) -> tuple[types.RefName, RefValue]:
        ref_path = f'{self.git_dir}/{ref}'
        value = None
        if os.path.isfile(ref_path):
            with open(ref_path) as f:
                value = f.read().strip()

        symbolic = bool(value) and value.startswith('ref:')
        if symbolic:
            value = value.split(':', 1)[1].strip()
            if deref:
                return self._get_ref_internal(value, deref=True)
        return ref, RefValue(symbolic=symbolic, value=value)

    def create_branch(self, name: str, oid: types.OID):
        self.update_ref(f'refs/heads/{name}', RefValue(symbolic=False, value=oid))

    def create_tag(self, name: str, oid: types.OID):
        self.update_ref(f'refs/tags/{name}', RefValue(symbolic=False, value=oid))

    def checkout(self, branch: str):
        self.update_ref('HEAD', RefValue(symbolic=True, value=f'refs/heads/{branch}'), deref=False)

    def write_commit(self, message: str, parents: Iterable[types.OID] = (), tree: types.OID | None = None) -> types.OID:
        if tree is None:
            tree = self.hash_object(b'', 'tree')

        commit_ = f'tree {tree}\n'
        for parent in parents:
            commit_ += f'parent {parent}\n'
        commit_ += '\n'
        commit_ += message

        return self.hash_object(commit_.encode(), 'commit')

    def commit(self, message: str, parents: list[types.OID] | None = None) -> types.OID:
        """Write a commit on top of HEAD and move HEAD (or its branch) to it."""
        if parents is None:
            head = self.get_ref('HEAD').value
            parents = [head] if head else []
        oid = self.write_commit(message, parents)
        self.update_ref('HEAD', RefValue(symbolic=False, value=oid))
        return oid

    def get_commit(self, oid: types.OID) -> types.Commit:
        return _parse_commit(oid, self.get_object(oid, 'commit'))

    # Repository protocol

    def head(self) -> types.Commit:
        oid = self.get_ref('HEAD').value
        if not oid:
            raise ReferenceNotFound('HEAD')
        return self.get_commit(oid)

    def resolve_symbolic_name(self, name: str) -> types.Commit:
        refs_to_try = [
            f'{name}',
            f'refs/{name}',
            f'refs/tags/{name}',
            f'refs/heads/{name}',
            f'refs/remotes/{name}',
        ]
        for ref in refs_to_try:
            if oid := self.get_ref(ref).value:
                logger.debug('%s resolved through %s', name, ref)
                return self.get_commit(oid)
        raise ReferenceNotFound(name)

    def commit_by_id(self, oid: types.OID) -> types.Commit:
        return self.get_commit(oid)

    def parents_of(self, commit_: types.Commit) -> Iterator[types.Commit]:
        for parent in commit_.parents:
            yield self.get_commit(parent)

    def iter_commits(self) -> Iterator[types.Commit]:
        try:
            oids = sorted(os.listdir(f'{self.git_dir}/objects'))
        except OSError as e:
            raise RepositoryError(f'Objects of "{self.git_dir}" can\'t be listed: {e}') from e

        for oid in oids:
            type_, content = self._read_object(oid)
            if type_ == 'commit':
                yield _parse_commit(oid, content)


def _parse_commit(oid: types.OID, raw: bytes) -> types.Commit:
    try:
        text = raw.decode()
    except UnicodeDecodeError as e:
        raise RepositoryError(f'Commit {oid} is not valid UTF-8: {e}') from e

    parents = []
    tree = None
    headers, _, message = text.partition('\n\n')
    for line in headers.splitlines():
        key, sep, value = line.partition(' ')
        if not sep:
            raise RepositoryError(f'Malformed header "{line}" in commit {oid}')
        if key == 'tree':
            tree = value
        elif key == 'parent':
            parents.append(value)
        else:
            raise RepositoryError(f'Unknown field {key} in commit {oid}')

    return types.Commit(oid=oid, tree=tree, parents=parents, message=message)
