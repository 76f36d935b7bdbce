class RevlintError(Exception):
    """Base class of every failure reported to the user."""


class InvalidReferenceSyntax(RevlintError):
    pass


class ReferenceNotFound(RevlintError):
    def __init__(self, name):
        self.name = name
        super().__init__(f'Reference "{name}" can\'t be found in git repository')


class ParentNotFound(RevlintError):
    pass


class BrowsingTreeFailure(RevlintError):
    def __init__(self, oid):
        self.oid = oid
        super().__init__(f'An error occurred when browsing commit tree from {oid}')


class NoDiffBetweenReferences(RevlintError):
    def __init__(self, from_ref, to_ref):
        self.from_ref = from_ref
        self.to_ref = to_ref
        super().__init__(
            f"Can't produce a diff between {from_ref} and {to_ref}, "
            f'check your range is correct by running "git log {from_ref}..{to_ref}" command'
        )


class RepositoryError(RevlintError):
    """The repository can't be read."""


class ObjectNotFound(RepositoryError):
    """An object is missing from the store, typically past a shallow clone boundary."""

    def __init__(self, oid):
        self.oid = oid
        super().__init__(f'Object {oid} not found')


class ConfigError(RevlintError):
    pass
