"""
Error types

Only conditions that must stop a run are exceptions. Members and methods
that cannot be represented are skipped by the emitters instead.
"""


class ExternGenError(Exception):
    """Base class for fatal generation errors"""


class HeaderPathError(ExternGenError):
    """The canonical include path of a type cannot be determined"""

    def __init__(self, path: str, package: str):
        super().__init__(f'Cannot determine header path of {path} on package {package}')
        self.path = path
        self.package = package


class UnknownTypeError(ExternGenError):
    """A native type of a kind the generator cannot declare"""

    def __init__(self, native: object):
        super().__init__(f'Cannot generate a declaration for {native!r}')
        self.native = native
