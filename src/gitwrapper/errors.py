"""
Exception hierarchy for git invocations.

The set of kinds is closed: every failure raised by this package is one of
the classes below. Errors derived from a finished git process carry its exit
code and a trimmed excerpt of its stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

__all__ = [
    'GitError',
    'InvocationError',
    'CommandTimeoutError',
    'PosixError',
    'ParseError',
    'RepositoryError',
    'LockError',
    'WorkTreeDirtyError',
    'BareRepositoryError',
    'RefNotFound',
    'RemoteNotFound',
    'CommitError',
    'NothingToCommit',
    'InvalidAuthor',
    'StagingError',
    'NothingToStash',
    'ApplyConflict',
    'PathspecError',
    'CloneError',
    'CloneDestinationError',
    'ConfigError',
    'ConfigKeyNotFound',
    'ConfigKeyInvalid',
    'InvalidConfigFile',
    'ConfigWriteError',
    'SubtreeError',
    'RemoteError',
    'FileNotFoundInRepository',
]


class GitError(Exception):
    """Base class for every error raised by gitwrapper."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: Optional[int] = None,
        stderr: str = '',
    ):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        if self.exit_code is None:
            return self.message
        return f"{self.message} (exit code {self.exit_code})"


class InvocationError(GitError):
    """The git executable could not be launched."""


class CommandTimeoutError(InvocationError):
    """The git process exceeded its deadline and was killed."""

    def __init__(self, message: str, *, timeout: float):
        super().__init__(message)
        self.timeout = timeout


class PosixError(GitError):
    """
    A path-layer failure detected before any process is spawned.

    ``errno`` holds the matching ``errno`` module constant (ENOENT, EINVAL,
    ENOTDIR, EACCES).
    """

    def __init__(self, errno: int, message: str, path: Union[Path, str, None] = None):
        super().__init__(message)
        self.errno = errno
        self.path = path


class ParseError(GitError):
    """Git exited successfully but its output had an unexpected shape."""

    def __init__(self, message: str, output: str = ''):
        super().__init__(message)
        self.output = output


class RepositoryError(GitError):
    """Git exited with a failure that no more specific kind describes."""


class LockError(RepositoryError):
    """Another process holds a repository lock file."""


class WorkTreeDirtyError(RepositoryError):
    """The operation requires a clean working tree and index."""


class BareRepositoryError(RepositoryError):
    """The operation requires a working tree."""


class RefNotFound(RepositoryError):
    """A reference or revision could not be resolved to a commit."""

    def __init__(self, message: str, *, ref: str = '', exit_code: Optional[int] = None, stderr: str = ''):
        super().__init__(message, exit_code=exit_code, stderr=stderr)
        self.ref = ref


class RemoteNotFound(RefNotFound):
    """No remote matching the request is configured."""


class CommitError(RepositoryError):
    """git-commit(1) failed."""


class NothingToCommit(CommitError):
    """There are no staged changes to commit."""


class InvalidAuthor(CommitError):
    """The author override or the committer identity is unusable."""


class StagingError(RepositoryError):
    """Index manipulation (add, stash push/apply/drop) failed."""


class NothingToStash(StagingError):
    """There are no local changes to stash."""


class ApplyConflict(StagingError):
    """A stash could not be applied cleanly."""


class PathspecError(StagingError):
    """A path given for staging matched nothing or lies outside the work tree."""


class CloneError(RepositoryError):
    """git-clone(1) failed (network, authentication, unknown source)."""


class CloneDestinationError(CloneError):
    """The clone destination already exists and is not empty."""


class ConfigError(RepositoryError):
    """git-config(1) failed."""


class ConfigKeyNotFound(ConfigError):
    """The requested configuration key is not set."""


class ConfigKeyInvalid(ConfigError):
    """The section or key name is invalid."""


class InvalidConfigFile(ConfigError):
    """The configuration file could not be parsed."""


class ConfigWriteError(ConfigError):
    """The configuration file could not be written."""


class SubtreeError(RepositoryError):
    """git-subtree(1) failed."""


class RemoteError(RepositoryError):
    """Talking to a remote (ls-remote) failed."""


class FileNotFoundInRepository(RepositoryError):
    """The requested path does not exist in the index or revision."""
