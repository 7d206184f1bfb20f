"""
Classification of git exit codes and stderr into typed errors.

Exit-code meaning depends on the operation: ``merge-base`` exiting with 1
means "no common ancestor", ``merge-base --is-ancestor`` exiting with 1 means
"not an ancestor" and ``diff --quiet`` exiting with 1 means "there are
differences". None of these are failures. This module is the single place
that encodes that table, so call sites never look at stderr text themselves.

Stderr matching is best effort: git's messages change between versions, so
every operation falls back to a generic error kind for its category.
"""

from __future__ import annotations

from typing import Optional

from gitwrapper.constants import (
    APPLY_CONFLICT_PATTERNS,
    CONFIG_EXIT_FILE_INVALID,
    CONFIG_EXIT_KEY_INVALID,
    CONFIG_EXIT_NO_SECTION,
    CONFIG_EXIT_WRITE_FAILED,
    EXIT_NEGATIVE,
    EXIT_SUCCESS,
    FILE_NOT_IN_REVISION_PATTERNS,
    INVALID_AUTHOR_PATTERNS,
    INVALID_CONFIG_FILE_PATTERNS,
    LOCK_PATTERNS,
    NOTHING_TO_COMMIT_PATTERNS,
    NOTHING_TO_STASH_PATTERNS,
    PATHSPEC_PATTERNS,
    STDERR_EXCERPT_LIMIT,
    UNKNOWN_REVISION_PATTERNS,
)
from gitwrapper.errors import (
    ApplyConflict,
    CloneError,
    CommitError,
    ConfigError,
    ConfigKeyInvalid,
    ConfigKeyNotFound,
    ConfigWriteError,
    FileNotFoundInRepository,
    GitError,
    InvalidAuthor,
    InvalidConfigFile,
    LockError,
    NothingToCommit,
    NothingToStash,
    PathspecError,
    RefNotFound,
    RemoteError,
    RepositoryError,
    StagingError,
    SubtreeError,
)
from gitwrapper.models import CommandOutcome, OperationKind
from gitwrapper.parsers import decode_output

__all__ = [
    'NON_ERROR_EXIT_CODES',
    'classify',
    'check',
    'stderr_excerpt',
]

# Exit codes that are results rather than failures, per operation
NON_ERROR_EXIT_CODES: dict[OperationKind, frozenset[int]] = {
    OperationKind.MERGE_BASE: frozenset({EXIT_SUCCESS, EXIT_NEGATIVE}),
    OperationKind.IS_ANCESTOR: frozenset({EXIT_SUCCESS, EXIT_NEGATIVE}),
    OperationKind.DIFF_QUIET: frozenset({EXIT_SUCCESS, EXIT_NEGATIVE}),
}

_DEFAULT_NON_ERROR = frozenset({EXIT_SUCCESS})

# Fallback error kind per operation category
_FALLBACK_ERRORS: dict[OperationKind, type[RepositoryError]] = {
    OperationKind.COMMIT: CommitError,
    OperationKind.ADD: StagingError,
    OperationKind.INDEX: StagingError,
    OperationKind.STASH_PUSH: StagingError,
    OperationKind.STASH_APPLY: StagingError,
    OperationKind.STASH_DROP: StagingError,
    OperationKind.STASH_LIST: StagingError,
    OperationKind.CLONE: CloneError,
    OperationKind.CONFIG_GET: ConfigError,
    OperationKind.CONFIG_SET: ConfigError,
    OperationKind.SUBTREE: SubtreeError,
    OperationKind.LS_REMOTE: RemoteError,
}

# Operations that take revisions and report unknown ones on stderr
_REVISION_OPERATIONS = frozenset({
    OperationKind.GENERIC,
    OperationKind.RESOLVE,
    OperationKind.VERIFY_REF,
    OperationKind.MERGE_BASE,
    OperationKind.IS_ANCESTOR,
    OperationKind.RESET,
    OperationKind.CHECKOUT,
    OperationKind.SHOW_FILE,
})


def stderr_excerpt(data: bytes, limit: int = STDERR_EXCERPT_LIMIT) -> str:
    """Decoded, stripped stderr, keeping the tail when it is too long."""
    text = decode_output(data).strip()
    if len(text) <= limit:
        return text
    return '...' + text[-limit:]


def _matches(text: str, patterns: tuple[str, ...]) -> bool:
    return any(p in text for p in patterns)


def _summary(outcome: CommandOutcome, operation: OperationKind, subject: str) -> str:
    """One-line human message: the last nonblank stderr (or stdout) line."""
    for stream in (outcome.stderr, outcome.stdout):
        lines = [ln.strip() for ln in decode_output(stream).splitlines() if ln.strip()]
        if lines:
            detail = lines[-1]
            break
    else:
        detail = f"git {operation.value} failed"
    return f"{subject}: {detail}" if subject else detail


def _select_error(operation: OperationKind, exit_code: int, text: str) -> type[RepositoryError]:
    """Pick the error class for a failed outcome. ``text`` is lowercased."""
    if _matches(text, LOCK_PATTERNS):
        return LockError

    if operation is OperationKind.VERIFY_REF and exit_code == EXIT_NEGATIVE:
        return RefNotFound

    if operation is OperationKind.COMMIT:
        if _matches(text, INVALID_AUTHOR_PATTERNS):
            return InvalidAuthor
        if _matches(text, NOTHING_TO_COMMIT_PATTERNS):
            return NothingToCommit
        return CommitError

    if operation is OperationKind.STASH_PUSH and _matches(text, NOTHING_TO_STASH_PATTERNS):
        return NothingToStash

    if operation is OperationKind.STASH_APPLY and _matches(text, APPLY_CONFLICT_PATTERNS):
        return ApplyConflict

    if operation is OperationKind.ADD and _matches(text, PATHSPEC_PATTERNS):
        return PathspecError

    if operation in (OperationKind.CONFIG_GET, OperationKind.CONFIG_SET) and _matches(text, INVALID_CONFIG_FILE_PATTERNS):
        return InvalidConfigFile

    if operation is OperationKind.CONFIG_GET:
        if exit_code == CONFIG_EXIT_KEY_INVALID:
            return ConfigKeyNotFound
        if exit_code == CONFIG_EXIT_FILE_INVALID:
            return InvalidConfigFile
        return ConfigError

    if operation is OperationKind.CONFIG_SET:
        return {
            CONFIG_EXIT_KEY_INVALID: ConfigKeyInvalid,
            CONFIG_EXIT_NO_SECTION: ConfigKeyInvalid,
            CONFIG_EXIT_FILE_INVALID: InvalidConfigFile,
            CONFIG_EXIT_WRITE_FAILED: ConfigWriteError,
        }.get(exit_code, ConfigError)

    if operation is OperationKind.SHOW_FILE and _matches(text, FILE_NOT_IN_REVISION_PATTERNS):
        return FileNotFoundInRepository

    if operation in _REVISION_OPERATIONS and _matches(text, UNKNOWN_REVISION_PATTERNS):
        return RefNotFound

    return _FALLBACK_ERRORS.get(operation, RepositoryError)


def classify(
    operation: OperationKind,
    outcome: CommandOutcome,
    *,
    subject: str = '',
) -> Optional[GitError]:
    """
    Decide whether an outcome is a failure, and which kind.

    Args:
        operation: Which row of the classification table applies
        outcome: The finished process
        subject: What the command was about (a ref name, a path); used in
            the message and stored on RefNotFound

    Returns:
        None when the outcome is not a failure for this operation,
        otherwise the typed error (not raised).
    """
    allowed = NON_ERROR_EXIT_CODES.get(operation, _DEFAULT_NON_ERROR)
    if outcome.exit_code in allowed:
        return None

    # git commit reports "nothing to commit" on stdout, so look at both
    text = (decode_output(outcome.stderr) + '\n' + decode_output(outcome.stdout)).lower()
    error_cls = _select_error(operation, outcome.exit_code, text)
    message = _summary(outcome, operation, subject)
    excerpt = stderr_excerpt(outcome.stderr)

    if issubclass(error_cls, RefNotFound):
        return error_cls(message, ref=subject, exit_code=outcome.exit_code, stderr=excerpt)
    return error_cls(message, exit_code=outcome.exit_code, stderr=excerpt)


def check(
    operation: OperationKind,
    outcome: CommandOutcome,
    *,
    subject: str = '',
) -> CommandOutcome:
    """
    Return the outcome unchanged, or raise its classified error.

    Raises:
        GitError: The subclass chosen by classify()
    """
    error = classify(operation, outcome, subject=subject)
    if error is not None:
        raise error
    return outcome
