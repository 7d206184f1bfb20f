"""
Centralized constants for the gitwrapper package.

This module contains:
- Process invocation defaults (executable, environment handling)
- Exit codes with operation-specific meaning
- Stderr patterns used to classify failures

Stderr text is not a stable interface across git versions. Every pattern
table here is best effort and the classifier always has a generic fallback.
"""

# =============================================================================
# Process invocation
# =============================================================================

# Name (or absolute path) of the git executable
GIT_EXECUTABLE = 'git'

# Environment variables inherited from the parent that would redirect git to a
# different repository than the one we are addressing
SCRUBBED_ENV_VARS: frozenset[str] = frozenset({
    'GIT_DIR',
    'GIT_WORK_TREE',
    'GIT_INDEX_FILE',
})

# Forced on every invocation so stderr patterns below stay matchable
LOCALE_ENV: dict[str, str] = {'LC_ALL': 'C'}

# Longest stderr excerpt kept on an exception
STDERR_EXCERPT_LIMIT = 2000

# Default deadline for clone in the context managers (seconds)
DEFAULT_CLONE_TIMEOUT = 120

# =============================================================================
# Exit codes
# =============================================================================

EXIT_SUCCESS = 0

# merge-base: no common ancestor; merge-base --is-ancestor: "not an ancestor";
# diff --quiet: differences found; rev-parse --verify --quiet: not found
EXIT_NEGATIVE = 1

# git-config(1) exit codes
CONFIG_EXIT_KEY_INVALID = 1
CONFIG_EXIT_NO_SECTION = 2
CONFIG_EXIT_FILE_INVALID = 3
CONFIG_EXIT_WRITE_FAILED = 4

# =============================================================================
# Stderr / stdout patterns (lowercase, matched against lowercased text)
# =============================================================================

LOCK_PATTERNS: tuple[str, ...] = (
    '.lock\': file exists',
    'index.lock',
    'another git process seems to be running',
)

UNKNOWN_REVISION_PATTERNS: tuple[str, ...] = (
    'unknown revision',
    'bad revision',
    'not a valid object name',
    'needed a single revision',
    'not a valid commit name',
    'bad object',
    'invalid object name',
    'invalid reference',
)

NOTHING_TO_COMMIT_PATTERNS: tuple[str, ...] = (
    'nothing to commit',
    'nothing added to commit',
    'no changes added to commit',
)

INVALID_AUTHOR_PATTERNS: tuple[str, ...] = (
    'is not \'name <email>\'',
    'matches no existing author',
    'author identity unknown',
    'empty ident name',
    'unable to auto-detect email address',
    'invalid ident line',
)

NOTHING_TO_STASH_PATTERNS: tuple[str, ...] = (
    'no local changes to save',
)

APPLY_CONFLICT_PATTERNS: tuple[str, ...] = (
    'conflict',
    'would be overwritten by merge',
    'could not restore untracked files',
    'cannot apply a stash in the middle of a merge',
)

PATHSPEC_PATTERNS: tuple[str, ...] = (
    'did not match any files',
    'is outside repository',
)

FILE_NOT_IN_REVISION_PATTERNS: tuple[str, ...] = (
    'does not exist',
    'exists on disk, but not in',
)

# git-config can die (exit 128) on a malformed file instead of returning 3
INVALID_CONFIG_FILE_PATTERNS: tuple[str, ...] = (
    'bad config line',
    'invalid config file',
)

# =============================================================================
# Revisions
# =============================================================================

# Characters git forbids in ref names (besides control characters). The
# revision operators ~ ^ : and ".." stay allowed so HEAD~1, v1^{commit},
# rev:path and ranges pass.
REVISION_FORBIDDEN_CHARS: frozenset[str] = frozenset(' ?*[\\')

MAX_REVISION_LENGTH = 256

# Commit ids: abbreviated (min 4) up to SHA-256 (64)
MIN_COMMIT_ID_LENGTH = 4
MAX_COMMIT_ID_LENGTH = 64

SHORT_COMMIT_ID_LENGTH = 7

DEFAULT_REMOTE = 'origin'
