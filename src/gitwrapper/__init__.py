"""
gitwrapper - A typed wrapper around git(1).

Runs git as a subprocess against working-tree or bare repositories,
parses its output into values and turns failures into typed errors.
"""

__version__ = "0.1.0"

# Models
from gitwrapper.models import (
    RepositoryKind,
    OperationKind,
    RepositoryIdentity,
    CommandSpec,
    CommandOutcome,
    CommitId,
    RemoteDescriptor,
    StashEntry,
    CommitRange,
    CommitOptions,
)

# Errors
from gitwrapper.errors import (
    GitError,
    InvocationError,
    CommandTimeoutError,
    PosixError,
    ParseError,
    RepositoryError,
    LockError,
    WorkTreeDirtyError,
    BareRepositoryError,
    RefNotFound,
    RemoteNotFound,
    CommitError,
    NothingToCommit,
    InvalidAuthor,
    StagingError,
    NothingToStash,
    ApplyConflict,
    PathspecError,
    CloneError,
    CloneDestinationError,
    ConfigError,
    ConfigKeyNotFound,
    ConfigKeyInvalid,
    InvalidConfigFile,
    ConfigWriteError,
    SubtreeError,
    RemoteError,
    FileNotFoundInRepository,
)

# Core functionality
from gitwrapper.runner import ProcessRunner
from gitwrapper.classifier import classify, check
from gitwrapper.repository import Repository, WorkingTreeRepository, BareRepository
from gitwrapper.stash import StashController, StashState
from gitwrapper.identity import discover, from_environment, from_paths

# Repository-less helpers
from gitwrapper.remote import ls_remote, tags_from_remote, resolve_head, config_file_set

# Context managers
from gitwrapper.context import cloned_repo, checkout_commit, stashed_changes

__all__ = [
    # Version
    "__version__",
    # Enums
    "RepositoryKind",
    "OperationKind",
    "StashState",
    # Models
    "RepositoryIdentity",
    "CommandSpec",
    "CommandOutcome",
    "CommitId",
    "RemoteDescriptor",
    "StashEntry",
    "CommitRange",
    "CommitOptions",
    # Errors
    "GitError",
    "InvocationError",
    "CommandTimeoutError",
    "PosixError",
    "ParseError",
    "RepositoryError",
    "LockError",
    "WorkTreeDirtyError",
    "BareRepositoryError",
    "RefNotFound",
    "RemoteNotFound",
    "CommitError",
    "NothingToCommit",
    "InvalidAuthor",
    "StagingError",
    "NothingToStash",
    "ApplyConflict",
    "PathspecError",
    "CloneError",
    "CloneDestinationError",
    "ConfigError",
    "ConfigKeyNotFound",
    "ConfigKeyInvalid",
    "InvalidConfigFile",
    "ConfigWriteError",
    "SubtreeError",
    "RemoteError",
    "FileNotFoundInRepository",
    # Runner and classifier
    "ProcessRunner",
    "classify",
    "check",
    # Repositories
    "Repository",
    "WorkingTreeRepository",
    "BareRepository",
    "StashController",
    # Discovery
    "discover",
    "from_environment",
    "from_paths",
    # Remote helpers
    "ls_remote",
    "tags_from_remote",
    "resolve_head",
    "config_file_set",
    # Context managers
    "cloned_repo",
    "checkout_commit",
    "stashed_changes",
]
