"""
Data models for repository identities, commands and parsed git output.

All models are immutable (frozen) dataclasses for safety and hashability.
"""
from __future__ import annotations

import errno
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from gitwrapper.constants import (
    MAX_COMMIT_ID_LENGTH,
    MIN_COMMIT_ID_LENGTH,
    SHORT_COMMIT_ID_LENGTH,
)
from gitwrapper.errors import PosixError

_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


class RepositoryKind(Enum):
    """Whether a repository has a checked-out work tree."""
    WORKING_TREE = "working_tree"
    BARE = "bare"


class OperationKind(Enum):
    """
    Operations whose exit codes and stderr the classifier interprets.

    Each member selects one row of the classification table in
    ``gitwrapper.classifier``.
    """
    GENERIC = "generic"
    RESOLVE = "resolve"
    VERIFY_REF = "verify_ref"
    MERGE_BASE = "merge_base"
    IS_ANCESTOR = "is_ancestor"
    DIFF_QUIET = "diff_quiet"
    COMMIT = "commit"
    ADD = "add"
    RESET = "reset"
    CHECKOUT = "checkout"
    STASH_PUSH = "stash_push"
    STASH_APPLY = "stash_apply"
    STASH_DROP = "stash_drop"
    STASH_LIST = "stash_list"
    INDEX = "index"
    REMOTE = "remote"
    LS_REMOTE = "ls_remote"
    CLONE = "clone"
    INIT = "init"
    CONFIG_GET = "config_get"
    CONFIG_SET = "config_set"
    SUBTREE = "subtree"
    SPARSE_CHECKOUT = "sparse_checkout"
    SHOW_FILE = "show_file"


def _validated_dir(path: Union[Path, str], role: str) -> Path:
    """Check that ``path`` is an absolute, existing directory."""
    if not isinstance(path, Path):
        path = Path(path)
    if not path.is_absolute():
        raise PosixError(errno.EINVAL, f"{role} must be an absolute path: {path}", path)
    if not path.exists():
        raise PosixError(errno.ENOENT, f"{role} does not exist: {path}", path)
    if not path.is_dir():
        raise PosixError(errno.ENOTDIR, f"{role} is not a directory: {path}", path)
    return path


@dataclass(frozen=True)
class RepositoryIdentity:
    """
    Where a repository lives on disk.

    Working-tree repositories have both a git dir and a work tree; bare
    repositories only a git dir. Both paths are validated on construction:
    they must be absolute and exist. Relative paths are never resolved here,
    callers resolve them first (see ``gitwrapper.identity``).
    """
    kind: RepositoryKind
    git_dir: Path
    work_tree: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.kind is RepositoryKind.WORKING_TREE and self.work_tree is None:
            raise ValueError("A working-tree repository needs a work tree")
        if self.kind is RepositoryKind.BARE and self.work_tree is not None:
            raise ValueError("A bare repository has no work tree")

        # Frozen: go through object.__setattr__ to store normalized Paths
        object.__setattr__(self, 'git_dir', _validated_dir(self.git_dir, 'GIT_DIR'))
        if self.work_tree is not None:
            object.__setattr__(self, 'work_tree', _validated_dir(self.work_tree, 'GIT_WORK_TREE'))

    @classmethod
    def working_tree(cls, git_dir: Union[Path, str], work_tree: Union[Path, str]) -> RepositoryIdentity:
        return cls(RepositoryKind.WORKING_TREE, Path(git_dir), Path(work_tree))

    @classmethod
    def bare(cls, git_dir: Union[Path, str]) -> RepositoryIdentity:
        return cls(RepositoryKind.BARE, Path(git_dir))

    @property
    def is_bare(self) -> bool:
        return self.kind is RepositoryKind.BARE

    def command_env(self) -> dict[str, str]:
        """Environment overrides addressing this repository."""
        env = {'GIT_DIR': str(self.git_dir)}
        if self.work_tree is not None:
            env['GIT_WORK_TREE'] = str(self.work_tree)
        return env

    def command_cwd(self) -> Path:
        """Working directory for commands: the work tree, else the git dir."""
        return self.work_tree if self.work_tree is not None else self.git_dir


@dataclass(frozen=True)
class CommandSpec:
    """A single git invocation. ``args[0]`` is the subcommand."""
    args: tuple[str, ...]
    cwd: Path
    env: Mapping[str, str] = field(default_factory=dict)
    capture_stderr: bool = True
    timeout: Optional[float] = None

    @property
    def subcommand(self) -> str:
        return self.args[0] if self.args else ''


@dataclass(frozen=True)
class CommandOutcome:
    """Exit status and raw output of a finished git process."""
    exit_code: int
    stdout: bytes = b''
    stderr: bytes = b''

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class CommitId:
    """
    A commit id, validated by shape only.

    Accepts abbreviated ids as well as full SHA-1 (40) and SHA-256 (64)
    ids. Existence is only proven by a successful round trip through git.
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError(f"Invalid commit id: {self.value!r}")
        if not MIN_COMMIT_ID_LENGTH <= len(self.value) <= MAX_COMMIT_ID_LENGTH:
            raise ValueError(f"Invalid commit id length: {self.value!r}")
        if not all(c in _HEX_DIGITS for c in self.value):
            raise ValueError(f"Invalid commit id: {self.value!r}")
        object.__setattr__(self, 'value', self.value.lower())

    def __str__(self) -> str:
        return self.value

    @property
    def short(self) -> str:
        return self.value[:SHORT_COMMIT_ID_LENGTH]

    @property
    def is_full(self) -> bool:
        return len(self.value) in (40, 64)


@dataclass(frozen=True, order=True)
class RemoteDescriptor:
    """A configured remote with its fetch and push URLs."""
    name: str
    fetch_url: str
    push_url: str


@dataclass(frozen=True)
class StashEntry:
    """One stash entry. Index 0 is the most recent."""
    index: int
    message: str

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Stash index must be >= 0, got {self.index}")

    @property
    def ref(self) -> str:
        return f'stash@{{{self.index}}}'


@dataclass(frozen=True)
class CommitRange:
    """
    Commits reachable from ``end`` but not from ``start``.

    ``start`` is expected to be an ancestor of ``end``; this is checked
    lazily with ``Repository.is_ancestor`` rather than on construction.
    """
    start: Union[CommitId, str]
    end: Union[CommitId, str]

    def __str__(self) -> str:
        return f'{self.start}..{self.end}'


@dataclass(frozen=True)
class CommitOptions:
    """Extra knobs for ``WorkingTreeRepository.commit_extended``."""
    author: Optional[str] = None  # 'Name <email>'
    allow_empty: bool = False
    amend: bool = False
    no_verify: bool = False
    paths: tuple[Union[Path, str], ...] = ()  # staged before committing
