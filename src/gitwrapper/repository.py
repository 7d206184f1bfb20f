"""
Repository handles: the public face of gitwrapper.

Every operation follows the same path: build a CommandSpec from the
repository identity, run it, let the classifier turn a failure into a typed
error, and parse stdout into a domain value. Nothing is cached between
calls; git is asked again every time because the repository can change
underneath us.

``Repository`` holds the operations valid for any repository.
``WorkingTreeRepository`` adds those that need a checked-out work tree
(cleanliness, commits, stashes, subtrees). ``BareRepository`` adds nothing
but its constructors.
"""

from __future__ import annotations

import errno
import logging
import os
import warnings
from pathlib import Path
from typing import Optional, Union

from gitwrapper import identity as _identity
from gitwrapper.classifier import check
from gitwrapper.constants import (
    DEFAULT_REMOTE,
    EXIT_SUCCESS,
    MAX_REVISION_LENGTH,
    REVISION_FORBIDDEN_CHARS,
)
from gitwrapper.errors import (
    BareRepositoryError,
    CloneDestinationError,
    GitError,
    ParseError,
    PathspecError,
    PosixError,
    RefNotFound,
    RemoteNotFound,
    WorkTreeDirtyError,
)
from gitwrapper.models import (
    CommandOutcome,
    CommandSpec,
    CommitId,
    CommitOptions,
    CommitRange,
    OperationKind,
    RemoteDescriptor,
    RepositoryIdentity,
    RepositoryKind,
)
from gitwrapper.parsers import (
    parse_commit_id,
    parse_commit_ids,
    parse_config_value,
    parse_lines,
    parse_ls_remote,
    parse_optional_commit_id,
    parse_path,
    parse_remotes,
)
from gitwrapper.runner import ProcessRunner
from gitwrapper.stash import StashController

logger = logging.getLogger(__name__)

Revision = Union[CommitId, str]
PathLike = Union[Path, str]


def _is_valid_revision(revision: str) -> bool:
    """Check if a string looks like a revision git should be given."""
    if not revision or not isinstance(revision, str):
        return False

    # Length limit prevents abuse
    if len(revision) > MAX_REVISION_LENGTH:
        return False

    # Would be parsed as an option
    if revision.startswith('-'):
        return False

    # Control characters and the glob/space set are never part of a ref name
    return not any(c in REVISION_FORBIDDEN_CHARS or ord(c) < 32 or ord(c) == 127 for c in revision)


def _revision(value: Revision) -> str:
    """Validate a revision argument and return it as a string."""
    text = str(value)
    if not _is_valid_revision(text):
        raise ValueError(f"Invalid revision: {text!r}")
    return text


def _option_value(value: str, what: str) -> str:
    """Reject values that git would read as an option."""
    if not value or value.startswith('-'):
        raise ValueError(f"Invalid {what}: {value!r}")
    return value


def _clone_destination(destination: PathLike) -> Path:
    """
    Validate a clone target before anything touches the network.

    Raises:
        PosixError: If the path is relative or its parent does not exist
        CloneDestinationError: If the path exists and is not an empty
            directory
    """
    destination = Path(destination)
    if not destination.is_absolute():
        raise PosixError(errno.EINVAL, f"Clone destination must be absolute: {destination}", destination)
    if destination.exists():
        if not destination.is_dir() or any(destination.iterdir()):
            raise CloneDestinationError(f"Destination exists and is not empty: {destination}")
    if not destination.parent.is_dir():
        raise PosixError(errno.ENOENT, f"Parent directory does not exist: {destination.parent}", destination.parent)
    return destination


def _run_clone(
    url: str,
    destination: Path,
    extra_args: list[str],
    runner: ProcessRunner,
    timeout: Optional[float],
) -> None:
    args = ('clone', *extra_args, '--', url, str(destination))
    outcome = runner.run(CommandSpec(args=args, cwd=destination.parent, timeout=timeout))
    check(OperationKind.CLONE, outcome, subject=url)


class Repository:
    """
    A repository addressed through ``GIT_DIR``/``GIT_WORK_TREE``.

    Use ``Repository.open(identity)`` or one of the discovery constructors to
    get the subclass matching the repository kind.
    """

    kind: Optional[RepositoryKind] = None

    def __init__(self, identity: RepositoryIdentity, runner: Optional[ProcessRunner] = None):
        if self.kind is not None and identity.kind is not self.kind:
            raise ValueError(f"{type(self).__name__} cannot wrap a {identity.kind.value} repository")
        self.identity = identity
        self.runner = runner or ProcessRunner()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identity.command_cwd()!s})"

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def open(cls, identity: RepositoryIdentity, runner: Optional[ProcessRunner] = None) -> Repository:
        """Wrap ``identity`` in the handle class matching its kind."""
        handle_cls = WorkingTreeRepository if identity.kind is RepositoryKind.WORKING_TREE else BareRepository
        if cls is not Repository and not issubclass(handle_cls, cls):
            if identity.kind is RepositoryKind.BARE:
                raise BareRepositoryError(f"Repository at {identity.git_dir} is bare")
            raise ValueError(f"Repository at {identity.git_dir} has a work tree")
        return handle_cls(identity, runner)

    @classmethod
    def discover(cls, path: PathLike = '.', runner: Optional[ProcessRunner] = None) -> Repository:
        """Open the repository containing ``path``."""
        return cls.open(_identity.discover(path, runner), runner)

    @classmethod
    def from_environment(cls, runner: Optional[ProcessRunner] = None) -> Repository:
        """Open the repository named by ``GIT_DIR``/``GIT_WORK_TREE`` or the cwd."""
        return cls.open(_identity.from_environment(runner), runner)

    @classmethod
    def from_paths(
        cls,
        git_dir: Optional[PathLike] = None,
        work_tree: Optional[PathLike] = None,
        base: Optional[PathLike] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> Repository:
        """Open a repository from ``--git-dir``/``--work-tree``/``-C`` style values."""
        return cls.open(_identity.from_paths(git_dir, work_tree, base, runner), runner)

    # -------------------------------------------------------------------------
    # Plumbing
    # -------------------------------------------------------------------------

    @property
    def git_dir(self) -> Path:
        return self.identity.git_dir

    @property
    def work_tree(self) -> Optional[Path]:
        return self.identity.work_tree

    @property
    def is_bare(self) -> bool:
        return self.identity.is_bare

    def _spec(self, args: tuple[str, ...], capture_stderr: bool = True, timeout: Optional[float] = None) -> CommandSpec:
        return CommandSpec(
            args=args,
            cwd=self.identity.command_cwd(),
            env=self.identity.command_env(),
            capture_stderr=capture_stderr,
            timeout=timeout,
        )

    def _run(
        self,
        operation: OperationKind,
        *args: str,
        subject: str = '',
        capture_stderr: bool = True,
        timeout: Optional[float] = None,
    ) -> CommandOutcome:
        outcome = self.runner.run(self._spec(args, capture_stderr, timeout))
        return check(operation, outcome, subject=subject)

    def git(self, *args: str, timeout: Optional[float] = None) -> CommandOutcome:
        """
        Run an arbitrary git command against this repository.

        The outcome is returned as is; nothing is classified or parsed.
        """
        return self.runner.run(self._spec(tuple(args), timeout=timeout))

    # -------------------------------------------------------------------------
    # Revisions and ancestry
    # -------------------------------------------------------------------------

    def head(self) -> CommitId:
        """
        The commit HEAD points to.

        Raises:
            RefNotFound: If HEAD is unborn (no commits yet)
        """
        outcome = self._run(OperationKind.VERIFY_REF, 'rev-parse', '--verify', '--quiet', 'HEAD^{commit}', subject='HEAD')
        return parse_commit_id(outcome.stdout)

    def ref_to_id(self, ref_name: str) -> CommitId:
        """
        Resolve a branch, tag or other revision to a commit id.

        Raises:
            RefNotFound: If the name does not resolve to a commit
            ValueError: If ref_name is not a plausible revision
        """
        ref = _revision(ref_name)
        outcome = self._run(OperationKind.VERIFY_REF, 'rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}', subject=ref)
        return parse_commit_id(outcome.stdout)

    def short_ref(self, ref_name: str) -> str:
        """Abbreviated commit id for a revision, as git would print it."""
        ref = _revision(ref_name)
        outcome = self._run(OperationKind.RESOLVE, 'rev-parse', '--short', ref, subject=ref)
        return str(parse_commit_id(outcome.stdout))

    def is_ancestor(self, ancestor: Revision, descendant: Revision) -> bool:
        """
        Whether ``ancestor`` is reachable from ``descendant``.

        A commit is its own ancestor.
        """
        first, second = _revision(ancestor), _revision(descendant)
        outcome = self._run(
            OperationKind.IS_ANCESTOR,
            'merge-base', '--is-ancestor', first, second,
            subject=f'{first} {second}',
        )
        return outcome.exit_code == EXIT_SUCCESS

    def merge_base(self, first: Revision, second: Revision, *others: Revision) -> Optional[CommitId]:
        """
        Best common ancestor of two or more commits.

        Returns:
            The merge base, or None when the commits share no history

        Raises:
            RefNotFound: If any of the revisions does not exist
        """
        revisions = [_revision(r) for r in (first, second, *others)]
        outcome = self._run(OperationKind.MERGE_BASE, 'merge-base', *revisions, subject=' '.join(revisions))
        if outcome.exit_code != EXIT_SUCCESS:
            return None
        return parse_optional_commit_id(outcome.stdout)

    def rev_list(self, revisions: Union[CommitRange, Revision], max_count: Optional[int] = None) -> list[CommitId]:
        """
        Commits reachable from ``revisions``, newest first.

        Pass a CommitRange to list only the commits in ``start..end``.
        """
        args = ['rev-list']
        if max_count is not None:
            args.append(f'--max-count={int(max_count)}')
        if isinstance(revisions, CommitRange):
            spec = f'{_revision(revisions.start)}..{_revision(revisions.end)}'
        else:
            spec = _revision(revisions)
        args.append(spec)
        outcome = self._run(OperationKind.RESOLVE, *args, subject=spec)
        return parse_commit_ids(outcome.stdout)

    # -------------------------------------------------------------------------
    # Repository state
    # -------------------------------------------------------------------------

    def _git_path_exists(self, name: str) -> bool:
        """Whether the file git reports for ``rev-parse --git-path name`` exists."""
        outcome = self._run(OperationKind.RESOLVE, 'rev-parse', '--git-path', name)
        path = parse_path(outcome.stdout)
        if not path.is_absolute():
            path = self.identity.command_cwd() / path
        return path.exists()

    def is_shallow(self) -> bool:
        """True if the repository has truncated history."""
        return self._git_path_exists('shallow')

    def is_sparse(self) -> bool:
        """True if a sparse-checkout pattern file is present."""
        return self._git_path_exists('info/sparse-checkout')

    # -------------------------------------------------------------------------
    # Remotes
    # -------------------------------------------------------------------------

    def remotes(self) -> list[RemoteDescriptor]:
        """Configured remotes in git's order. Empty if there are none."""
        outcome = self._run(OperationKind.REMOTE, 'remote', '-v')
        return parse_remotes(outcome.stdout)

    def main_url(self) -> str:
        """
        Fetch URL of the canonical remote.

        That is ``origin`` when configured, otherwise the only remote.

        Raises:
            RemoteNotFound: If there is no remote, or several and none is
                called origin
        """
        remotes = self.remotes()
        for remote in remotes:
            if remote.name == DEFAULT_REMOTE:
                return remote.fetch_url
        if len(remotes) == 1:
            return remotes[0].fetch_url
        raise RemoteNotFound(
            f"No {DEFAULT_REMOTE!r} remote among {len(remotes)} configured remotes",
            ref=DEFAULT_REMOTE,
        )

    def remote_ref_to_id(self, remote: str, ref_name: str) -> CommitId:
        """
        Commit id a remote reference points to, via ls-remote.

        Raises:
            RemoteError: If the remote cannot be queried
            RefNotFound: If the remote has no such reference
        """
        remote = _option_value(remote, 'remote')
        ref = _revision(ref_name)
        outcome = self._run(OperationKind.LS_REMOTE, 'ls-remote', remote, ref, subject=remote)
        refs = parse_ls_remote(outcome.stdout)
        if not refs:
            raise RefNotFound(f"{remote}: no reference matches {ref!r}", ref=ref)
        return refs[0][0]

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def config(self, key: str) -> str:
        """
        Value of a configuration key.

        Raises:
            ConfigKeyNotFound: If the key is unset or malformed
            InvalidConfigFile: If a config file cannot be parsed
        """
        key = _option_value(key, 'config key')
        outcome = self._run(OperationKind.CONFIG_GET, 'config', key, subject=key)
        return parse_config_value(outcome.stdout)

    def set_config(self, key: str, value: str) -> None:
        """Set a configuration key in the repository's config file."""
        key = _option_value(key, 'config key')
        self._run(OperationKind.CONFIG_SET, 'config', key, value, subject=key)

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def read_file(self, path: PathLike, revision: Optional[Revision] = None) -> bytes:
        """
        Contents of ``path`` (relative to the repository root) at a revision.

        Defaults to HEAD.

        Raises:
            FileNotFoundInRepository: If the path is absent in that revision
        """
        rev = _revision(revision) if revision is not None else 'HEAD'
        object_name = f'{rev}:{Path(path).as_posix()}'
        outcome = self._run(OperationKind.SHOW_FILE, 'show', object_name, subject=object_name)
        return outcome.stdout


class BareRepository(Repository):
    """A repository with only a git dir."""

    kind = RepositoryKind.BARE

    @classmethod
    def init(cls, path: PathLike, runner: Optional[ProcessRunner] = None) -> BareRepository:
        """Create a bare repository in the existing directory ``path``."""
        runner = runner or ProcessRunner()
        directory = _identity.absolute_dir(path)
        check(OperationKind.INIT, runner.run(CommandSpec(args=('init', '--bare', '--quiet'), cwd=directory)))
        return cls(RepositoryIdentity.bare(directory), runner)

    @classmethod
    def clone(
        cls,
        source_url: str,
        destination: PathLike,
        timeout: Optional[float] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> BareRepository:
        """
        Bare-clone ``source_url`` into ``destination``.

        Raises:
            CloneDestinationError: If destination is not empty (checked
                before contacting the source)
            CloneError: If git fails to clone
        """
        runner = runner or ProcessRunner()
        target = _clone_destination(destination)
        _run_clone(source_url, target, ['--bare', '--quiet'], runner, timeout)
        return cls(RepositoryIdentity.bare(target), runner)


class WorkingTreeRepository(Repository):
    """A repository with a checked-out work tree."""

    kind = RepositoryKind.WORKING_TREE

    def __init__(self, identity: RepositoryIdentity, runner: Optional[ProcessRunner] = None):
        super().__init__(identity, runner)
        self.stash = StashController(self)

    @classmethod
    def init(cls, path: PathLike, runner: Optional[ProcessRunner] = None) -> WorkingTreeRepository:
        """Create a repository whose work tree is the existing directory ``path``."""
        runner = runner or ProcessRunner()
        directory = _identity.absolute_dir(path)
        check(OperationKind.INIT, runner.run(CommandSpec(args=('init', '--quiet'), cwd=directory)))
        return cls(RepositoryIdentity.working_tree(directory / '.git', directory), runner)

    @classmethod
    def clone(
        cls,
        source_url: str,
        destination: PathLike,
        depth: Optional[int] = None,
        branch: Optional[str] = None,
        timeout: Optional[float] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> WorkingTreeRepository:
        """
        Clone ``source_url`` into the absolute path ``destination``.

        Args:
            source_url: Anything git clone accepts as a source
            destination: Absolute path that does not exist or is empty
            depth: Create a shallow clone with this many commits
            branch: Check out this branch instead of the remote HEAD
            timeout: Seconds before the clone is killed

        Raises:
            PosixError: If destination is relative or has no parent dir
            CloneDestinationError: If destination is not empty (checked
                before contacting the source)
            CloneError: If git fails to clone (network, auth, bad URL)
        """
        runner = runner or ProcessRunner()
        target = _clone_destination(destination)
        extra = ['--quiet']
        if depth is not None:
            extra.extend(['--depth', str(int(depth))])
        if branch:
            extra.extend(['--branch', _option_value(branch, 'branch')])
        _run_clone(source_url, target, extra, runner, timeout)
        return cls(RepositoryIdentity.working_tree(target / '.git', target), runner)

    # -------------------------------------------------------------------------
    # Work tree state
    # -------------------------------------------------------------------------

    def top_level(self) -> Path:
        """Absolute path of the work tree root."""
        outcome = self._run(OperationKind.RESOLVE, 'rev-parse', '--show-toplevel')
        return parse_path(outcome.stdout)

    def is_clean(self) -> bool:
        """
        True if neither the work tree nor the index differ from HEAD.

        Untracked files do not count. A repository without commits is never
        clean.
        """
        try:
            self.head()
        except RefNotFound:
            return False
        unstaged = self._run(OperationKind.DIFF_QUIET, 'diff', '--no-ext-diff', '--quiet')
        if unstaged.exit_code != EXIT_SUCCESS:
            return False
        staged = self._run(OperationKind.DIFF_QUIET, 'diff', '--no-ext-diff', '--cached', '--quiet')
        return staged.exit_code == EXIT_SUCCESS

    def _require_clean(self) -> None:
        if not self.is_clean():
            raise WorkTreeDirtyError(f"Work tree {self.work_tree} has uncommitted changes")

    # -------------------------------------------------------------------------
    # Index
    # -------------------------------------------------------------------------

    def _relative(self, path: PathLike) -> str:
        path = Path(path)
        if not path.is_absolute():
            return str(path)
        try:
            return str(path.relative_to(self.work_tree))
        except ValueError:
            raise PathspecError(f"{path} is outside the work tree {self.work_tree}") from None

    def stage(self, *paths: PathLike) -> None:
        """
        Add paths to the index.

        Absolute paths must lie inside the work tree.

        Raises:
            PathspecError: If a path matches nothing or is outside the tree
            StagingError: For other git-add failures
        """
        if not paths:
            raise ValueError("stage() needs at least one path")
        relative = [self._relative(p) for p in paths]
        self._run(OperationKind.ADD, 'add', '--', *relative, subject=', '.join(relative))

    def snapshot_index(self) -> str:
        """Write the current index as a tree object and return its id."""
        outcome = self._run(OperationKind.INDEX, 'write-tree')
        # Tree ids share the commit id shape
        return str(parse_commit_id(outcome.stdout))

    def restore_index(self, tree_id: str) -> None:
        """
        Replace the index with a tree from snapshot_index().

        A failure here is reported as a RuntimeWarning rather than raised,
        because it only ever runs while another error is propagating.
        """
        logger.debug("Restoring index of %s to tree %s", self.work_tree, tree_id)
        try:
            self._run(OperationKind.INDEX, 'read-tree', _revision(tree_id))
        except GitError as e:
            warnings.warn(
                f"Failed to restore index to tree {tree_id}: {e}. "
                "Index may be in unexpected state.",
                RuntimeWarning,
            )

    # -------------------------------------------------------------------------
    # Commits
    # -------------------------------------------------------------------------

    def commit(self, message: str) -> CommitId:
        """
        Commit what is staged.

        Raises:
            NothingToCommit: If nothing is staged
            InvalidAuthor: If no usable committer identity is configured
            CommitError: For other git-commit failures
        """
        return self.commit_extended(message)

    def commit_extended(self, message: str, options: Optional[CommitOptions] = None) -> CommitId:
        """
        Commit with extra options.

        When ``options.paths`` is set those paths are staged first. If
        staging or committing then fails, the index is put back exactly as
        it was before the call and the original error is raised.

        Returns:
            The new HEAD commit id
        """
        options = options or CommitOptions()
        args = ['commit', '-m', message]
        if options.author is not None:
            args.extend(['--author', _option_value(options.author, 'author')])
        if options.allow_empty:
            args.append('--allow-empty')
        if options.amend:
            args.append('--amend')
        if options.no_verify:
            args.append('--no-verify')

        snapshot = self.snapshot_index() if options.paths else None
        try:
            if options.paths:
                self.stage(*options.paths)
            self._run(OperationKind.COMMIT, *args)
        except GitError:
            if snapshot is not None:
                self.restore_index(snapshot)
            raise
        return self.head()

    def reset_hard(self, target: Optional[Revision] = None) -> None:
        """
        Point HEAD, index and work tree at ``target`` (default HEAD).

        Destructive: uncommitted changes to tracked files are lost.
        """
        rev = _revision(target) if target is not None else 'HEAD'
        self._run(OperationKind.RESET, 'reset', '--hard', '--quiet', rev, subject=rev)

    def checkout(self, ref_name: Revision) -> None:
        """Switch the work tree to a branch, tag or commit."""
        ref = _revision(ref_name)
        self._run(OperationKind.CHECKOUT, 'checkout', '--quiet', ref, '--', subject=ref)

    def read_file(self, path: PathLike, revision: Optional[Revision] = None) -> bytes:
        """
        Contents of ``path``; from disk unless a revision is given.

        Raises:
            PathspecError: If the path leads outside the work tree
            OSError: If reading from the work tree fails
            FileNotFoundInRepository: If the path is absent in the revision
        """
        if revision is not None:
            return super().read_file(path, revision)
        relative = os.path.normpath(self._relative(path))
        if relative == os.pardir or relative.startswith(os.pardir + os.sep):
            raise PathspecError(f"{path} is outside the work tree {self.work_tree}")
        return (self.work_tree / relative).read_bytes()

    # -------------------------------------------------------------------------
    # Sparse checkout and subtrees
    # -------------------------------------------------------------------------

    def sparse_checkout_add(self, pattern: str) -> None:
        """Add a pattern to the sparse-checkout set."""
        self._run(OperationKind.SPARSE_CHECKOUT, 'sparse-checkout', 'add', _option_value(pattern, 'pattern'))

    def subtree_add(self, remote: str, prefix: str, ref_name: str, message: str) -> None:
        """
        Merge ``ref_name`` from ``remote`` into the directory ``prefix``.

        Raises:
            WorkTreeDirtyError: If there are uncommitted changes
            SubtreeError: If git-subtree fails
        """
        self._require_clean()
        self._run(
            OperationKind.SUBTREE,
            'subtree', 'add', '-q', '-P', _option_value(prefix, 'prefix'),
            _option_value(remote, 'remote'), _revision(ref_name), '-m', message,
            subject=prefix,
        )

    def subtree_pull(self, remote: str, prefix: str, ref_name: str, message: str) -> None:
        """
        Pull ``ref_name`` from ``remote`` into the subtree at ``prefix``.

        Raises:
            WorkTreeDirtyError: If there are uncommitted changes
            SubtreeError: If git-subtree fails
        """
        self._require_clean()
        self._run(
            OperationKind.SUBTREE,
            'subtree', 'pull', '-q', '-P', _option_value(prefix, 'prefix'),
            _option_value(remote, 'remote'), _revision(ref_name), '-m', message,
            subject=prefix,
        )

    def subtree_push(self, remote: str, prefix: str, ref_name: str) -> None:
        """Push the history of ``prefix`` to ``ref_name`` on ``remote``."""
        self._run(
            OperationKind.SUBTREE,
            'subtree', 'push', '-q', '-P', _option_value(prefix, 'prefix'),
            _option_value(remote, 'remote'), _revision(ref_name),
            subject=prefix,
        )

    def subtree_split(
        self,
        prefix: str,
        branch: str,
        rejoin: bool = False,
        timeout: Optional[float] = None,
    ) -> CommitId:
        """
        Extract the history of ``prefix`` into ``branch``.

        This can take long on big histories. git-subtree's progress output
        goes straight to this process's stderr instead of being buffered.

        Returns:
            The id of the split-off commit

        Raises:
            WorkTreeDirtyError: If there are uncommitted changes
            SubtreeError: If git-subtree fails
            CommandTimeoutError: If ``timeout`` expires
        """
        self._require_clean()
        args = ['subtree', 'split', '-P', _option_value(prefix, 'prefix'), '-b', _revision(branch)]
        if rejoin:
            args.append('--rejoin')
        args.append('HEAD')
        outcome = self._run(OperationKind.SUBTREE, *args, subject=prefix, capture_stderr=False, timeout=timeout)

        lines = parse_lines(outcome.stdout)
        if not lines:
            raise ParseError("git subtree split printed no commit id")
        # The split commit is the last line; anything before it is chatter
        return parse_commit_id(lines[-1].encode())
