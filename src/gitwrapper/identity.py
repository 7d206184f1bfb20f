"""
Locating repositories and building their identities.

RepositoryIdentity itself only accepts absolute, existing paths. The helpers
here take what a user typed (relative paths, environment variables, a
directory somewhere inside a work tree) and ask git where the repository
really is.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Optional, Union

from gitwrapper.classifier import check
from gitwrapper.errors import ParseError, PosixError
from gitwrapper.models import CommandSpec, OperationKind, RepositoryIdentity
from gitwrapper.parsers import decode_output, parse_bool, parse_path
from gitwrapper.runner import ProcessRunner

__all__ = [
    'absolute_dir',
    'discover',
    'from_environment',
    'from_paths',
    'work_tree_from_git_dir',
]

PathLike = Union[Path, str]


def absolute_dir(path: PathLike, base: Optional[Path] = None) -> Path:
    """
    Resolve ``path`` to an absolute existing directory.

    Absolute paths are kept as given; relative paths are resolved against
    ``base`` (default: the current directory).

    Raises:
        PosixError: EINVAL if a relative path cannot be resolved, ENOENT if
            the directory does not exist, ENOTDIR if it is a file
    """
    path = Path(path)
    if not path.is_absolute():
        try:
            path = ((base or Path.cwd()) / path).resolve(strict=True)
        except OSError as e:
            raise PosixError(errno.EINVAL, f"Failed to resolve path: {path}", path) from e
    if not path.exists():
        raise PosixError(errno.ENOENT, f"Invalid directory: {path}", path)
    if not path.is_dir():
        raise PosixError(errno.ENOTDIR, f"Not a directory: {path}", path)
    return path


def work_tree_from_git_dir(git_dir: Path, runner: Optional[ProcessRunner] = None) -> Optional[Path]:
    """
    The work tree belonging to ``git_dir``, or None for a bare repository.

    A non-bare git dir is assumed to live directly inside its work tree
    (``<work tree>/.git``).
    """
    runner = runner or ProcessRunner()
    outcome = check(OperationKind.RESOLVE, runner.run(CommandSpec(
        args=('rev-parse', '--is-bare-repository'),
        cwd=git_dir,
        env={'GIT_DIR': str(git_dir)},
    )))
    if parse_bool(outcome.stdout):
        return None
    return git_dir.parent


def discover(path: PathLike = '.', runner: Optional[ProcessRunner] = None) -> RepositoryIdentity:
    """
    Find the repository containing ``path``.

    Args:
        path: Any directory inside a work tree, a work tree root, or a git
            dir (bare or not)
        runner: ProcessRunner to use; a default one is created if omitted

    Returns:
        A working-tree or bare RepositoryIdentity

    Raises:
        PosixError: If ``path`` is not a directory, or no repository
            contains it (ENOENT)
    """
    runner = runner or ProcessRunner()
    start = absolute_dir(path)

    outcome = runner.run(CommandSpec(
        args=('rev-parse', '--absolute-git-dir', '--is-bare-repository'),
        cwd=start,
    ))
    if not outcome.success:
        raise PosixError(errno.ENOENT, f"GIT_DIR not found from {start}", start)

    # One line per query, kept as bytes so non-UTF-8 paths survive
    lines = [line for line in outcome.stdout.splitlines() if line.strip()]
    if len(lines) != 2:
        raise ParseError("Unexpected rev-parse output", decode_output(outcome.stdout))
    git_dir = parse_path(lines[0])
    if parse_bool(lines[1]):
        return RepositoryIdentity.bare(git_dir)

    toplevel = runner.run(CommandSpec(args=('rev-parse', '--show-toplevel'), cwd=start))
    if toplevel.success:
        work_tree = parse_path(toplevel.stdout)
    else:
        # Started inside the git dir of a non-bare repository
        work_tree = git_dir.parent
    return RepositoryIdentity.working_tree(git_dir, work_tree)


def from_environment(runner: Optional[ProcessRunner] = None) -> RepositoryIdentity:
    """
    Identity described by ``GIT_DIR``/``GIT_WORK_TREE``, else discovery.

    Without ``GIT_DIR`` the repository containing the current directory is
    used. Without ``GIT_WORK_TREE`` the work tree is derived from the git
    dir.
    """
    git_dir_env = os.environ.get('GIT_DIR')
    work_tree_env = os.environ.get('GIT_WORK_TREE')

    if git_dir_env is None:
        identity = discover(Path.cwd(), runner)
        if work_tree_env is None:
            return identity
        return RepositoryIdentity.working_tree(identity.git_dir, absolute_dir(work_tree_env))

    git_dir = absolute_dir(git_dir_env)
    if work_tree_env is not None:
        return RepositoryIdentity.working_tree(git_dir, absolute_dir(work_tree_env))
    work_tree = work_tree_from_git_dir(git_dir, runner)
    if work_tree is None:
        return RepositoryIdentity.bare(git_dir)
    return RepositoryIdentity.working_tree(git_dir, work_tree)


def from_paths(
    git_dir: Optional[PathLike] = None,
    work_tree: Optional[PathLike] = None,
    base: Optional[PathLike] = None,
    runner: Optional[ProcessRunner] = None,
) -> RepositoryIdentity:
    """
    Identity from explicit ``--git-dir``/``--work-tree``/``-C`` style values.

    Relative paths are resolved against ``base``, which itself defaults to
    the current directory. With neither ``git_dir`` nor ``work_tree`` the
    repository is discovered from ``base``; with everything omitted this is
    the same as from_environment().
    """
    if git_dir is None and work_tree is None and base is None:
        return from_environment(runner)

    root = absolute_dir(base) if base is not None else Path.cwd()

    if git_dir is not None and work_tree is not None:
        return RepositoryIdentity.working_tree(absolute_dir(git_dir, root), absolute_dir(work_tree, root))

    if git_dir is not None:
        resolved = absolute_dir(git_dir, root)
        derived = work_tree_from_git_dir(resolved, runner)
        if derived is None:
            return RepositoryIdentity.bare(resolved)
        return RepositoryIdentity.working_tree(resolved, derived)

    if work_tree is not None:
        resolved = absolute_dir(work_tree, root)
        return RepositoryIdentity.working_tree(absolute_dir(resolved / '.git'), resolved)

    return discover(root, runner)
