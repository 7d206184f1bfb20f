"""
Git commands that need no repository handle.

Querying a remote URL or editing a standalone config file works without
addressing a repository through ``GIT_DIR``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from gitwrapper.classifier import check
from gitwrapper.models import CommandOutcome, CommandSpec, OperationKind
from gitwrapper.parsers import parse_symref_head, parse_tag_names
from gitwrapper.runner import ProcessRunner

__all__ = [
    'ls_remote',
    'tags_from_remote',
    'resolve_head',
    'config_file_set',
]


def _neutral_cwd(cwd: Optional[Path]) -> Path:
    return cwd if cwd is not None else Path.cwd()


def ls_remote(
    *args: str,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
    runner: Optional[ProcessRunner] = None,
) -> CommandOutcome:
    """
    Run ``git ls-remote`` with the given arguments.

    Raises:
        RemoteError: If the remote cannot be queried
    """
    runner = runner or ProcessRunner()
    outcome = runner.run(CommandSpec(args=('ls-remote', *args), cwd=_neutral_cwd(cwd), timeout=timeout))
    return check(OperationKind.LS_REMOTE, outcome, subject=args[-1] if args else '')


def tags_from_remote(
    url: str,
    timeout: Optional[float] = None,
    runner: Optional[ProcessRunner] = None,
) -> list[str]:
    """All tag names of a remote, peeled tags excluded."""
    outcome = ls_remote('--refs', '--tags', '--', url, timeout=timeout, runner=runner)
    return parse_tag_names(outcome.stdout)


def resolve_head(
    remote: str,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
    runner: Optional[ProcessRunner] = None,
) -> str:
    """
    Default branch of a remote (where its HEAD points).

    ``remote`` can be a URL, or a remote name when ``cwd`` is inside a
    repository that defines it.
    """
    outcome = ls_remote('--symref', '--', remote, 'HEAD', cwd=cwd, timeout=timeout, runner=runner)
    return parse_symref_head(outcome.stdout)


def config_file_set(
    file: Union[Path, str],
    key: str,
    value: str,
    runner: Optional[ProcessRunner] = None,
) -> None:
    """
    Set ``key`` to ``value`` in a standalone config file (``.gitmodules`` style).

    Raises:
        ConfigKeyInvalid: If the section or key name is invalid
        InvalidConfigFile: If the file cannot be parsed
        ConfigWriteError: If the file cannot be written
    """
    if not key or key.startswith('-'):
        raise ValueError(f"Invalid config key: {key!r}")
    file = Path(file).absolute()
    runner = runner or ProcessRunner()
    outcome = runner.run(CommandSpec(
        args=('config', '--file', str(file), key, value),
        cwd=file.parent,
    ))
    check(OperationKind.CONFIG_SET, outcome, subject=key)
