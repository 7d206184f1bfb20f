"""
Context managers for temporary repository state.

These context managers ensure proper cleanup and state restoration
when working with git repositories, even if errors occur.

Error Handling
--------------
On entry failure (clone fails, checkout fails, stash fails):
    The typed GitError propagates immediately. Nothing needs restoring
    since the operation never started.

On exit/restore failure:
    - cloned_repo: Always removes the temporary directory.
    - checkout_commit: Issues RuntimeWarning and leaves the repository at
      the checked-out commit. Forcing the restore could lose work done
      inside the block.
    - stashed_changes: Issues RuntimeWarning and leaves the changes on the
      stash, where ``git stash pop`` can recover them.
"""

from __future__ import annotations

import shutil
import tempfile
import warnings
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Optional

from gitwrapper.constants import DEFAULT_CLONE_TIMEOUT
from gitwrapper.errors import GitError, NothingToStash, WorkTreeDirtyError
from gitwrapper.parsers import decode_output
from gitwrapper.repository import WorkingTreeRepository
from gitwrapper.runner import ProcessRunner

__all__ = [
    'cloned_repo',
    'checkout_commit',
    'stashed_changes',
]


def _current_ref(repo: WorkingTreeRepository) -> str:
    """
    Branch name if HEAD is on a branch, otherwise the commit id.

    This allows restoring state even from detached HEAD.
    """
    outcome = repo.git('symbolic-ref', '--quiet', '--short', 'HEAD')
    if outcome.success:
        branch = decode_output(outcome.stdout).strip()
        if branch:
            return branch
    return str(repo.head())


@contextmanager
def cloned_repo(
    repo_url: str,
    depth: Optional[int] = 1,
    branch: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_CLONE_TIMEOUT,
    runner: Optional[ProcessRunner] = None,
) -> Generator[WorkingTreeRepository, None, None]:
    """
    Clone a repository to a temporary directory.

    The temporary directory is removed when the context exits, even if an
    error occurs.

    Args:
        repo_url: URL of the repository to clone
        depth: Clone depth (default 1 for shallow clone, None for full clone)
        branch: Specific branch to clone (default: repository's default branch)
        timeout: Maximum seconds to wait for clone (default 120)

    Yields:
        The cloned WorkingTreeRepository

    Raises:
        CloneError: If cloning fails

    Example:
        with cloned_repo('https://github.com/user/repo') as repo:
            print(repo.head(), repo.is_shallow())
        # Cleanup happens automatically
    """
    # Clone into a 'repo' subdirectory of a fresh temp dir; clone wants a
    # destination that is absent or empty
    temp_parent = Path(tempfile.mkdtemp(prefix='gitwrapper_clone_'))
    try:
        yield WorkingTreeRepository.clone(
            repo_url,
            temp_parent / 'repo',
            depth=depth,
            branch=branch,
            timeout=timeout,
            runner=runner,
        )
    finally:
        shutil.rmtree(temp_parent, ignore_errors=True)


@contextmanager
def checkout_commit(
    repo: WorkingTreeRepository,
    commit_ref: str,
    discard_uncommitted_changes: bool = False,
) -> Generator[None, None, None]:
    """
    Temporarily checkout a specific commit, then restore original state.

    Args:
        repo: Repository to work in
        commit_ref: Commit id, branch name, or tag to checkout
        discard_uncommitted_changes: If True, PERMANENTLY DISCARDS any
            uncommitted changes before checkout. If False (default), raises
            WorkTreeDirtyError if there are uncommitted changes. Use
            stashed_changes() instead to preserve changes.

    Raises:
        WorkTreeDirtyError: If there are uncommitted changes
        RefNotFound: If commit_ref does not exist

    Example:
        with checkout_commit(repo, 'abc123'):
            analyze(repo.work_tree)
        # Repo is back to original state
    """
    original_ref = _current_ref(repo)

    if discard_uncommitted_changes:
        repo.reset_hard()
    elif not repo.is_clean():
        raise WorkTreeDirtyError(
            "Repository has uncommitted changes. "
            "Commit or stash changes first, or use discard_uncommitted_changes=True."
        )

    repo.checkout(commit_ref)
    try:
        yield
    finally:
        try:
            repo.checkout(original_ref)
        except GitError as e:
            warnings.warn(
                f"Failed to restore git state to {original_ref}: {e}. "
                "Repository may be in unexpected state.",
                RuntimeWarning,
            )


@contextmanager
def stashed_changes(
    repo: WorkingTreeRepository,
    include_untracked: bool = True,
) -> Generator[bool, None, None]:
    """
    Temporarily stash uncommitted changes, then restore them.

    On exit the entry is popped through the repository's StashController,
    so a failing restore leaves the index as it was and keeps the entry.

    Yields:
        True if changes were stashed, False if there was nothing to stash

    Raises:
        StagingError: If stashing fails (e.g. no commits yet)

    Example:
        with stashed_changes(repo) as had_changes:
            with checkout_commit(repo, 'abc123'):
                analyze()
        # Original uncommitted changes are restored
    """
    stash_msg = f'gitwrapper: temporary stash at {datetime.now().isoformat()}'
    try:
        repo.stash.push(stash_msg, include_untracked=include_untracked)
        had_changes = True
    except NothingToStash:
        had_changes = False

    try:
        yield had_changes
    finally:
        if had_changes:
            try:
                repo.stash.pop()
            except GitError as e:
                warnings.warn(
                    f"Failed to restore stashed changes: {e}. "
                    "Changes may still be in stash.",
                    RuntimeWarning,
                )
