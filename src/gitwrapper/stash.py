"""
Stash lifecycle for working-tree repositories.

git performs ``stash pop`` as two steps, apply and then drop. The controller
makes it all-or-nothing for the caller: the index is snapshotted before the
apply step and written back if the apply fails, and the entry is only
dropped after a successful apply.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from gitwrapper.errors import GitError, NothingToStash, ParseError, RefNotFound, StagingError
from gitwrapper.models import CommitId, OperationKind, StashEntry
from gitwrapper.parsers import STASH_LIST_FORMAT, parse_commit_id, parse_stash_list

if TYPE_CHECKING:
    from gitwrapper.repository import WorkingTreeRepository

logger = logging.getLogger(__name__)


class StashState(Enum):
    """Whether this controller has entries of its own on the stash."""
    CLEAN = "clean"
    STASHED = "stashed"


def _stash_ref(index: int) -> str:
    if not isinstance(index, int) or index < 0:
        raise ValueError(f"Stash index must be a non-negative integer, got {index!r}")
    return f'stash@{{{index}}}'


class StashController:
    """
    Push, apply, pop, drop and list stash entries of one repository.

    The controller tracks how many entries it pushed itself. It is
    ``STASHED`` (at index 0, the most recent entry) while at least one of
    them is still on the stack and ``CLEAN`` otherwise. Entries pushed by
    other processes are visible through list() but do not change the state.
    """

    def __init__(self, repository: WorkingTreeRepository):
        self._repository = repository
        self._pushed = 0

    @property
    def state(self) -> StashState:
        return StashState.STASHED if self._pushed else StashState.CLEAN

    @property
    def index(self) -> Optional[int]:
        """Index of this controller's most recent entry, None when clean."""
        return 0 if self._pushed else None

    def _top(self) -> Optional[CommitId]:
        """Commit id of stash@{0}, or None if the stash is empty."""
        try:
            outcome = self._repository._run(
                OperationKind.VERIFY_REF, 'rev-parse', '--verify', '--quiet', 'refs/stash',
                subject='refs/stash',
            )
        except RefNotFound:
            return None
        return parse_commit_id(outcome.stdout)

    def list(self) -> list[StashEntry]:
        """Current stash entries, most recent first. Does not modify anything."""
        outcome = self._repository._run(OperationKind.STASH_LIST, 'stash', 'list', STASH_LIST_FORMAT)
        return parse_stash_list(outcome.stdout)

    def push(self, message: Optional[str] = None, include_untracked: bool = False) -> StashEntry:
        """
        Save local changes as a new stash entry at index 0.

        Returns:
            The new entry

        Raises:
            NothingToStash: If there were no local changes
            StagingError: If git-stash fails
        """
        before = self._top()
        args = ['stash', 'push']
        if include_untracked:
            args.append('--include-untracked')
        if message is not None:
            args.extend(['-m', message])
        self._repository._run(OperationKind.STASH_PUSH, *args)

        # Some git versions exit 0 without creating an entry
        after = self._top()
        if after is None or after == before:
            raise NothingToStash("No local changes to save")

        self._pushed += 1
        entries = self.list()
        if not entries:
            raise ParseError("Stash is empty right after a successful push")
        return entries[0]

    def apply(self, index: int = 0) -> None:
        """
        Reapply an entry to the work tree and index, keeping it on the stash.

        If applying fails the index is restored to its state before the
        call, then the error is raised.

        Raises:
            ApplyConflict: If the entry does not apply cleanly
            StagingError: For other failures, e.g. no such entry
        """
        ref = _stash_ref(index)
        snapshot = self._repository.snapshot_index()
        try:
            self._repository._run(OperationKind.STASH_APPLY, 'stash', 'apply', '--index', ref, subject=ref)
        except GitError:
            logger.debug("Applying %s failed, restoring index", ref)
            self._repository.restore_index(snapshot)
            raise

    def drop(self, index: int = 0) -> None:
        """Remove an entry from the stash without applying it."""
        ref = _stash_ref(index)
        self._repository._run(OperationKind.STASH_DROP, 'stash', 'drop', '--quiet', ref, subject=ref)
        if index < self._pushed:
            self._pushed -= 1

    def pop(self, index: int = 0) -> None:
        """
        Apply an entry and remove it from the stash.

        When the apply step fails the index is restored and the entry stays
        on the stash. When the apply succeeds but the drop fails, the changes
        stay applied and the entry stays on the stash too; that is reported as
        a StagingError chained to the drop failure.
        """
        self.apply(index)
        try:
            self.drop(index)
        except GitError as e:
            logger.warning("stash@{%d} applied but not dropped: %s", index, e)
            raise StagingError(
                f"stash@{{{index}}} was applied and kept in the work tree, but could not be dropped: {e.message}",
                exit_code=e.exit_code,
                stderr=e.stderr,
            ) from e
