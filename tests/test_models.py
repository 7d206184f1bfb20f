"""Tests for the data models."""

import errno
from pathlib import Path

import pytest

from gitwrapper.errors import PosixError
from gitwrapper.models import (
    CommandOutcome,
    CommandSpec,
    CommitId,
    CommitRange,
    RemoteDescriptor,
    RepositoryIdentity,
    RepositoryKind,
    StashEntry,
)

FULL_ID = 'a94a8fe5ccb19ba61c4c0873d391e987982fbbd3'


class TestRepositoryIdentity:
    def test_working_tree(self, tmp_path):
        (tmp_path / '.git').mkdir()
        identity = RepositoryIdentity.working_tree(tmp_path / '.git', tmp_path)
        assert identity.kind is RepositoryKind.WORKING_TREE
        assert identity.work_tree == tmp_path
        assert identity.is_bare is False

    def test_bare(self, tmp_path):
        identity = RepositoryIdentity.bare(tmp_path)
        assert identity.kind is RepositoryKind.BARE
        assert identity.work_tree is None
        assert identity.is_bare is True

    def test_accepts_strings(self, tmp_path):
        identity = RepositoryIdentity.bare(str(tmp_path))
        assert identity.git_dir == tmp_path

    def test_relative_path_fails(self):
        with pytest.raises(PosixError) as exc_info:
            RepositoryIdentity.bare(Path('relative/dir'))
        assert exc_info.value.errno == errno.EINVAL

    def test_missing_path_fails(self, tmp_path):
        with pytest.raises(PosixError) as exc_info:
            RepositoryIdentity.working_tree(tmp_path / 'nope' / '.git', tmp_path / 'nope')
        assert exc_info.value.errno == errno.ENOENT

    def test_missing_work_tree_fails(self, tmp_path):
        with pytest.raises(PosixError):
            RepositoryIdentity.working_tree(tmp_path, tmp_path / 'missing')

    def test_file_is_not_a_directory(self, tmp_path):
        f = tmp_path / 'file'
        f.write_text('x')
        with pytest.raises(PosixError) as exc_info:
            RepositoryIdentity.bare(f)
        assert exc_info.value.errno == errno.ENOTDIR

    def test_kind_and_work_tree_must_agree(self, tmp_path):
        with pytest.raises(ValueError):
            RepositoryIdentity(RepositoryKind.WORKING_TREE, tmp_path)
        with pytest.raises(ValueError):
            RepositoryIdentity(RepositoryKind.BARE, tmp_path, tmp_path)

    def test_working_tree_env(self, tmp_path):
        (tmp_path / '.git').mkdir()
        identity = RepositoryIdentity.working_tree(tmp_path / '.git', tmp_path)
        assert identity.command_env() == {
            'GIT_DIR': str(tmp_path / '.git'),
            'GIT_WORK_TREE': str(tmp_path),
        }
        assert identity.command_cwd() == tmp_path

    def test_bare_env_has_no_work_tree(self, tmp_path):
        identity = RepositoryIdentity.bare(tmp_path)
        assert identity.command_env() == {'GIT_DIR': str(tmp_path)}
        assert identity.command_cwd() == tmp_path

    def test_is_immutable(self, tmp_path):
        identity = RepositoryIdentity.bare(tmp_path)
        with pytest.raises(AttributeError):
            identity.git_dir = tmp_path / 'other'


class TestCommitId:
    def test_full_sha1(self):
        commit = CommitId(FULL_ID)
        assert str(commit) == FULL_ID
        assert commit.is_full is True
        assert commit.short == FULL_ID[:7]

    def test_short_id(self):
        commit = CommitId('a94a8fe')
        assert commit.is_full is False

    def test_sha256(self):
        assert CommitId('ab' * 32).is_full is True

    def test_normalized_to_lowercase(self):
        assert CommitId(FULL_ID.upper()) == CommitId(FULL_ID)

    def test_rejects_non_hex(self):
        with pytest.raises(ValueError):
            CommitId('HEAD')

    def test_rejects_whitespace(self):
        with pytest.raises(ValueError):
            CommitId(FULL_ID + '\n')

    def test_rejects_bad_length(self):
        with pytest.raises(ValueError):
            CommitId('abc')
        with pytest.raises(ValueError):
            CommitId('a' * 65)


class TestRemoteDescriptor:
    def test_value_equality(self):
        a = RemoteDescriptor('origin', 'u', 'u')
        assert a == RemoteDescriptor('origin', 'u', 'u')
        assert a != RemoteDescriptor('origin', 'u', 'v')

    def test_ordering(self):
        remotes = [
            RemoteDescriptor('upstream', 'b', 'b'),
            RemoteDescriptor('origin', 'a', 'a'),
        ]
        assert [r.name for r in sorted(remotes)] == ['origin', 'upstream']


class TestStashEntry:
    def test_ref(self):
        assert StashEntry(2, 'msg').ref == 'stash@{2}'

    def test_negative_index(self):
        with pytest.raises(ValueError):
            StashEntry(-1, 'msg')


class TestCommitRange:
    def test_str(self):
        assert str(CommitRange('v1.0', CommitId(FULL_ID))) == f'v1.0..{FULL_ID}'


class TestCommandModels:
    def test_subcommand(self, tmp_path):
        spec = CommandSpec(args=('stash', 'list'), cwd=tmp_path)
        assert spec.subcommand == 'stash'
        assert spec.capture_stderr is True
        assert spec.timeout is None

    def test_outcome_success(self):
        assert CommandOutcome(0).success is True
        assert CommandOutcome(1, b'', b'boom').success is False
