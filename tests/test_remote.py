"""Tests for the repository-less helpers."""

import pytest

from gitwrapper.errors import ConfigKeyInvalid, InvalidConfigFile, RemoteError
from gitwrapper.remote import config_file_set, ls_remote, resolve_head, tags_from_remote


class TestRemoteQueries:
    def test_tags(self, temp_git_repo, run_git):
        run_git(temp_git_repo, 'tag', 'v1.0', 'HEAD~1')
        run_git(temp_git_repo, 'tag', '-a', 'v2.0', '-m', 'Release 2')
        assert sorted(tags_from_remote(str(temp_git_repo))) == ['v1.0', 'v2.0']

    def test_no_tags(self, temp_git_repo):
        assert tags_from_remote(str(temp_git_repo)) == []

    def test_resolve_head(self, temp_git_repo, run_git):
        branch = run_git(temp_git_repo, 'rev-parse', '--abbrev-ref', 'HEAD').strip()
        assert resolve_head(str(temp_git_repo), cwd=temp_git_repo) == branch

    def test_unreachable_remote(self, tmp_path):
        with pytest.raises(RemoteError):
            ls_remote('--', str(tmp_path / 'missing'), cwd=tmp_path)


class TestConfigFileSet:
    def test_writes_new_file(self, tmp_path, run_git):
        path = tmp_path / '.gitmodules'
        config_file_set(path, 'submodule.lib.path', 'vendor/lib')
        value = run_git(tmp_path, 'config', '--file', str(path), 'submodule.lib.path').strip()
        assert value == 'vendor/lib'

    def test_invalid_key(self, tmp_path):
        with pytest.raises(ConfigKeyInvalid):
            config_file_set(tmp_path / 'cfg', 'nosection', 'value')

    def test_option_like_key(self, tmp_path):
        with pytest.raises(ValueError):
            config_file_set(tmp_path / 'cfg', '--global', 'value')

    def test_broken_file(self, tmp_path):
        path = tmp_path / 'cfg'
        path.write_text('[broken\n')
        with pytest.raises(InvalidConfigFile):
            config_file_set(path, 'core.x', 'y')
