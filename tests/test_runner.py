"""Tests for the process runner."""

import pytest

from gitwrapper.errors import CommandTimeoutError, InvocationError
from gitwrapper.models import CommandSpec
from gitwrapper.runner import ProcessRunner, build_environment


class TestBuildEnvironment:
    def test_scrubs_repository_variables(self, monkeypatch):
        monkeypatch.setenv('GIT_DIR', '/somewhere/else')
        monkeypatch.setenv('GIT_WORK_TREE', '/somewhere')
        monkeypatch.setenv('GIT_INDEX_FILE', '/somewhere/index')
        env = build_environment({})
        assert 'GIT_DIR' not in env
        assert 'GIT_WORK_TREE' not in env
        assert 'GIT_INDEX_FILE' not in env

    def test_pins_locale(self, monkeypatch):
        monkeypatch.setenv('LC_ALL', 'de_DE.UTF-8')
        assert build_environment({})['LC_ALL'] == 'C'

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv('GIT_DIR', '/inherited')
        env = build_environment({'GIT_DIR': '/mine'})
        assert env['GIT_DIR'] == '/mine'

    def test_keeps_unrelated_variables(self, monkeypatch):
        monkeypatch.setenv('GITWRAPPER_TEST_MARKER', '1')
        assert build_environment({})['GITWRAPPER_TEST_MARKER'] == '1'


class TestProcessRunner:
    def test_captures_stdout(self, tmp_path):
        outcome = ProcessRunner().run(CommandSpec(args=('--version',), cwd=tmp_path))
        assert outcome.success
        assert outcome.stdout.startswith(b'git version')

    def test_failure_is_returned_not_raised(self, tmp_path):
        outcome = ProcessRunner().run(
            CommandSpec(args=('rev-parse', '--git-dir'), cwd=tmp_path, env={'GIT_DIR': str(tmp_path)})
        )
        assert outcome.exit_code != 0
        assert outcome.stderr

    def test_uncaptured_stderr_is_empty(self, tmp_path):
        outcome = ProcessRunner().run(
            CommandSpec(
                args=('rev-parse', '--git-dir'),
                cwd=tmp_path,
                env={'GIT_DIR': str(tmp_path)},
                capture_stderr=False,
            )
        )
        assert outcome.exit_code != 0
        assert outcome.stderr == b''

    def test_missing_executable(self, tmp_path):
        runner = ProcessRunner(git_executable='git-does-not-exist-anywhere')
        with pytest.raises(InvocationError) as exc_info:
            runner.run(CommandSpec(args=('status',), cwd=tmp_path))
        assert 'git-does-not-exist-anywhere' in str(exc_info.value)

    def test_missing_working_directory(self, tmp_path):
        with pytest.raises(InvocationError) as exc_info:
            ProcessRunner().run(CommandSpec(args=('status',), cwd=tmp_path / 'gone'))
        assert 'Working directory' in str(exc_info.value)

    def test_timeout_kills_the_child(self, tmp_path):
        runner = ProcessRunner(git_executable='sleep')
        with pytest.raises(CommandTimeoutError) as exc_info:
            runner.run(CommandSpec(args=('5',), cwd=tmp_path, timeout=0.2))
        assert exc_info.value.timeout == 0.2

    def test_default_timeout(self, tmp_path):
        runner = ProcessRunner(git_executable='sleep', default_timeout=0.2)
        with pytest.raises(CommandTimeoutError):
            runner.run(CommandSpec(args=('5',), cwd=tmp_path))

    def test_timeout_is_an_invocation_error(self):
        assert issubclass(CommandTimeoutError, InvocationError)
