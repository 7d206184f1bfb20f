"""Tests for the reporting CLI."""

import sys

from gitwrapper.cli import main


def test_report(temp_git_repo, run_git, monkeypatch, capsys):
    run_git(temp_git_repo, 'remote', 'add', 'origin', 'https://example.com/repo.git')
    monkeypatch.setattr(sys, 'argv', ['gitwrapper', str(temp_git_repo), '--stash'])

    assert main() == 0

    out = capsys.readouterr().out
    assert 'working_tree' in out
    assert 'origin' in out
    assert 'Stash is empty' in out


def test_not_a_repository(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv('GIT_CEILING_DIRECTORIES', str(tmp_path.parent))
    monkeypatch.setattr(sys, 'argv', ['gitwrapper', str(tmp_path)])

    assert main() == 1
    assert 'Error' in capsys.readouterr().out
