"""Shared fixtures: throwaway git repositories built with the git CLI."""

import subprocess
import tempfile
from pathlib import Path

import pytest


def git(repo_path: Path, *args: str, input: bytes = None) -> str:
    """Run git directly (not through gitwrapper) and return stdout."""
    result = subprocess.run(
        ['git', *args],
        cwd=repo_path,
        input=input,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode()


def _init(repo_path: Path, *extra: str) -> None:
    subprocess.run(['git', 'init', *extra], cwd=repo_path, capture_output=True, check=True)
    subprocess.run(
        ['git', 'config', 'user.email', 'test@example.com'],
        cwd=repo_path, capture_output=True, check=True
    )
    subprocess.run(
        ['git', 'config', 'user.name', 'Test User'],
        cwd=repo_path, capture_output=True, check=True
    )
    subprocess.run(
        ['git', 'config', 'commit.gpgsign', 'false'],
        cwd=repo_path, capture_output=True, check=True
    )


@pytest.fixture
def run_git():
    """The plain git helper, for arranging repository state in tests."""
    return git


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with three commits."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir).resolve()
        _init(repo_path)

        # Create initial commit
        (repo_path / 'README.md').write_text('# Test Project\n')
        git(repo_path, 'add', '.')
        git(repo_path, 'commit', '-m', 'Initial commit')

        # Create second commit with a Python file
        (repo_path / 'main.py').write_text('def hello():\n    print("Hello")\n')
        git(repo_path, 'add', '.')
        git(repo_path, 'commit', '-m', 'Add main.py')

        # Create third commit modifying existing file
        (repo_path / 'main.py').write_text(
            'def hello():\n    print("Hello, World!")\n\ndef goodbye():\n    print("Bye")\n'
        )
        git(repo_path, 'add', '.')
        git(repo_path, 'commit', '-m', 'Update main.py with goodbye')

        yield repo_path


@pytest.fixture
def empty_git_repo():
    """Create a git repository with no commits."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir).resolve()
        _init(repo_path)
        yield repo_path


@pytest.fixture
def bare_git_repo():
    """Create an empty bare repository."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir).resolve()
        subprocess.run(['git', 'init', '--bare'], cwd=repo_path, capture_output=True, check=True)
        yield repo_path
