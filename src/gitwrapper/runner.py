"""Low-level git process execution."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional

from gitwrapper.constants import GIT_EXECUTABLE, LOCALE_ENV, SCRUBBED_ENV_VARS
from gitwrapper.errors import CommandTimeoutError, InvocationError
from gitwrapper.models import CommandOutcome, CommandSpec

logger = logging.getLogger(__name__)


def build_environment(overrides: dict[str, str]) -> dict[str, str]:
    """
    Environment for a git child process.

    Starts from the current process environment, drops variables that would
    point git at another repository, pins the message locale and applies the
    per-call overrides last. ``os.environ`` itself is never modified.
    """
    env = {k: v for k, v in os.environ.items() if k not in SCRUBBED_ENV_VARS}
    env.update(LOCALE_ENV)
    env.update(overrides)
    return env


class ProcessRunner:
    """
    Runs git and reports what happened, without judging it.

    A non-zero exit status is a normal outcome handed back to the caller.
    Only failing to start git at all, or exceeding a deadline, raises.
    """

    def __init__(
        self,
        git_executable: str = GIT_EXECUTABLE,
        default_timeout: Optional[float] = None,
    ):
        self.git_executable = git_executable
        self.default_timeout = default_timeout

    def run(self, spec: CommandSpec) -> CommandOutcome:
        """
        Run one git command and buffer its output.

        Args:
            spec: Arguments, working directory, environment overrides and
                an optional deadline

        Returns:
            CommandOutcome with exit code, stdout and stderr. When
            ``spec.capture_stderr`` is False stderr goes to the parent's
            stderr and the outcome's stderr is empty.

        Raises:
            InvocationError: If git cannot be launched
            CommandTimeoutError: If the deadline expires; the child is
                killed and reaped before this is raised
        """
        argv = [self.git_executable, *spec.args]
        timeout = spec.timeout if spec.timeout is not None else self.default_timeout
        logger.debug("Running %s in %s", argv, spec.cwd)

        try:
            # subprocess.run kills and waits for the child on timeout
            result = subprocess.run(
                argv,
                cwd=spec.cwd,
                env=build_environment(dict(spec.env)),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE if spec.capture_stderr else None,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(
                f"git {spec.subcommand} timed out after {timeout}s",
                timeout=timeout,
            ) from e
        except FileNotFoundError as e:
            # Raised for a missing executable and for a missing cwd alike
            if not spec.cwd.is_dir():
                raise InvocationError(f"Working directory does not exist: {spec.cwd}") from e
            raise InvocationError(f"Git executable not found: {self.git_executable}") from e
        except PermissionError as e:
            raise InvocationError(f"Permission denied executing {self.git_executable}: {e}") from e
        except OSError as e:
            raise InvocationError(f"Failed to execute {self.git_executable}: {e}") from e

        logger.debug("git %s exited with %d", spec.subcommand, result.returncode)
        return CommandOutcome(
            exit_code=result.returncode,
            stdout=result.stdout or b'',
            stderr=result.stderr or b'',
        )
