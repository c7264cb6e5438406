"""Local command execution for the binary-backed probes."""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class CommandResult:
    """Exit status and captured output of one command."""

    exit_status: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


class CommandRunner:
    """Runs commands with a bounded timeout and captured text output."""

    def __init__(self, timeout: float = 30.0, logger: Optional[logging.Logger] = None):
        """
        Initialize command runner.

        Args:
            timeout: Per-command timeout in seconds
            logger: Optional logger instance
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def run(
        self,
        args: List[str],
        path_prefix: Optional[str] = None
    ) -> CommandResult:
        """
        Execute command and return its result.

        Args:
            args: Command and arguments (no shell)
            path_prefix: Directory prepended to PATH

        Returns:
            CommandResult: Exit status with stdout/stderr

        Raises:
            subprocess.TimeoutExpired: If the command exceeds the timeout
            OSError: If the command cannot be started
        """
        command_env = dict(os.environ)
        if path_prefix:
            command_env["PATH"] = f"{path_prefix}/:{command_env.get('PATH', '')}"

        self.logger.debug(f"Running: {' '.join(args)}")
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            env=command_env,
        )

        if completed.returncode != 0:
            self.logger.debug(
                f"Command exited {completed.returncode}: {(completed.stderr or '').strip()}"
            )

        return CommandResult(
            exit_status=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
