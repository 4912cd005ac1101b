"""External command execution.

All shell-outs go through CommandRunner so they can be echoed, dry-run,
and substituted in tests.
"""

from __future__ import annotations

import subprocess
from typing import List, Optional, Sequence

from .base import _log
from ..data.models import CommandResult

# Conventional shell exit codes
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


class CommandRunner:
    """Runs commands with ``subprocess.run`` and never raises on failure.

    A non-zero exit, a missing binary, or a timeout all come back as a
    CommandResult; callers decide whether that matters.
    """

    def __init__(self, dry_run: bool = False, timeout: Optional[int] = None):
        self.dry_run = dry_run
        self.timeout = timeout

    def run(
        self,
        cmd: Sequence[str],
        input_text: Optional[str] = None,
        capture_output: bool = False,
    ) -> CommandResult:
        """Run a command given as an argument list.

        Output streams to the terminal unless ``capture_output`` is set.
        """
        command: List[str] = [str(part) for part in cmd]
        display = " ".join(command)
        if self.dry_run:
            _log(f"[dry-run] {display}")
            return CommandResult(command=command, returncode=0)

        _log(f"[run] {display}")
        try:
            result = subprocess.run(
                command,
                input=input_text,
                capture_output=capture_output,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            _log(f"[run] Command not found: {command[0]}")
            return CommandResult(command=command, returncode=EXIT_NOT_FOUND, stderr=str(e))
        except subprocess.TimeoutExpired as e:
            _log(f"[run] Timeout after {self.timeout}s: {display}")
            return CommandResult(command=command, returncode=EXIT_TIMEOUT, stderr=str(e))

        if result.returncode != 0:
            _log(f"[run] Exit {result.returncode}: {display}")
        return CommandResult(
            command=command,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def run_shell(self, command: str) -> CommandResult:
        """Run a shell pipeline (e.g. ``curl ... | apt-key add -``)."""
        if self.dry_run:
            _log(f"[dry-run] {command}")
            return CommandResult(command=[command], returncode=0)

        _log(f"[run] {command}")
        try:
            result = subprocess.run(command, shell=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            _log(f"[run] Timeout after {self.timeout}s: {command}")
            return CommandResult(command=[command], returncode=EXIT_TIMEOUT, stderr=str(e))

        if result.returncode != 0:
            _log(f"[run] Exit {result.returncode}: {command}")
        return CommandResult(command=[command], returncode=result.returncode)

    def output(self, cmd: Sequence[str]) -> Optional[str]:
        """Run a query command and return its stripped stdout, or None on failure.

        Queries run even in dry-run mode since they do not change the host.
        """
        command = [str(part) for part in cmd]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout or 30,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()
