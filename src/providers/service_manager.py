"""Service manager provider (systemd)."""

from __future__ import annotations

from .base import BaseProvider
from .runner import CommandRunner
from ..data.models import CommandResult


class SystemdServiceManager(BaseProvider):
    """Starts and enables units through ``systemctl``."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "systemd"

    @property
    def display_name(self) -> str:
        return "systemd"

    def start(self, service: str) -> CommandResult:
        return self.runner.run(["systemctl", "start", service])

    def enable(self, service: str, now: bool = True) -> CommandResult:
        cmd = ["systemctl", "enable"]
        if now:
            cmd.append("--now")
        cmd.append(service)
        return self.runner.run(cmd)
