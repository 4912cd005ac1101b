"""Data models for node lifecycle runs.

Everything here is transient: values live for a single invocation and
are never persisted.

1. MODES
   - init: install runtime and Kubernetes tooling, then join the cluster
   - reset: remove them again and reset cluster membership

2. STEP RESULTS
   - Every lifecycle step yields a StepResult, failed or not
   - A failing step never stops the run unless fail-fast is requested
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Mode(str, Enum):
    """Execution mode selected with ``-m``."""

    INIT = "init"  # Initialize workstation and join it to the cluster
    RESET = "reset"  # Clear the system and leave the cluster

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Mode"]:
        """Return the matching mode, or None for a missing/unknown value."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class OSInfo:
    """Detected operating system.

    ``name`` is the family label matched against package manager
    families (e.g. "Ubuntu", "CentOS Linux").
    """

    name: str
    version: str = ""
    codename: Optional[str] = None
    source: str = "unknown"  # os-release, lsb_release, lsb-release, ...

    def __str__(self) -> str:
        return self.name


@dataclass
class JoinCredentials:
    """Credentials a node uses to join an existing control plane."""

    token: str
    ca_cert_hash: str


@dataclass
class CommandResult:
    """Outcome of one external command."""

    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def display(self) -> str:
        return " ".join(self.command)


@dataclass
class StepResult:
    """Outcome of one lifecycle step."""

    name: str
    ok: bool
    detail: str = ""
    returncode: Optional[int] = None


@dataclass
class RunReport:
    """Ordered step results for a single run."""

    mode: Mode
    os_info: Optional[OSInfo] = None
    steps: List[StepResult] = field(default_factory=list)
    aborted: bool = False

    def add(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    @property
    def failed(self) -> List[StepResult]:
        return [s for s in self.steps if not s.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def step_names(self) -> List[str]:
        return [s.name for s in self.steps]
