"""Package manager providers (apt-get and yum)."""

from __future__ import annotations

from abc import abstractmethod
from typing import Dict, List, Optional, Sequence

from .base import BaseProvider
from .runner import CommandRunner
from ..data.models import CommandResult

DEFAULT_OS_FAMILIES: Dict[str, List[str]] = {
    "apt": ["Ubuntu"],
    "yum": ["CentOS Linux"],
}


class PackageManager(BaseProvider):
    """Common interface for distribution package managers."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @abstractmethod
    def update(self) -> Optional[CommandResult]:
        """Refresh package indexes (no-op where not needed)."""

    @abstractmethod
    def install(self, packages: Sequence[str], extra_args: Sequence[str] = ()) -> CommandResult:
        """Install packages non-interactively."""

    @abstractmethod
    def remove(self, packages: Sequence[str]) -> CommandResult:
        """Remove packages non-interactively."""

    @abstractmethod
    def add_repository(self, repo: str) -> CommandResult:
        """Register an additional package repository."""

    def hold(self, packages: Sequence[str]) -> Optional[CommandResult]:
        """Pin packages at their installed version, where supported."""
        return None

    def import_key(self, url: str) -> Optional[CommandResult]:
        """Trust a repository signing key, where supported."""
        return None


class AptPackageManager(PackageManager):
    """Debian/Ubuntu ``apt-get``."""

    @property
    def name(self) -> str:
        return "apt"

    @property
    def display_name(self) -> str:
        return "APT"

    def update(self) -> CommandResult:
        return self.runner.run(["apt-get", "update"])

    def install(self, packages: Sequence[str], extra_args: Sequence[str] = ()) -> CommandResult:
        return self.runner.run(["apt-get", "install", "-y", *packages, *extra_args])

    def remove(self, packages: Sequence[str]) -> CommandResult:
        return self.runner.run(["apt-get", "remove", "-y", *packages])

    def add_repository(self, repo: str) -> CommandResult:
        return self.runner.run(["add-apt-repository", repo])

    def hold(self, packages: Sequence[str]) -> CommandResult:
        return self.runner.run(["apt-mark", "hold", *packages])

    def import_key(self, url: str) -> CommandResult:
        return self.runner.run_shell(f"curl -fsSL {url} | apt-key add -")


class YumPackageManager(PackageManager):
    """RHEL/CentOS ``yum``."""

    @property
    def name(self) -> str:
        return "yum"

    @property
    def display_name(self) -> str:
        return "YUM"

    def update(self) -> None:
        # yum refreshes metadata on install
        return None

    def install(self, packages: Sequence[str], extra_args: Sequence[str] = ()) -> CommandResult:
        return self.runner.run(["yum", "install", "-y", *packages, *extra_args])

    def remove(self, packages: Sequence[str]) -> CommandResult:
        return self.runner.run(["yum", "remove", "-y", *packages])

    def add_repository(self, repo: str) -> CommandResult:
        return self.runner.run(["yum-config-manager", "--add-repo", repo])


PACKAGE_MANAGERS = {
    "apt": AptPackageManager,
    "yum": YumPackageManager,
}


def resolve_family(os_label: str, families: Optional[Dict[str, List[str]]] = None) -> Optional[str]:
    """Map an OS label to a package manager family name ('apt', 'yum').

    Labels must match exactly; anything unlisted returns None.
    """
    table = families if families is not None else DEFAULT_OS_FAMILIES
    for family, labels in table.items():
        if os_label in labels:
            return family
    return None


def get_package_manager(
    os_label: str,
    runner: CommandRunner,
    families: Optional[Dict[str, List[str]]] = None,
) -> Optional[PackageManager]:
    """Return the package manager for an OS label, or None if unsupported."""
    family = resolve_family(os_label, families)
    if family is None or family not in PACKAGE_MANAGERS:
        return None
    return PACKAGE_MANAGERS[family](runner)
