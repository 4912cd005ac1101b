"""Container runtime (Docker) install and removal."""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from .base import BaseProvider
from .package_manager import AptPackageManager, PackageManager, YumPackageManager
from .runner import CommandRunner
from .service_manager import SystemdServiceManager
from ..data.models import CommandResult, OSInfo

if TYPE_CHECKING:
    from ..node.config import RuntimeConfig


class ContainerRuntimeInstaller(BaseProvider):
    """Installs, removes and starts the container runtime.

    Unsupported OS labels (no package manager) make install and remove
    no-ops; the runtime service is still started after install.
    """

    def __init__(
        self,
        config: "RuntimeConfig",
        runner: CommandRunner,
        package_manager: Optional[PackageManager],
        services: SystemdServiceManager,
    ):
        self.config = config
        self.runner = runner
        self.package_manager = package_manager
        self.services = services

    @property
    def name(self) -> str:
        return "runtime"

    @property
    def display_name(self) -> str:
        return "Container runtime"

    def install(self, os_info: OSInfo) -> List[CommandResult]:
        """Install the runtime packages, then start the runtime service."""
        results: List[CommandResult] = []
        pm = self.package_manager
        if isinstance(pm, AptPackageManager):
            results.extend(self._install_apt(pm, os_info))
        elif isinstance(pm, YumPackageManager):
            results.extend(self._install_yum(pm))
        else:
            self.log(f"No package manager for {os_info.name!r}; skipping install")

        results.append(self.start())
        return results

    def _install_apt(self, pm: AptPackageManager, os_info: OSInfo) -> List[CommandResult]:
        results = [pm.update(), pm.install(self.config.apt_prerequisites), pm.import_key(self.config.apt_gpg_url)]
        codename = os_info.codename or self.runner.output(["lsb_release", "-cs"]) or ""
        repo = f"deb [arch={self.config.apt_arch}] {self.config.apt_repo_url} {codename} stable"
        results.append(pm.add_repository(repo))
        results.append(pm.update())
        results.append(pm.install(self.config.packages))
        return results

    def _install_yum(self, pm: YumPackageManager) -> List[CommandResult]:
        return [
            pm.install(self.config.yum_prerequisites),
            pm.add_repository(self.config.yum_repo_url),
            pm.install(self.config.packages),
        ]

    def start(self) -> CommandResult:
        return self.services.start(self.config.service)

    def remove(self, os_info: OSInfo) -> List[CommandResult]:
        if self.package_manager is None:
            self.log(f"No package manager for {os_info.name!r}; skipping removal")
            return []
        return [self.package_manager.remove(self.config.packages)]

    def check(self) -> List[CommandResult]:
        return [self.runner.run(["docker", "version"])]
