"""Kubernetes node tooling (kubelet, kubeadm, kubectl) install and removal."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from .base import BaseProvider
from .package_manager import AptPackageManager, PackageManager, YumPackageManager
from .runner import CommandRunner
from .service_manager import SystemdServiceManager
from ..data.models import CommandResult, OSInfo

if TYPE_CHECKING:
    from ..node.config import KubernetesConfig


class KubernetesInstaller(BaseProvider):
    """Installs and removes the Kubernetes node packages.

    On apt hosts the packages are held after install; on yum hosts SELinux
    is set permissive and kubelet is enabled.
    """

    def __init__(
        self,
        config: "KubernetesConfig",
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
        return "kubernetes"

    @property
    def display_name(self) -> str:
        return "Kubernetes components"

    def install(self, os_info: OSInfo) -> List[CommandResult]:
        pm = self.package_manager
        if isinstance(pm, AptPackageManager):
            return self._install_apt(pm)
        if isinstance(pm, YumPackageManager):
            return self._install_yum(pm)
        self.log(f"No package manager for {os_info.name!r}; skipping install")
        return []

    def _install_apt(self, pm: AptPackageManager) -> List[CommandResult]:
        results = [
            pm.import_key(self.config.apt_key_url),
            self._write_file(self.config.apt_list_path, self.config.apt_source.rstrip("\n") + "\n"),
        ]
        results.append(pm.update())
        results.append(pm.install(self.config.packages))
        results.append(pm.hold(self.config.packages))
        return results

    def _install_yum(self, pm: YumPackageManager) -> List[CommandResult]:
        return [
            self._write_file(self.config.yum_repo_path, self.config.yum_repo),
            self.runner.run(["setenforce", "0"]),
            pm.install(self.config.packages, extra_args=["--disableexcludes=kubernetes"]),
            self.services.enable(self.config.kubelet_service, now=True),
        ]

    def _write_file(self, path: str, content: str) -> CommandResult:
        """Write a repository definition file.

        A write error is reported as a failed result so the remaining
        install commands still run.
        """
        command = ["write", path]
        if self.runner.dry_run:
            self.log(f"[dry-run] write {path}")
            return CommandResult(command=command, returncode=0)
        self.log(f"Writing {path}")
        try:
            target = Path(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            self.log(f"Cannot write {path}: {e}")
            return CommandResult(command=command, returncode=1, stderr=str(e))
        return CommandResult(command=command, returncode=0)

    def remove(self, os_info: OSInfo) -> List[CommandResult]:
        if self.package_manager is None:
            self.log(f"No package manager for {os_info.name!r}; skipping removal")
            return []
        return [self.package_manager.remove(self.config.packages)]

    def check(self) -> List[CommandResult]:
        return [
            self.runner.run(["kubeadm", "version"]),
            self.runner.run(["kubelet", "--version"]),
            self.runner.run(["kubectl", "version"]),
        ]
