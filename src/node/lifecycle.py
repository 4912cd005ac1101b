"""Node lifecycle - ordered init and reset sequences.

Steps always run in a fixed order. A failing step is recorded and the
next one still runs, unless fail-fast is enabled.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, Union

from .config import NodeConfig
from ..data.models import CommandResult, JoinCredentials, Mode, OSInfo, RunReport, StepResult
from ..providers.base import ProviderError
from ..providers.cluster import ClusterClient
from ..providers.container_runtime import ContainerRuntimeInstaller
from ..providers.discovery import DiscoveryClient
from ..providers.kubernetes import KubernetesInstaller
from ..providers.package_manager import get_package_manager
from ..providers.runner import CommandRunner
from ..providers.service_manager import SystemdServiceManager
from ..providers.swap import SwapManager

StepOutcome = Union[None, CommandResult, List[Optional[CommandResult]]]

DRY_RUN_CREDENTIALS = JoinCredentials(token="<discovery-token>", ca_cert_hash="<discovery-token-ca-cert-hash>")


def _log(msg: str) -> None:
    """Print with flush so progress interleaves correctly with child output."""
    print(msg, flush=True)


class NodeLifecycle:
    """Runs the init or reset sequence against injected providers."""

    def __init__(
        self,
        config: NodeConfig,
        os_info: OSInfo,
        runtime: ContainerRuntimeInstaller,
        kubernetes: KubernetesInstaller,
        swap: SwapManager,
        discovery: DiscoveryClient,
        cluster: ClusterClient,
        dry_run: bool = False,
    ):
        self.config = config
        self.os_info = os_info
        self.runtime = runtime
        self.kubernetes = kubernetes
        self.swap = swap
        self.discovery = discovery
        self.cluster = cluster
        self.dry_run = dry_run

    @classmethod
    def from_config(cls, config: NodeConfig, os_info: OSInfo, runner: CommandRunner) -> "NodeLifecycle":
        """Wire the default providers for the detected OS."""
        package_manager = get_package_manager(os_info.name, runner, config.os_families)
        services = SystemdServiceManager(runner)
        return cls(
            config=config,
            os_info=os_info,
            runtime=ContainerRuntimeInstaller(config.runtime, runner, package_manager, services),
            kubernetes=KubernetesInstaller(config.kubernetes, runner, package_manager, services),
            swap=SwapManager(runner, config.swap.fstab_path),
            discovery=DiscoveryClient(config.discovery),
            cluster=ClusterClient(runner),
            dry_run=runner.dry_run,
        )

    def run(self, mode: Mode) -> RunReport:
        report = RunReport(mode=mode, os_info=self.os_info)
        if mode == Mode.INIT:
            _log("[node] Initializing workstation...")
            steps = self._init_steps()
        else:
            _log("[node] Resetting workstation...")
            steps = self._reset_steps()

        for name, fn in steps:
            step = self._run_step(name, fn)
            report.add(step)
            if not step.ok and self.config.fail_fast:
                _log(f"[node] Stopping after failed step {name!r} (fail-fast)")
                report.aborted = True
                break

        self._print_summary(report)
        return report

    def _init_steps(self) -> List[Tuple[str, Callable[[], StepOutcome]]]:
        steps = [
            ("install_container_runtime", lambda: self.runtime.install(self.os_info)),
            ("install_kubernetes_components", lambda: self.kubernetes.install(self.os_info)),
        ]
        if self.config.verify_components:
            steps.append(("check_runtime_components", self.runtime.check))
            steps.append(("check_kubernetes_components", self.kubernetes.check))
        steps.extend([
            ("disable_swap", self.swap.disable),
            ("join_cluster", self.join_cluster),
            ("check_node_joined", self.cluster.get_nodes),
        ])
        return steps

    def _reset_steps(self) -> List[Tuple[str, Callable[[], StepOutcome]]]:
        steps = [
            ("delete_container_runtime", lambda: self.runtime.remove(self.os_info)),
            ("delete_kubernetes_components", lambda: self.kubernetes.remove(self.os_info)),
        ]
        if self.config.swap.restore_on_reset:
            steps.append(("enable_swap", self.swap.enable))
        steps.append(("reset_cluster", lambda: self.cluster.reset(force=self.config.cluster.force_reset)))
        return steps

    def join_cluster(self) -> CommandResult:
        """Fetch join credentials, then run ``kubeadm join`` with them.

        Raises:
            DiscoveryError: If the credentials cannot be fetched.
        """
        if self.dry_run:
            credentials = DRY_RUN_CREDENTIALS
        else:
            try:
                credentials = self.discovery.get_credentials()
            finally:
                self.discovery.close()
        return self.cluster.join(credentials, endpoint=self.config.cluster.control_plane_endpoint)

    def _run_step(self, name: str, fn: Callable[[], StepOutcome]) -> StepResult:
        try:
            outcome = fn()
        except ProviderError as e:
            _log(f"[node] Step {name} failed: {e}")
            return StepResult(name=name, ok=False, detail=str(e))

        if outcome is None:
            results: List[CommandResult] = []
        elif isinstance(outcome, CommandResult):
            results = [outcome]
        else:
            results = [r for r in outcome if r is not None]

        failed = [r for r in results if not r.ok]
        if not failed:
            return StepResult(name=name, ok=True, detail=f"{len(results)} command(s)", returncode=0)

        first = failed[0]
        detail = "; ".join(f"{r.display} exited {r.returncode}" for r in failed)
        return StepResult(name=name, ok=False, detail=detail, returncode=first.returncode)

    def _print_summary(self, report: RunReport) -> None:
        succeeded = len(report.steps) - len(report.failed)
        _log(f"[node] {report.mode.value}: {succeeded}/{len(report.steps)} steps succeeded")
        for step in report.steps:
            marker = "ok" if step.ok else "FAILED"
            _log(f"[node]   {step.name}: {marker} ({step.detail})")
