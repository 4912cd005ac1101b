"""Configuration management for the node lifecycle tool.

Supports YAML-based configuration; every value has a default matching the
stock Ubuntu/CentOS provisioning flow.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..providers.package_manager import DEFAULT_OS_FAMILIES

DEFAULT_KUBERNETES_YUM_REPO = """[kubernetes]
name=Kubernetes
baseurl=https://packages.cloud.google.com/yum/repos/kubernetes-el7-x86_64
enabled=1
gpgcheck=1
repo_gpgcheck=1
gpgkey=https://packages.cloud.google.com/yum/doc/yum-key.gpg
       https://packages.cloud.google.com/yum/doc/rpm-package-key.gpg
"""


@dataclass
class DiscoveryConfig:
    """Where join credentials are fetched from."""

    base_url: str = "http://cluster.local"
    token_path: str = "/token"
    ca_cert_hash_path: str = "/token-ca-cert-hash"
    timeout: int = 10  # seconds
    retries: int = 0
    verify: bool = True
    ca_bundle: Optional[str] = None


@dataclass
class ClusterConfig:
    """kubeadm join/reset options."""

    control_plane_endpoint: Optional[str] = None  # host:port of the API server
    force_reset: bool = True


@dataclass
class RuntimeConfig:
    """Container runtime packages and repositories."""

    packages: List[str] = field(default_factory=lambda: ["docker-ce", "docker-ce-cli", "containerd.io"])
    apt_prerequisites: List[str] = field(
        default_factory=lambda: [
            "apt-transport-https",
            "ca-certificates",
            "curl",
            "gnupg-agent",
            "software-properties-common",
        ]
    )
    yum_prerequisites: List[str] = field(
        default_factory=lambda: ["yum-utils", "device-mapper-persistent-data", "lvm2"]
    )
    apt_gpg_url: str = "https://download.docker.com/linux/ubuntu/gpg"
    apt_repo_url: str = "https://download.docker.com/linux/ubuntu"
    apt_arch: str = "amd64"
    yum_repo_url: str = "https://download.docker.com/linux/centos/docker-ce.repo"
    service: str = "docker"


@dataclass
class KubernetesConfig:
    """Kubernetes node packages and repositories."""

    packages: List[str] = field(default_factory=lambda: ["kubelet", "kubeadm", "kubectl"])
    apt_key_url: str = "https://packages.cloud.google.com/apt/doc/apt-key.gpg"
    apt_source: str = "deb https://apt.kubernetes.io/ kubernetes-xenial main"
    apt_list_path: str = "/etc/apt/sources.list.d/kubernetes.list"
    yum_repo_path: str = "/etc/yum.repos.d/kubernetes.repo"
    yum_repo: str = DEFAULT_KUBERNETES_YUM_REPO
    kubelet_service: str = "kubelet"


@dataclass
class SwapConfig:
    """Swap handling."""

    fstab_path: str = "/etc/fstab"
    restore_on_reset: bool = True


@dataclass
class NodeConfig:
    """Main configuration container."""

    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    kubernetes: KubernetesConfig = field(default_factory=KubernetesConfig)
    swap: SwapConfig = field(default_factory=SwapConfig)

    os_families: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_OS_FAMILIES.items()}
    )

    command_timeout: Optional[int] = None  # seconds; None waits forever
    fail_fast: bool = False
    verify_components: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeConfig":
        """Create config from dictionary."""
        # Parse discovery config
        disc_data = data.get("discovery", {}) or {}
        discovery = DiscoveryConfig(
            base_url=disc_data.get("base_url", "http://cluster.local"),
            token_path=disc_data.get("token_path", "/token"),
            ca_cert_hash_path=disc_data.get("ca_cert_hash_path", "/token-ca-cert-hash"),
            timeout=disc_data.get("timeout", 10),
            retries=disc_data.get("retries", 0),
            verify=disc_data.get("verify", True),
            ca_bundle=disc_data.get("ca_bundle"),
        )

        # Parse cluster config
        cl_data = data.get("cluster", {}) or {}
        cluster = ClusterConfig(
            control_plane_endpoint=cl_data.get("control_plane_endpoint"),
            force_reset=cl_data.get("force_reset", True),
        )

        # Parse runtime config
        rt_data = data.get("runtime", {}) or {}
        rt_defaults = RuntimeConfig()
        runtime = RuntimeConfig(
            packages=rt_data.get("packages", rt_defaults.packages),
            apt_prerequisites=rt_data.get("apt_prerequisites", rt_defaults.apt_prerequisites),
            yum_prerequisites=rt_data.get("yum_prerequisites", rt_defaults.yum_prerequisites),
            apt_gpg_url=rt_data.get("apt_gpg_url", rt_defaults.apt_gpg_url),
            apt_repo_url=rt_data.get("apt_repo_url", rt_defaults.apt_repo_url),
            apt_arch=rt_data.get("apt_arch", rt_defaults.apt_arch),
            yum_repo_url=rt_data.get("yum_repo_url", rt_defaults.yum_repo_url),
            service=rt_data.get("service", rt_defaults.service),
        )

        # Parse kubernetes config
        k8s_data = data.get("kubernetes", {}) or {}
        k8s_defaults = KubernetesConfig()
        kubernetes = KubernetesConfig(
            packages=k8s_data.get("packages", k8s_defaults.packages),
            apt_key_url=k8s_data.get("apt_key_url", k8s_defaults.apt_key_url),
            apt_source=k8s_data.get("apt_source", k8s_defaults.apt_source),
            apt_list_path=k8s_data.get("apt_list_path", k8s_defaults.apt_list_path),
            yum_repo_path=k8s_data.get("yum_repo_path", k8s_defaults.yum_repo_path),
            yum_repo=k8s_data.get("yum_repo", k8s_defaults.yum_repo),
            kubelet_service=k8s_data.get("kubelet_service", k8s_defaults.kubelet_service),
        )

        # Parse swap config
        swap_data = data.get("swap", {}) or {}
        swap = SwapConfig(
            fstab_path=swap_data.get("fstab_path", "/etc/fstab"),
            restore_on_reset=swap_data.get("restore_on_reset", True),
        )

        families = data.get("os_families")
        if not isinstance(families, dict):
            families = {k: list(v) for k, v in DEFAULT_OS_FAMILIES.items()}

        return cls(
            discovery=discovery,
            cluster=cluster,
            runtime=runtime,
            kubernetes=kubernetes,
            swap=swap,
            os_families=families,
            command_timeout=data.get("command_timeout"),
            fail_fast=data.get("fail_fast", False),
            verify_components=data.get("verify_components", False),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "NodeConfig":
        """Load config from YAML file."""
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "NodeConfig":
        """Load config from path or defaults.

        Checks in order:
        1. Provided path
        2. KUBE_NODE_CONFIG env var
        3. ./configs/config.yaml
        4. ./config.yaml
        5. ~/.kube_node/config.yaml
        6. Default config
        """
        paths_to_try = []

        if config_path:
            paths_to_try.append(Path(config_path))

        if env_path := os.environ.get("KUBE_NODE_CONFIG"):
            paths_to_try.append(Path(env_path))

        paths_to_try.extend([
            Path("./configs/config.yaml"),
            Path("./config.yaml"),
            Path.home() / ".kube_node" / "config.yaml",
        ])

        for path in paths_to_try:
            if path.exists():
                return cls.from_yaml(path)

        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "discovery": {
                "base_url": self.discovery.base_url,
                "token_path": self.discovery.token_path,
                "ca_cert_hash_path": self.discovery.ca_cert_hash_path,
                "timeout": self.discovery.timeout,
                "retries": self.discovery.retries,
                "verify": self.discovery.verify,
            },
            "cluster": {
                "control_plane_endpoint": self.cluster.control_plane_endpoint,
                "force_reset": self.cluster.force_reset,
            },
            "runtime": {
                "packages": self.runtime.packages,
                "service": self.runtime.service,
            },
            "kubernetes": {
                "packages": self.kubernetes.packages,
            },
            "swap": {
                "fstab_path": self.swap.fstab_path,
                "restore_on_reset": self.swap.restore_on_reset,
            },
            "os_families": self.os_families,
            "command_timeout": self.command_timeout,
            "fail_fast": self.fail_fast,
            "verify_components": self.verify_components,
        }
