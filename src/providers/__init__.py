"""Host capabilities - command runner, package/service managers, cluster CLIs."""

from .base import BaseProvider, ProviderError
from .runner import CommandRunner
from .os_detect import OSDetector
from .package_manager import (
    PackageManager,
    AptPackageManager,
    YumPackageManager,
    get_package_manager,
)
from .service_manager import SystemdServiceManager
from .container_runtime import ContainerRuntimeInstaller
from .kubernetes import KubernetesInstaller
from .swap import SwapManager
from .discovery import DiscoveryClient, DiscoveryError
from .cluster import ClusterClient

__all__ = [
    "BaseProvider",
    "ProviderError",
    "CommandRunner",
    "OSDetector",
    "PackageManager",
    "AptPackageManager",
    "YumPackageManager",
    "get_package_manager",
    "SystemdServiceManager",
    "ContainerRuntimeInstaller",
    "KubernetesInstaller",
    "SwapManager",
    "DiscoveryClient",
    "DiscoveryError",
    "ClusterClient",
]
