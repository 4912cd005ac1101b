"""Base provider interface for host capabilities."""

from abc import ABC, abstractmethod
from typing import Optional


def _log(msg: str) -> None:
    """Print with flush so progress interleaves correctly with child output."""
    print(msg, flush=True)


class BaseProvider(ABC):
    """Abstract base class for host capabilities.

    Every external concern (package manager, service manager, cluster CLI,
    discovery endpoint) implements this interface so the lifecycle can be
    driven against real commands or a recording fake.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this provider.

        Returns:
            A short, lowercase identifier (e.g., 'apt', 'systemd', 'cluster')
        """
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name for console output.

        Returns:
            A user-friendly name (e.g., 'APT', 'Kubernetes cluster')
        """
        pass

    def log(self, message: str) -> None:
        _log(f"[{self.name}] {message}")


class ProviderError(Exception):
    """Exception raised when a provider cannot complete an operation."""

    def __init__(self, provider_name: str, message: str, cause: Optional[Exception] = None):
        self.provider_name = provider_name
        self.cause = cause
        super().__init__(f"[{provider_name}] {message}")
