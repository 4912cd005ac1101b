"""Cluster membership through the kubeadm and kubectl CLIs."""

from __future__ import annotations

from typing import List, Optional

from .base import BaseProvider
from .runner import CommandRunner
from ..data.models import CommandResult, JoinCredentials


class ClusterClient(BaseProvider):
    """Joins, resets and inspects this node's cluster membership."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "cluster"

    @property
    def display_name(self) -> str:
        return "Kubernetes cluster"

    def join_command(self, credentials: JoinCredentials, endpoint: Optional[str] = None) -> List[str]:
        cmd = ["kubeadm", "join"]
        if endpoint:
            cmd.append(endpoint)
        cmd.extend([
            "--discovery-token",
            credentials.token,
            "--discovery-token-ca-cert-hash",
            credentials.ca_cert_hash,
        ])
        return cmd

    def join(self, credentials: JoinCredentials, endpoint: Optional[str] = None) -> CommandResult:
        self.log("Joining Kubernetes cluster...")
        return self.runner.run(self.join_command(credentials, endpoint))

    def reset(self, force: bool = True) -> CommandResult:
        self.log("Resetting connection to Kubernetes cluster...")
        cmd = ["kubeadm", "reset"]
        if force:
            cmd.append("-f")
        return self.runner.run(cmd)

    def get_nodes(self) -> CommandResult:
        self.log("Checking if node has joined cluster...")
        return self.runner.run(["kubectl", "get", "nodes"])
