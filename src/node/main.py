#!/usr/bin/env python3
"""
kube-node - Main entry point.

Installs a container runtime and the Kubernetes node components, then joins
this host to a cluster (init), or removes them and resets cluster
membership (reset).
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from .config import NodeConfig
from .lifecycle import NodeLifecycle
from ..data.models import Mode
from ..providers.os_detect import OSDetector
from ..providers.runner import CommandRunner

USAGE_EXIT_CODE = 1

MODE_HELP = """Define the mode of execution:
  init   Initialize workstation and join it to the cluster.
  reset  Clear the system and break up the connection to the cluster."""


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints usage and exits 1 on any misuse."""

    def error(self, message: str) -> None:
        self.print_help(sys.stderr)
        self.exit(USAGE_EXIT_CODE, f"\n{self.prog}: error: {message}\n")


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog="kube-node",
        description="Kubernetes node lifecycle: install and join, or remove and reset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-m", "--mode", dest="mode", metavar="{init|reset}", help=MODE_HELP)
    parser.add_argument("--config", type=str, help="Path to config YAML file")

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the commands that would run without changing the host",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first failing step",
    )
    parser.add_argument(
        "--verify-components",
        action="store_true",
        default=None,
        help="Run docker/kubeadm/kubelet/kubectl version checks after install",
    )
    parser.add_argument(
        "--keep-swap-off",
        action="store_true",
        help="Do not re-enable swap on reset",
    )
    parser.add_argument(
        "--control-plane-endpoint",
        default=None,
        help="API server host:port passed to kubeadm join",
    )
    parser.add_argument(
        "--discovery-url",
        default=None,
        help="Base URL serving the join token and CA cert hash",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Per-command timeout in seconds (default: none)",
    )
    return parser


def is_root() -> bool:
    return os.geteuid() == 0


def apply_overrides(config: NodeConfig, args: argparse.Namespace) -> NodeConfig:
    """Override loaded config with CLI args."""
    if args.fail_fast:
        config.fail_fast = True
    if args.verify_components:
        config.verify_components = True
    if args.keep_swap_off:
        config.swap.restore_on_reset = False
    if args.control_plane_endpoint:
        config.cluster.control_plane_endpoint = args.control_plane_endpoint
    if args.discovery_url:
        config.discovery.base_url = args.discovery_url
    if args.timeout is not None:
        config.command_timeout = args.timeout
    return config


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    mode = Mode.parse(args.mode)
    if mode is None:
        print("You must define the mode of execution.")
        parser.print_help()
        return USAGE_EXIT_CODE

    if not args.dry_run and not is_root():
        print("Please run as root")
        return USAGE_EXIT_CODE

    config = apply_overrides(NodeConfig.load(args.config), args)
    runner = CommandRunner(dry_run=args.dry_run, timeout=config.command_timeout)

    os_info = OSDetector(runner=runner).detect()
    print(f"OS: {os_info.name}", flush=True)

    lifecycle = NodeLifecycle.from_config(config, os_info, runner)
    report = lifecycle.run(mode)
    return 1 if report.aborted else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the kube-node command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be a positive number of seconds")
    return run(args, parser)


if __name__ == "__main__":
    raise SystemExit(main())
