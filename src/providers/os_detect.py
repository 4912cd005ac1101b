"""Operating system detection.

Inspects release files in priority order and returns the OS family label
used to pick a package manager.
"""

from __future__ import annotations

import os
import re
import shlex
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .base import BaseProvider
from .runner import CommandRunner
from ..data.models import OSInfo


def parse_env_file(text: str) -> Dict[str, str]:
    """Parse a shell-style KEY=value file such as /etc/os-release."""
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        key = key.strip()
        try:
            parts = shlex.split(raw)
            value = " ".join(parts)
        except ValueError:
            value = raw.strip().strip("\"'")
        values[key] = value
    return values


class OSDetector(BaseProvider):
    """Detects the host OS family and version.

    Probes, in order: /etc/os-release, the lsb_release command,
    /etc/lsb-release, /etc/debian_version, /etc/SuSe-release,
    /etc/redhat-release, and finally uname.
    """

    def __init__(self, root: Path = Path("/"), runner: Optional[CommandRunner] = None):
        self.root = Path(root)
        self.runner = runner or CommandRunner()

    @property
    def name(self) -> str:
        return "os"

    @property
    def display_name(self) -> str:
        return "OS Detector"

    def detect(self) -> OSInfo:
        """Return the detected OS. Never fails; uname is the last resort."""
        probes: List[Callable[[], Optional[OSInfo]]] = [
            self._from_os_release,
            self._from_lsb_release_command,
            self._from_lsb_release_file,
            self._from_debian_version,
            self._from_suse_release,
            self._from_redhat_release,
        ]
        for probe in probes:
            info = probe()
            if info is not None and info.name:
                return info
        return self._from_uname()

    def _read(self, relative: str) -> Optional[str]:
        path = self.root / relative
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None

    def _from_os_release(self) -> Optional[OSInfo]:
        # freedesktop.org and systemd
        text = self._read("etc/os-release")
        if text is None:
            return None
        values = parse_env_file(text)
        return OSInfo(
            name=values.get("NAME", ""),
            version=values.get("VERSION_ID", ""),
            codename=values.get("VERSION_CODENAME") or values.get("UBUNTU_CODENAME") or None,
            source="os-release",
        )

    def _from_lsb_release_command(self) -> Optional[OSInfo]:
        # linuxbase.org
        name = self.runner.output(["lsb_release", "-si"])
        if not name:
            return None
        return OSInfo(
            name=name,
            version=self.runner.output(["lsb_release", "-sr"]) or "",
            codename=self.runner.output(["lsb_release", "-sc"]) or None,
            source="lsb_release",
        )

    def _from_lsb_release_file(self) -> Optional[OSInfo]:
        # Some Debian/Ubuntu versions without the lsb_release command
        text = self._read("etc/lsb-release")
        if text is None:
            return None
        values = parse_env_file(text)
        return OSInfo(
            name=values.get("DISTRIB_ID", ""),
            version=values.get("DISTRIB_RELEASE", ""),
            codename=values.get("DISTRIB_CODENAME") or None,
            source="lsb-release",
        )

    def _from_debian_version(self) -> Optional[OSInfo]:
        text = self._read("etc/debian_version")
        if text is None:
            return None
        return OSInfo(name="Debian", version=text.strip(), source="debian_version")

    def _from_suse_release(self) -> Optional[OSInfo]:
        text = self._read("etc/SuSe-release")
        if text is None:
            return None
        match = re.search(r"^VERSION\s*=\s*(\S+)", text, re.MULTILINE)
        return OSInfo(
            name="SuSE",
            version=match.group(1) if match else "",
            source="SuSe-release",
        )

    def _from_redhat_release(self) -> Optional[OSInfo]:
        # e.g. "CentOS Linux release 7.9.2009 (Core)"
        text = self._read("etc/redhat-release")
        if text is None:
            return None
        first_line = text.strip().splitlines()[0] if text.strip() else ""
        match = re.match(r"^(.*?)\s+release\s+(\S+)", first_line)
        if not match:
            return OSInfo(name=first_line, source="redhat-release")
        return OSInfo(name=match.group(1), version=match.group(2), source="redhat-release")

    def _from_uname(self) -> OSInfo:
        uname = os.uname()
        return OSInfo(name=uname.sysname, version=uname.release, source="uname")
