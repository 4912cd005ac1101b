"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

from src.data.models import CommandResult, OSInfo
from src.node.config import NodeConfig
from src.providers.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """CommandRunner that records commands instead of executing them.

    Commands whose text starts with any entry in ``fail`` exit 1.
    ``outputs`` maps a query command (joined with spaces) to its stdout.
    """

    def __init__(self, fail=(), outputs=None, dry_run=False):
        super().__init__(dry_run=dry_run)
        self.fail = tuple(fail)
        self.outputs = outputs or {}
        self.commands = []

    def _result(self, command):
        text = " ".join(command)
        self.commands.append(text)
        code = 1 if any(text.startswith(prefix) for prefix in self.fail) else 0
        return CommandResult(command=list(command), returncode=code)

    def run(self, cmd, input_text=None, capture_output=False):
        return self._result([str(c) for c in cmd])

    def run_shell(self, command):
        return self._result([command])

    def output(self, cmd):
        return self.outputs.get(" ".join(cmd))


@pytest.fixture
def temp_root():
    """Create a temporary filesystem root for release files."""
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "etc").mkdir()
        yield root


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def ubuntu():
    return OSInfo(name="Ubuntu", version="22.04", codename="jammy", source="os-release")


@pytest.fixture
def centos():
    return OSInfo(name="CentOS Linux", version="7", source="os-release")


@pytest.fixture
def node_config(tmp_path):
    """Default config with every host path redirected into tmp_path."""
    config = NodeConfig()
    config.swap.fstab_path = str(tmp_path / "fstab")
    config.kubernetes.apt_list_path = str(tmp_path / "apt" / "kubernetes.list")
    config.kubernetes.yum_repo_path = str(tmp_path / "yum" / "kubernetes.repo")
    return config


@pytest.fixture
def sample_os_release_ubuntu():
    """Sample /etc/os-release from Ubuntu 22.04."""
    return '''NAME="Ubuntu"
VERSION_ID="22.04"
VERSION="22.04.3 LTS (Jammy Jellyfish)"
VERSION_CODENAME=jammy
ID=ubuntu
ID_LIKE=debian
PRETTY_NAME="Ubuntu 22.04.3 LTS"
UBUNTU_CODENAME=jammy
'''


@pytest.fixture
def sample_os_release_centos():
    """Sample /etc/os-release from CentOS 7."""
    return '''NAME="CentOS Linux"
VERSION="7 (Core)"
ID="centos"
ID_LIKE="rhel fedora"
VERSION_ID="7"
PRETTY_NAME="CentOS Linux 7 (Core)"
'''


@pytest.fixture
def sample_fstab():
    """Sample /etc/fstab with one active and one commented swap entry."""
    return '''# /etc/fstab: static file system information.
UUID=1234-abcd /               ext4    errors=remount-ro 0       1
/swapfile                                 none            swap    sw              0       0
#/dev/sdb1 none swap sw 0 0
UUID=5678-ef01 /boot/efi       vfat    umask=0077      0       1
'''


@pytest.fixture
def make_runner():
    """Factory for recording runners with failures or query outputs."""
    return RecordingRunner
