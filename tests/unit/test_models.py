"""Tests for data models."""

import pytest
from src.data.models import (
    CommandResult,
    Mode,
    OSInfo,
    RunReport,
    StepResult,
)


class TestMode:
    def test_parse_valid(self):
        assert Mode.parse("init") == Mode.INIT
        assert Mode.parse("reset") == Mode.RESET

    def test_parse_invalid(self):
        assert Mode.parse(None) is None
        assert Mode.parse("") is None
        assert Mode.parse("INIT") is None
        assert Mode.parse("join") is None

    def test_str_enum(self):
        assert Mode.INIT == "init"


class TestCommandResult:
    def test_ok(self):
        assert CommandResult(command=["true"], returncode=0).ok is True
        assert CommandResult(command=["false"], returncode=1).ok is False

    def test_display(self):
        result = CommandResult(command=["apt-get", "install", "-y", "kubelet"], returncode=0)
        assert result.display == "apt-get install -y kubelet"


class TestRunReport:
    def test_failed_and_ok(self):
        report = RunReport(mode=Mode.INIT, os_info=OSInfo(name="Ubuntu"))
        report.add(StepResult(name="a", ok=True))
        assert report.ok is True

        report.add(StepResult(name="b", ok=False, detail="boom", returncode=100))
        assert report.ok is False
        assert [s.name for s in report.failed] == ["b"]
        assert report.step_names == ["a", "b"]

    def test_os_info_str(self):
        assert str(OSInfo(name="CentOS Linux", version="7")) == "CentOS Linux"
