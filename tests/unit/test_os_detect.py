"""Tests for operating system detection."""

import pytest

from src.providers.os_detect import OSDetector, parse_env_file


class TestParseEnvFile:
    def test_quoted_and_unquoted_values(self, sample_os_release_ubuntu):
        values = parse_env_file(sample_os_release_ubuntu)
        assert values["NAME"] == "Ubuntu"
        assert values["VERSION_ID"] == "22.04"
        assert values["VERSION_CODENAME"] == "jammy"
        assert values["PRETTY_NAME"] == "Ubuntu 22.04.3 LTS"

    def test_skips_comments_and_blank_lines(self):
        values = parse_env_file("# comment\n\nNAME=Foo\nnot a pair\n")
        assert values == {"NAME": "Foo"}

    def test_unbalanced_quote_falls_back_to_raw(self):
        values = parse_env_file('NAME="Broken\n')
        assert values["NAME"] == "Broken"


class TestOSDetector:
    def test_os_release_ubuntu(self, temp_root, make_runner, sample_os_release_ubuntu):
        (temp_root / "etc" / "os-release").write_text(sample_os_release_ubuntu)
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "Ubuntu"
        assert info.version == "22.04"
        assert info.codename == "jammy"
        assert info.source == "os-release"

    def test_os_release_centos(self, temp_root, make_runner, sample_os_release_centos):
        (temp_root / "etc" / "os-release").write_text(sample_os_release_centos)
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "CentOS Linux"
        assert info.version == "7"
        assert info.codename is None

    def test_os_release_takes_priority(self, temp_root, make_runner, sample_os_release_centos):
        (temp_root / "etc" / "os-release").write_text(sample_os_release_centos)
        (temp_root / "etc" / "debian_version").write_text("12.1\n")
        runner = make_runner(outputs={"lsb_release -si": "Debian"})

        info = OSDetector(root=temp_root, runner=runner).detect()
        assert info.name == "CentOS Linux"

    def test_lsb_release_command(self, temp_root, make_runner):
        runner = make_runner(
            outputs={
                "lsb_release -si": "Ubuntu",
                "lsb_release -sr": "20.04",
                "lsb_release -sc": "focal",
            }
        )
        info = OSDetector(root=temp_root, runner=runner).detect()

        assert info.name == "Ubuntu"
        assert info.version == "20.04"
        assert info.codename == "focal"
        assert info.source == "lsb_release"

    def test_lsb_release_file(self, temp_root, make_runner):
        (temp_root / "etc" / "lsb-release").write_text(
            "DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=18.04\nDISTRIB_CODENAME=bionic\n"
        )
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "Ubuntu"
        assert info.version == "18.04"
        assert info.codename == "bionic"
        assert info.source == "lsb-release"

    def test_debian_version(self, temp_root, make_runner):
        (temp_root / "etc" / "debian_version").write_text("9.13\n")
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "Debian"
        assert info.version == "9.13"

    def test_suse_release(self, temp_root, make_runner):
        (temp_root / "etc" / "SuSe-release").write_text("SUSE Linux Enterprise Server 11\nVERSION = 11\nPATCHLEVEL = 4\n")
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "SuSE"
        assert info.version == "11"

    def test_redhat_release(self, temp_root, make_runner):
        (temp_root / "etc" / "redhat-release").write_text("CentOS Linux release 7.9.2009 (Core)\n")
        info = OSDetector(root=temp_root, runner=make_runner()).detect()

        assert info.name == "CentOS Linux"
        assert info.version == "7.9.2009"
        assert info.source == "redhat-release"

    def test_uname_fallback(self, temp_root, make_runner):
        info = OSDetector(root=temp_root, runner=make_runner()).detect()
        assert info.source == "uname"
        assert info.name

    def test_repeated_calls_are_consistent(self, temp_root, make_runner, sample_os_release_ubuntu):
        (temp_root / "etc" / "os-release").write_text(sample_os_release_ubuntu)
        detector = OSDetector(root=temp_root, runner=make_runner())

        labels = {detector.detect().name for _ in range(5)}
        assert labels == {"Ubuntu"}

    def test_empty_name_falls_through(self, temp_root, make_runner):
        (temp_root / "etc" / "os-release").write_text("ID=mystery\n")
        (temp_root / "etc" / "debian_version").write_text("bookworm/sid\n")
        info = OSDetector(root=temp_root, runner=make_runner()).detect()
        assert info.name == "Debian"
