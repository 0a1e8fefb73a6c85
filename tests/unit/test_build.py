"""Tests for the cargo runner and release packaging."""

from __future__ import annotations

import subprocess
import tarfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from crate_release.build.cargo import CargoRunner
from crate_release.build.package import ReleasePackager, default_targets, host_suffix
from crate_release.config.models import TargetConfig
from crate_release.core.version import Version
from crate_release.exceptions import ExternalProcessError, ProjectError


class TestCargoRunner:
    """Tests for CargoRunner."""

    def test_run_tests(self, tmp_path: Path):
        """Run the quiet test suite in the project directory."""
        with patch("subprocess.run") as mock_run:
            CargoRunner(tmp_path).run_tests()

            mock_run.assert_called_once_with(
                ["cargo", "test", "-q"],
                stderr=subprocess.PIPE,
                text=True,
                check=True,
                cwd=tmp_path,
            )

    def test_run_tests_nocapture(self, tmp_path: Path):
        """Pass --nocapture through to the test harness."""
        with patch("subprocess.run") as mock_run:
            CargoRunner(tmp_path).run_tests(nocapture=True)

            assert mock_run.call_args[0][0] == ["cargo", "test", "-q", "--", "--nocapture"]

    def test_run_build_release_target(self, tmp_path: Path):
        """Build in release mode for a cross target."""
        with patch("subprocess.run") as mock_run:
            CargoRunner(tmp_path).run_build(release=True, target="i686-pc-windows-gnu")

            assert mock_run.call_args[0][0] == [
                "cargo",
                "build",
                "--release",
                "--target=i686-pc-windows-gnu",
            ]

    def test_run_build_debug(self, tmp_path: Path):
        """Debug build with a custom tool."""
        with patch("subprocess.run") as mock_run:
            CargoRunner(tmp_path, tool="cross").run_build()

            assert mock_run.call_args[0][0] == ["cross", "build"]

    def test_failure(self, tmp_path: Path):
        """Raise ExternalProcessError with the command on a non-zero exit."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.CalledProcessError(101, ["cargo", "test", "-q"])

            with pytest.raises(ExternalProcessError, match="exit code 101") as exc_info:
                CargoRunner(tmp_path).run_tests()

            assert exc_info.value.command == ["cargo", "test", "-q"]

    def test_failure_carries_stderr(self, tmp_path: Path):
        """Attach the captured stderr of a failed build to the error."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.CalledProcessError(
                101, ["cargo", "build"], stderr="error[E0425]: cannot find value `x`\n"
            )

            with pytest.raises(ExternalProcessError) as exc_info:
                CargoRunner(tmp_path).run_build()

            assert exc_info.value.stderr == "error[E0425]: cannot find value `x`\n"
            assert "cannot find value" in str(exc_info.value)

    def test_tool_missing(self, tmp_path: Path):
        """Raise ExternalProcessError when cargo is not installed."""
        with patch("subprocess.run", side_effect=FileNotFoundError("cargo")):
            with pytest.raises(ExternalProcessError, match="not found"):
                CargoRunner(tmp_path).run_tests()


class TestTargets:
    """Tests for host detection and default targets."""

    @pytest.mark.parametrize(
        ("platform", "suffix"),
        [("linux", "linux"), ("darwin", "darwin"), ("win32", "windows"), ("cygwin", "windows")],
    )
    def test_host_suffix(self, platform: str, suffix: str):
        """Map sys.platform values to archive suffixes."""
        assert host_suffix(platform) == suffix

    def test_linux_cross_builds_windows(self):
        """Linux builds the host plus both Windows targets."""
        targets = default_targets("linux")

        assert [t.suffix for t in targets] == ["linux", "win64", "win32"]
        assert targets[0].triple is None
        assert targets[1].triple == "x86_64-pc-windows-gnu"
        assert targets[2].exe_suffix == ".exe"

    def test_darwin_host_only(self):
        """macOS builds only the host target."""
        assert default_targets("darwin") == [TargetConfig(suffix="darwin")]

    def test_windows_host_reads_gnu_output_dir(self):
        """A Windows host reads its binary from the x86_64 gnu target directory."""
        assert default_targets("win32") == [
            TargetConfig(
                suffix="windows",
                exe_suffix=".exe",
                output_dir=Path("target", "x86_64-pc-windows-gnu", "release"),
            )
        ]


class TestReleasePackager:
    """Tests for ReleasePackager."""

    @pytest.fixture
    def built_project(self, tmp_path: Path) -> Path:
        """A project with host and Windows binaries already built."""
        host = tmp_path / "target" / "release"
        host.mkdir(parents=True)
        (host / "enforcer").write_bytes(b"host-binary")
        cross = tmp_path / "target" / "x86_64-pc-windows-gnu" / "release"
        cross.mkdir(parents=True)
        (cross / "enforcer.exe").write_bytes(b"windows-binary")
        return tmp_path

    def test_package_all_targets(self, built_project: Path, tmp_path_factory):
        """Archive each target into target/release and install the host binary."""
        install_dir = tmp_path_factory.mktemp("home") / "bin"
        runner = MagicMock(spec=CargoRunner)
        packager = ReleasePackager(
            built_project,
            "enforcer",
            runner,
            targets=[
                TargetConfig(suffix="linux"),
                TargetConfig(suffix="win64", triple="x86_64-pc-windows-gnu", exe_suffix=".exe"),
            ],
            install_dir=install_dir,
        )

        archives = packager.package(Version(1, 3, 0))

        release_dir = built_project / "target" / "release"
        assert archives == [
            release_dir / "enforcer@1.3.0-linux.tgz",
            release_dir / "enforcer@1.3.0-win64.tgz",
        ]
        assert runner.run_build.call_args_list[0].kwargs == {"release": True, "target": None}
        assert runner.run_build.call_args_list[1].kwargs == {
            "release": True,
            "target": "x86_64-pc-windows-gnu",
        }
        with tarfile.open(archives[1], "r:gz") as tar:
            assert tar.getnames() == ["enforcer.exe"]
        assert (install_dir / "enforcer").read_bytes() == b"host-binary"
        assert not (install_dir / "enforcer.exe").exists()

    def test_windows_host_target(self, built_project: Path, tmp_path_factory):
        """A host target with an output_dir is read from there and installed."""
        install_dir = tmp_path_factory.mktemp("home") / "bin"
        runner = MagicMock(spec=CargoRunner)
        packager = ReleasePackager(
            built_project,
            "enforcer",
            runner,
            targets=default_targets("win32"),
            install_dir=install_dir,
        )

        archives = packager.package(Version(2, 0, 0))

        assert archives == [built_project / "target" / "release" / "enforcer@2.0.0-windows.tgz"]
        runner.run_build.assert_called_once_with(release=True, target=None)
        assert (install_dir / "enforcer.exe").read_bytes() == b"windows-binary"

    def test_no_install_dir_skips_install(self, built_project: Path):
        """Without an install directory only the archive is written."""
        packager = ReleasePackager(
            built_project,
            "enforcer",
            MagicMock(spec=CargoRunner),
            targets=[TargetConfig(suffix="linux")],
        )

        with patch.object(ReleasePackager, "install") as mock_install:
            packager.package(Version(1, 0, 0))

        mock_install.assert_not_called()

    def test_install_creates_directory(self, built_project: Path, tmp_path_factory):
        """install() creates the target directory and copies the binary."""
        install_dir = tmp_path_factory.mktemp("home") / "nested" / "bin"
        packager = ReleasePackager(built_project, "enforcer", MagicMock(spec=CargoRunner))

        binary = built_project / "target" / "release" / "enforcer"

        destination = packager.install(binary, install_dir)

        assert destination == install_dir / "enforcer"
        assert destination.read_bytes() == b"host-binary"

    def test_missing_binary(self, tmp_path: Path):
        """Raise ProjectError when the build produced no binary."""
        packager = ReleasePackager(
            tmp_path,
            "enforcer",
            MagicMock(spec=CargoRunner),
            targets=[TargetConfig(suffix="linux")],
        )

        with pytest.raises(ProjectError, match="Release binary not found"):
            packager.package(Version(1, 0, 0))
