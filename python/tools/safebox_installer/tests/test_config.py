"""
Tests for configuration resolution.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from safebox_installer.config import (
    InstallerConfig,
    build_binary_url,
    load_config,
    resolve_arch,
    resolve_platform,
    BASE_URL_ENV,
    BIN_DIR_ENV,
    VERSION_ENV,
    DEFAULT_VERSION,
)
from safebox_installer.models import UnsupportedPlatformError


@pytest.mark.parametrize(
    "system, expected",
    [("Linux", "linux"), ("Darwin", "darwin"), ("Windows", "windows"), ("linux", "linux")],
)
def test_resolve_platform(system, expected):
    assert resolve_platform(system) == expected


@pytest.mark.parametrize("system", ["FreeBSD", "SunOS", ""])
def test_resolve_platform_unsupported(system):
    assert resolve_platform(system) is None


@pytest.mark.parametrize(
    "machine, expected",
    [("x86_64", "amd64"), ("AMD64", "amd64"), ("aarch64", "arm64"), ("arm64", "arm64"), ("i686", "386")],
)
def test_resolve_arch(machine, expected):
    assert resolve_arch(machine) == expected


@pytest.mark.parametrize("machine", ["mips", "ppc64le", "riscv64"])
def test_resolve_arch_unsupported(machine):
    assert resolve_arch(machine) is None


def test_build_binary_url_strips_trailing_slash():
    url = build_binary_url("https://example.com/dl/", "1.2.3", "linux", "amd64", "safebox")
    assert url == "https://example.com/dl/1.2.3/linux-amd64/safebox"


def test_from_environment_applies_overrides(tmp_path: Path):
    config = InstallerConfig.from_environment(
        system="Darwin",
        machine="arm64",
        environ={
            VERSION_ENV: "2.0.1",
            BASE_URL_ENV: "https://mirror.local/safebox",
            BIN_DIR_ENV: str(tmp_path / "bin"),
        },
    )

    assert config.platform == "darwin"
    assert config.arch == "arm64"
    assert config.version == "2.0.1"
    assert config.binary_name == "safebox"
    assert config.binary_url == "https://mirror.local/safebox/2.0.1/darwin-arm64/safebox"
    assert config.bin_dir == tmp_path / "bin"
    assert config.installed_binary_path == tmp_path / "bin" / "safebox"


def test_from_environment_defaults():
    config = InstallerConfig.from_environment(system="Linux", machine="x86_64", environ={})

    assert config.version == DEFAULT_VERSION
    assert config.max_retries == 3
    assert config.cache_dir == Path(tempfile.gettempdir())
    assert config.cached_binary_path == Path(tempfile.gettempdir()) / f"safebox-{DEFAULT_VERSION}"


def test_windows_binary_has_exe_suffix():
    config = InstallerConfig.from_environment(system="Windows", machine="AMD64", environ={})
    assert config.binary_name == "safebox.exe"
    assert config.binary_url.endswith("/windows-amd64/safebox.exe")


def test_config_is_immutable():
    config = InstallerConfig.from_environment(system="Linux", machine="x86_64", environ={})
    with pytest.raises(AttributeError):
        config.version = "9.9.9"


def test_unsupported_arch_has_no_url():
    config = InstallerConfig.from_environment(system="Linux", machine="mips", environ={})
    assert config.arch is None
    assert config.binary_url == ""
    assert not config.is_supported


def test_validate_unsupported_arch_names_package_and_value():
    config = InstallerConfig.from_environment(system="Linux", machine="mips", environ={})

    with pytest.raises(UnsupportedPlatformError) as exc_info:
        config.validate()

    assert "safebox is not supported for this architecture: mips" in str(exc_info.value)
    assert exc_info.value.error_code == "UNSUPPORTED_PLATFORM"


def test_validate_unsupported_platform():
    config = InstallerConfig.from_environment(system="Plan9", machine="x86_64", environ={})

    with pytest.raises(UnsupportedPlatformError, match="platform: Plan9"):
        config.validate()


def test_load_config_creates_bin_dir(tmp_path: Path):
    bin_dir = tmp_path / "bin"

    config = load_config(system="Linux", machine="x86_64", environ={BIN_DIR_ENV: str(bin_dir)})

    assert bin_dir.is_dir()
    assert config.bin_dir == bin_dir


def test_load_config_does_not_create_nested_dirs(tmp_path: Path):
    bin_dir = tmp_path / "missing" / "bin"

    with pytest.raises(FileNotFoundError):
        load_config(system="Linux", machine="x86_64", environ={BIN_DIR_ENV: str(bin_dir)})


def test_load_config_unsupported_touches_nothing(tmp_path: Path):
    bin_dir = tmp_path / "bin"

    with patch("safebox_installer.config.Path.mkdir") as mock_mkdir:
        with pytest.raises(UnsupportedPlatformError):
            load_config(system="Linux", machine="sparc", environ={BIN_DIR_ENV: str(bin_dir)})

    mock_mkdir.assert_not_called()
    assert not bin_dir.exists()
