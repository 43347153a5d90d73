"""
Configuration resolution for the safebox binary installer.

The configuration is resolved once at startup from the host operating system,
the CPU architecture and a handful of ``SAFEBOX_INSTALLER_*`` environment
overrides. It is never mutated afterwards.
"""

from __future__ import annotations

import os
import platform
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger

from .models import UnsupportedPlatformError

PACKAGE_NAME = "safebox"

# Kept in step with the package version; the binary and installer ship together
DEFAULT_VERSION = "1.0.0"
DEFAULT_BASE_URL = "https://github.com/adikari/safebox/releases/download"
DEFAULT_BIN_DIR = Path(__file__).resolve().parent / "bin"

MAX_RETRIES = 3
DEFAULT_TIMEOUT_SECONDS = 600.0

VERSION_ENV = "SAFEBOX_INSTALLER_VERSION"
BASE_URL_ENV = "SAFEBOX_INSTALLER_BASE_URL"
BIN_DIR_ENV = "SAFEBOX_INSTALLER_BIN_DIR"
CACHE_DIR_ENV = "SAFEBOX_INSTALLER_CACHE_DIR"

PLATFORMS: dict[str, str] = {
    "darwin": "darwin",
    "linux": "linux",
    "windows": "windows",
}

ARCHITECTURES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "arm64",
    "aarch64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}


def resolve_platform(system: Optional[str] = None) -> Optional[str]:
    """
    Map an operating system name to the release platform identifier.

    Args:
        system: OS name as reported by ``platform.system()``. Defaults to the host.

    Returns:
        Platform identifier, or None if no binary is published for it
    """
    if system is None:
        system = platform.system()
    return PLATFORMS.get(system.lower())


def resolve_arch(machine: Optional[str] = None) -> Optional[str]:
    """
    Map a machine type to the release architecture identifier.

    Args:
        machine: Machine type as reported by ``platform.machine()``. Defaults to the host.

    Returns:
        Architecture identifier, or None if no binary is published for it
    """
    if machine is None:
        machine = platform.machine()
    return ARCHITECTURES.get(machine.lower())


def binary_name_for(platform_id: Optional[str]) -> str:
    return f"{PACKAGE_NAME}.exe" if platform_id == "windows" else PACKAGE_NAME


def build_binary_url(
    base_url: str, version: str, platform_id: str, arch: str, binary_name: str
) -> str:
    """Build ``<base>/<version>/<platform>-<arch>/<binary>``."""
    return f"{base_url.rstrip('/')}/{version}/{platform_id}-{arch}/{binary_name}"


@dataclass(frozen=True)
class InstallerConfig:
    """Immutable description of what to download and where to put it."""
    name: str
    platform: Optional[str]
    arch: Optional[str]
    binary_name: str
    bin_dir: Path
    binary_url: str
    version: str
    cache_dir: Path
    max_retries: int = MAX_RETRIES
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # Raw host values, kept for error messages
    host_system: str = ""
    host_machine: str = ""

    @classmethod
    def from_environment(
        cls,
        *,
        system: Optional[str] = None,
        machine: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> InstallerConfig:
        """
        Resolve the configuration from the host and environment overrides.

        Args:
            system: OS name override (defaults to ``platform.system()``)
            machine: machine type override (defaults to ``platform.machine()``)
            environ: environment mapping (defaults to ``os.environ``)

        Returns:
            Resolved configuration. Unsupported values resolve to None and are
            reported by ``validate()``.
        """
        env = os.environ if environ is None else environ
        system = platform.system() if system is None else system
        machine = platform.machine() if machine is None else machine

        platform_id = resolve_platform(system)
        arch = resolve_arch(machine)
        version = env.get(VERSION_ENV) or DEFAULT_VERSION
        binary_name = binary_name_for(platform_id)

        binary_url = ""
        if platform_id and arch:
            binary_url = build_binary_url(
                env.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
                version,
                platform_id,
                arch,
                binary_name,
            )

        config = cls(
            name=PACKAGE_NAME,
            platform=platform_id,
            arch=arch,
            binary_name=binary_name,
            bin_dir=Path(env.get(BIN_DIR_ENV) or DEFAULT_BIN_DIR),
            binary_url=binary_url,
            version=version,
            cache_dir=Path(env.get(CACHE_DIR_ENV) or tempfile.gettempdir()),
            host_system=system,
            host_machine=machine,
        )
        logger.debug(f"Resolved installer configuration: {config.to_dict()}")
        return config

    @property
    def cached_binary_path(self) -> Path:
        """Download target, reused as a cache by later attempts."""
        return self.cache_dir / f"{self.binary_name}-{self.version}"

    @property
    def installed_binary_path(self) -> Path:
        return self.bin_dir / self.binary_name

    @property
    def is_supported(self) -> bool:
        return self.platform is not None and self.arch is not None

    def validate(self) -> None:
        """
        Fail fast when no binary exists for this host.

        Raises:
            UnsupportedPlatformError: If the architecture or platform did not resolve
        """
        if not self.arch:
            raise UnsupportedPlatformError(self.name, "architecture", self.host_machine)
        if not self.platform:
            raise UnsupportedPlatformError(self.name, "platform", self.host_system)

    def ensure_bin_dir(self) -> Path:
        """Create the destination directory (one level only) if it is missing."""
        if not self.bin_dir.exists():
            self.bin_dir.mkdir()
            logger.debug(f"Created destination directory {self.bin_dir}")
        return self.bin_dir

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "platform": self.platform,
            "arch": self.arch,
            "binary_name": self.binary_name,
            "bin_dir": str(self.bin_dir),
            "binary_url": self.binary_url,
            "version": self.version,
            "cache_dir": str(self.cache_dir),
            "max_retries": self.max_retries,
            "timeout_seconds": self.timeout_seconds
        }


def load_config(
    *,
    system: Optional[str] = None,
    machine: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstallerConfig:
    """
    Resolve, validate and prepare the installer configuration.

    Validation happens before the destination directory is touched, so an
    unsupported host never causes any filesystem or network activity.

    Raises:
        UnsupportedPlatformError: If the host has no prebuilt binary
    """
    config = InstallerConfig.from_environment(system=system, machine=machine, environ=environ)
    config.validate()
    config.ensure_bin_dir()
    return config
