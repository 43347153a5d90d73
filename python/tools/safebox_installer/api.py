"""API functions for both CLI usage and programmatic callers."""

import asyncio
from pathlib import Path
from typing import Optional

from .config import InstallerConfig, load_config
from .installer import BinaryInstaller
from .models import InstallResult


def get_config() -> InstallerConfig:
    """
    Resolve and validate the configuration for this host.

    Returns:
        The installer configuration, with the destination directory created

    Raises:
        UnsupportedPlatformError: If no binary is published for this host
    """
    return load_config()


def install_binary(
    config: Optional[InstallerConfig] = None, show_progress: bool = True
) -> InstallResult:
    """
    Download (or reuse the cached) binary and install it.

    Args:
        config: Configuration to use; resolved from the host when omitted
        show_progress: Whether to show a download progress bar

    Returns:
        InstallResult describing the outcome
    """
    installer = BinaryInstaller(config or load_config(), show_progress=show_progress)
    return asyncio.run(installer.install())


def uninstall_binary(config: Optional[InstallerConfig] = None) -> Path:
    """
    Remove the installed binary.

    Args:
        config: Configuration to use; resolved from the host when omitted

    Returns:
        Path of the removed binary

    Raises:
        FileNotFoundError: If no binary is installed
    """
    installer = BinaryInstaller(config or load_config())
    return installer.uninstall()
