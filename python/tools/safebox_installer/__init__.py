"""
safebox binary installer

Postinstall helper that downloads the prebuilt safebox binary for the current
platform, places it into a local bin directory and removes it again on
uninstall.

This module can be used both as a command-line tool and as an API through
Python import.
"""

from .config import InstallerConfig, load_config, resolve_arch, resolve_platform
from .installer import BinaryInstaller
from .models import (
    Command,
    InstallResult,
    InstallerError,
    UnsupportedPlatformError,
    DownloadError,
    HTTPStatusError,
    DownloadIncompleteError,
    InvalidCommandError,
)
from .api import get_config, install_binary, uninstall_binary

__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"


def get_tool_info() -> dict:
    """
    Get metadata information about the safebox_installer module.

    Returns:
        dict: module metadata including name, version, description, license,
              platform support, available functions and requirements.
    """
    return {
        "name": "safebox_installer",
        "version": __version__,
        "description": "Downloads and installs the prebuilt safebox binary for the current platform",
        "license": __license__,
        "supported": resolve_platform() is not None and resolve_arch() is not None,
        "platform": ["darwin", "linux", "windows"],
        "functions": [
            "get_config",
            "install_binary",
            "uninstall_binary",
            "get_tool_info",
        ],
        "requirements": ["aiohttp", "aiofiles", "tqdm", "loguru"],
        "classes": {
            "BinaryInstaller": "Install state machine with bounded retries",
            "InstallerConfig": "Immutable configuration resolved from the host",
            "Command": "Enum of supported commands (install, uninstall)",
        },
    }


__all__ = [
    "BinaryInstaller",
    "InstallerConfig",
    "Command",
    "InstallResult",
    "InstallerError",
    "UnsupportedPlatformError",
    "DownloadError",
    "HTTPStatusError",
    "DownloadIncompleteError",
    "InvalidCommandError",
    "load_config",
    "get_config",
    "install_binary",
    "uninstall_binary",
    "get_tool_info",
]
