"""Setup script for the safebox_installer package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file for long description
readme_path = Path(__file__).parent / "README.md"
try:
    with open(readme_path, encoding="utf-8") as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = "Postinstall helper that downloads and installs the prebuilt safebox binary"

setup(
    name="safebox-installer",
    version="1.0.0",
    description="Downloads the platform-specific safebox binary and installs it into a local bin directory",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="python/tools", include=["safebox_installer", "safebox_installer.*"]),
    package_dir={"": "python/tools"},
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.6.0",
        "tqdm>=4.64.0",
        "aiohttp>=3.8.0",
        "aiofiles>=0.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
    },
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: MacOS",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Installation/Setup",
        "Topic :: Utilities",
    ],
    keywords="safebox binary installer postinstall download",
    entry_points={
        "console_scripts": [
            "safebox-installer=safebox_installer.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
