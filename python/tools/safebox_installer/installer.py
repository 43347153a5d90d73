"""Download, install and uninstall the prebuilt safebox binary."""

from __future__ import annotations
import asyncio
import shutil
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles
import aiohttp
from loguru import logger
from tqdm import tqdm

from .config import InstallerConfig
from .models import (
    AttemptResult, AttemptStatus, InstallResult,
    DownloadIncompleteError, HTTPStatusError
)

BINARY_MODE = 0o744
CHUNK_SIZE = 8192


class BinaryInstaller:
    """
    Installs the binary described by an ``InstallerConfig``.

    ``install()`` drives a bounded loop over ``attempt_install()``: the first
    attempt plus up to ``config.max_retries`` retries. Each attempt checks the
    download cache, fetches the binary on a miss and copies it into place.
    """

    def __init__(self, config: InstallerConfig, *, show_progress: bool = True) -> None:
        self.config = config
        self.show_progress = show_progress

    @asynccontextmanager
    async def _http_session(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Create HTTP session with appropriate timeouts and settings."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds, connect=30)

        async with aiohttp.ClientSession(
            timeout=timeout,
            headers={"User-Agent": f"{self.config.name}-installer/{self.config.version}"}
        ) as session:
            yield session

    async def install(self) -> InstallResult:
        """
        Install the binary, retrying recoverable failures.

        Returns:
            InstallResult describing the outcome. ``success`` is False once the
            retry ceiling is exhausted.

        Raises:
            HTTPStatusError: If the release host answers with a non-200 status
        """
        max_retries = self.config.max_retries
        last_reason: Optional[str] = None

        for retry in range(max_retries + 1):
            if retry > 0:
                logger.info(
                    f"retrying to install {self.config.name} - retry {retry} out of {max_retries}"
                )

            result = await self.attempt_install()

            match result.status:
                case AttemptStatus.SUCCESS:
                    logger.info(
                        f"{self.config.name} {self.config.version} installed to "
                        f"{self.config.installed_binary_path}"
                    )
                    return InstallResult(
                        success=True,
                        attempts=retry + 1,
                        binary_path=self.config.installed_binary_path,
                        from_cache=result.from_cache
                    )
                case AttemptStatus.FATAL:
                    assert result.error is not None
                    raise result.error
                case AttemptStatus.RETRYABLE:
                    last_reason = result.reason
                    logger.warning(f"Install attempt {retry + 1} failed: {result.reason}")
                    self._discard_cached_binary()

        logger.error(
            f"Giving up on installing {self.config.name} after {max_retries} retries: {last_reason}"
        )
        return InstallResult(
            success=False,
            attempts=max_retries + 1,
            error_message=last_reason
        )

    async def attempt_install(self) -> AttemptResult:
        """Run a single pass: cache check, download on a miss, then copy."""
        cached = self.config.cached_binary_path

        if cached.exists():
            logger.debug(f"Using cached binary {cached}")
            try:
                self._copy_binary()
            except OSError as e:
                return AttemptResult.retryable(f"Failed to copy {cached}: {e}", e)
            return AttemptResult.success(from_cache=True)

        try:
            await self.download()
        except HTTPStatusError as e:
            return AttemptResult.fatal(e)
        except DownloadIncompleteError as e:
            return AttemptResult.retryable(str(e), e)

        try:
            if not cached.exists():
                raise DownloadIncompleteError(
                    f"{cached} does not exist",
                    url=self.config.binary_url,
                    file_path=cached
                )
            self._copy_binary()
        except (DownloadIncompleteError, OSError) as e:
            return AttemptResult.retryable(str(e), e)

        return AttemptResult.success()

    async def download(self) -> Path:
        """
        Stream the binary into the cache path.

        The body is written to a ``.part`` sibling and renamed onto the cache
        path only once the transfer has completed.

        Returns:
            The cache path

        Raises:
            HTTPStatusError: On a non-200 response
            DownloadIncompleteError: If the transfer is interrupted
        """
        url = self.config.binary_url
        cached = self.config.cached_binary_path
        partial = cached.with_name(cached.name + ".part")

        logger.info(f"Downloading {self.config.name} binary from {url}")

        try:
            async with self._http_session() as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise HTTPStatusError(self.config.name, response.status, url=url)

                    total_size = int(response.headers.get("content-length", 0))
                    progress_bar = None
                    if self.show_progress and total_size > 0:
                        progress_bar = tqdm(
                            total=total_size,
                            unit="B",
                            unit_scale=True,
                            desc=self.config.binary_name
                        )

                    cached.parent.mkdir(parents=True, exist_ok=True)
                    try:
                        async with aiofiles.open(partial, "wb") as f:
                            async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                                await f.write(chunk)
                                if progress_bar:
                                    progress_bar.update(len(chunk))
                    finally:
                        if progress_bar:
                            progress_bar.close()

            partial.replace(cached)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            partial.unlink(missing_ok=True)
            raise DownloadIncompleteError(
                f"Transfer from {url} was interrupted: {e}",
                url=url,
                file_path=cached,
                original_error=e
            ) from e
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise DownloadIncompleteError(
                f"File system error downloading to {cached}: {e}",
                url=url,
                file_path=cached,
                original_error=e
            ) from e

        logger.debug(f"Download completed: {cached}")
        return cached

    def _copy_binary(self) -> Path:
        dest = self.config.installed_binary_path
        shutil.copyfile(self.config.cached_binary_path, dest)
        dest.chmod(BINARY_MODE)
        return dest

    def _discard_cached_binary(self) -> None:
        # A failed attempt may leave a truncated file behind; never reuse it as a cache hit
        cached = self.config.cached_binary_path
        if cached.exists():
            logger.debug(f"Discarding cached binary {cached}")
            cached.unlink(missing_ok=True)

    def uninstall(self) -> Path:
        """
        Remove the installed binary.

        Returns:
            Path of the removed binary

        Raises:
            FileNotFoundError: If no binary is installed
        """
        target = self.config.installed_binary_path
        target.unlink()
        logger.info(f"Removed {target}")
        return target
