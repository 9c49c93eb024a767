from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import httpx

from transcribe_example.errors import DownloadError

logger = logging.getLogger(__name__)


def media_basename(url: str) -> str:
    name = PurePosixPath(urlparse(url).path).name
    if not name:
        raise DownloadError(f'Cannot derive a file name from "{url}"')
    return name


class MediaFetcher:
    def __init__(
        self,
        data_dir: Path,
        timeout_seconds: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.data_dir = data_dir
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    def fetch(self, url: str) -> Path:
        destination = self.data_dir / media_basename(url)
        destination.unlink(missing_ok=True)

        logger.info("Downloading %s", url)
        with httpx.Client(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            response = client.get(url)

        if response.status_code != 200:
            raise DownloadError(
                f'Failed to download "{url}" (status {response.status_code})'
            )

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(response.content)
        logger.info("Saved %d bytes to %s", len(response.content), destination)
        return destination
