"""Image download over HTTP."""

import logging

import requests

from config import DOWNLOAD_TIMEOUT
from errors import DownloadError

logger = logging.getLogger(__name__)


def download_image(
    url: str,
    timeout: int = DOWNLOAD_TIMEOUT,
    session: requests.Session | None = None,
) -> bytes:
    """Download an image and return its bytes.

    Raises:
        DownloadError: On connection errors, timeouts and non-2xx responses.
    """
    http = session or requests
    logger.info("Downloading image...")
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise DownloadError(f"Failed to download {url}: {exc}") from exc

    content = response.content
    logger.info("Image downloaded (%.2f KB)", len(content) / 1024)
    return content
