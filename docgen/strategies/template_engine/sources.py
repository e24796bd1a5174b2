"""Template source strategies.

Retrieve raw template bytes from the local filesystem or over HTTP.
Fetching is the only I/O-bound step; everything downstream is synchronous.
"""

import logging
from pathlib import Path

import httpx

from docgen.interfaces.template import BaseTemplateSource, FetchError

logger = logging.getLogger(__name__)


class LocalTemplateSource(BaseTemplateSource):
    """Reads templates from a directory on disk."""

    def __init__(self, base_dir: Path | str) -> None:
        """Initialize the source.

        Args:
            base_dir: Directory containing the template files.
        """
        self._base_dir = Path(base_dir).resolve()

    async def fetch(self, ref: str) -> bytes:
        """Read a template below the base directory.

        Raises:
            FetchError: If the file is missing, outside the base directory,
                or unreadable.
        """
        path = (self._base_dir / ref.lstrip("/")).resolve()

        if not path.is_relative_to(self._base_dir):
            raise FetchError(f"Template path escapes template directory: {ref}")
        if not path.is_file():
            raise FetchError(f"Template file not found: {path}")

        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read template {path}: {e}")
            raise FetchError(f"Could not read template {path}: {e}") from e

        logger.info(f"Loaded template {path.name}: {len(content)} bytes")
        return content


class HttpTemplateSource(BaseTemplateSource):
    """Downloads templates from a static file server."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            base_url: URL the template references are resolved against.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch(self, ref: str) -> bytes:
        """Download a template.

        Raises:
            FetchError: On transport errors or non-success responses.
        """
        url = f"{self.base_url}/{ref.lstrip('/')}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Template download failed: {e.response.status_code} - {url}")
            raise FetchError(
                f"Template download failed with status {e.response.status_code}: {url}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Template download error: {e} - {url}")
            raise FetchError(f"Could not download template {url}: {e}") from e

        logger.info(f"Downloaded template {url}: {len(response.content)} bytes")
        return response.content
