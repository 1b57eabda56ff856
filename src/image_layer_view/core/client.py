"""Async client for the image analysis backend."""

import asyncio
import logging
from typing import Optional

import aiohttp

from ..exceptions import ClientClosedError, UpstreamError
from ..models import AnalysisResult, ImageReference
from ..utils.decode import parse_analysis_result, parse_image_reference
from .sequence import RequestSequence
from .session import parse_json_response
from .types import ClientConfig

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Async client for the /api/analyze and /api/latest-images endpoints."""

    def __init__(
        self,
        config: ClientConfig,
        connector: Optional[aiohttp.BaseConnector] = None,
    ) -> None:
        """Initialize the analysis client.

        Args:
            config: Backend URL and request timeout
            connector: aiohttp connector for connection pooling
        """
        self.config = config
        self.connector = connector
        self.session: Optional[aiohttp.ClientSession] = None
        self.sequence = RequestSequence()

    async def __aenter__(self) -> "AnalysisClient":
        """Enter async context manager."""
        if not self.session:
            self.session = aiohttp.ClientSession(
                connector=self.connector,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            raise ClientClosedError(
                "AnalysisClient must be used as an async context manager"
            )
        return self.session

    async def _get_json(self, path: str, params: Optional[dict] = None):
        session = self._require_session()
        url = f"{self.config.url}{path}"
        try:
            async with session.get(url, params=params) as resp:
                return await parse_json_response(resp)
        except aiohttp.ClientError as e:
            logger.warning("Request %s failed: %s", url, e)
            raise UpstreamError(f"Failed to request {url}: {e}") from e
        except asyncio.TimeoutError as e:
            logger.warning("Request %s timed out", url)
            raise UpstreamError(f"Request {url} timed out") from e

    async def analyze(self, image: str, arch: str = "") -> AnalysisResult:
        """Fetch the analysis of an image.

        Args:
            image: Image name (e.g., redis:alpine)
            arch: Optional architecture (amd64 or arm64)

        Returns:
            Keyed AnalysisResult

        Raises:
            UpstreamError: If the backend fails or cannot be reached
            InvalidInputError: If the response is not a valid analysis result
        """
        params = {"image": image}
        if arch:
            params["arch"] = arch
        data = await self._get_json("/api/analyze", params)
        result = parse_analysis_result(data).with_keys()
        logger.info(
            "Analyzed %s: %d layers, %d bytes",
            result.display_name,
            len(result.layers),
            result.total_size,
        )
        return result

    async def analyze_latest(
        self, image: str, arch: str = ""
    ) -> Optional[AnalysisResult]:
        """Fetch an analysis unless a newer analyze_latest call superseded it.

        Returns:
            Keyed AnalysisResult, or None if the response arrived after a
            more recent request was issued
        """
        return await self.sequence.run(lambda: self.analyze(image, arch))

    async def latest_images(self) -> list[ImageReference]:
        """List recently analyzed images.

        Raises:
            UpstreamError: If the backend fails or cannot be reached
        """
        data = await self._get_json("/api/latest-images")
        if not isinstance(data, list):
            raise UpstreamError("Invalid latest images response")
        return [parse_image_reference(item) for item in data if isinstance(item, str)]
