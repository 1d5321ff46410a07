"""KOPIS open API client returning decoded XML trees."""

import logging
from typing import Any

import httpx

from playscout.config import settings
from playscout.errors import FetchError
from playscout.utils.xml import decode_xml


class KopisClient:
    """Client for the KOPIS performing-arts open API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize KOPIS client.

        Args:
            api_key: KOPIS service key (uses settings if not provided)
            base_url: API root, e.g. ``http://kopis.or.kr/openApi/restful``
            timeout: Request timeout in seconds
            logger: Logger to report through (module logger if not provided)
        """
        self.api_key = api_key or settings.kopis_api_key
        self.base_url = (base_url or settings.kopis_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.logger = logger or logging.getLogger(__name__)
        if not self.api_key:
            self.logger.warning("KOPIS API key not configured")

    async def fetch(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        GET an endpoint and decode the XML response.

        Args:
            endpoint: Path below the API root, e.g. ``"pblprfr/PF123456"``
            params: Query parameters; the service key is added automatically

        Returns:
            Decoded tree, e.g. ``{"dbs": {"db": [...]}}``

        Raises:
            FetchError: On network failure, non-success status or undecodable body
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        query = {**(params or {}), "service": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query)
                response.raise_for_status()
                body = response.content
        except httpx.HTTPError as e:
            raise FetchError(endpoint, e) from e

        try:
            return decode_xml(body)
        except ValueError as e:
            raise FetchError(endpoint, e) from e
