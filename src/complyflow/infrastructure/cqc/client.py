"""Care Quality Commission public API client."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from complyflow.exception.api_exceptions import CQCApiError

logger = logging.getLogger(__name__)


class CQCClient:
    """Async client for the CQC public API (providers and locations).

    Attributes:
        base_url: API base URL, e.g. ``https://api.cqc.org.uk/public/v1``
        api_key: Optional subscription key sent as ``Ocp-Apim-Subscription-Key``
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Ocp-Apim-Subscription-Key"] = self.api_key
        return headers

    async def _get(self, path: str, params: Optional[dict] = None) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}{path}", params=params, headers=self._headers()
            )

        if response.is_error:
            logger.error(f"CQC API error {response.status_code} for {path}")
            raise CQCApiError(response.status_code)

        return response.json()

    async def get_provider(self, provider_id: str) -> Dict[str, Any]:
        """Fetch one provider record.

        Raises:
            CQCApiError: On a non-2xx response
        """
        return await self._get(f"/providers/{provider_id}")

    async def search_locations(
        self, postcode_area: str, per_page: int = 50, page: int = 1
    ) -> List[Dict[str, Any]]:
        """List locations whose postcode starts with the given area.

        Raises:
            CQCApiError: On a non-2xx response
        """
        data = await self._get(
            "/locations",
            params={"postalCode": postcode_area, "perPage": per_page, "page": page},
        )
        return data.get("locations") or []
