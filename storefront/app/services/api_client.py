"""
Storefront API Client

HTTP client for the storefront REST API that holds listings and orders.
"""

import json
import logging
from typing import Any, Optional

import httpx

from cartstore import Product

from ..core.errors import APIError

logger = logging.getLogger(__name__)


class StorefrontAPIClient:
    """
    Client for the storefront REST API.

    Sends a bearer token with every request when one is configured.
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            api_url: Base URL of the storefront API
            api_token: Bearer token for authenticated calls
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.base_url = api_url.rstrip("/")
        self._api_token = api_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request and decode the JSON reply"""
        url = f"{self.base_url}{path if path.startswith('/') else '/' + path}"
        content = json.dumps(body, default=str) if body is not None else None

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._headers(),
                content=content,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise APIError(f"API request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise APIError(self._error_message(response), status_code=response.status_code)

        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"API request failed: {response.status_code} {response.reason_phrase}"

    # ==================== Listing APIs ====================

    async def get_listing(self, listing_id: str) -> Product:
        """Fetch a listing and capture it as a product snapshot"""
        data = await self._request("GET", f"/listings/{listing_id}")
        listing = data.get("listing", data)
        try:
            return Product.from_dict(listing)
        except ValueError as e:
            raise APIError(f"Malformed listing {listing_id}: {e}") from e

    # ==================== Order APIs ====================

    async def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create an order from a checkout payload"""
        data = await self._request("POST", "/orders", body=payload)
        return data.get("order", data)
