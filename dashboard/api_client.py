"""
Dashboard API Client.

HTTP client for communicating with the FastAPI backend.
Provides methods for all API endpoints with proper error handling.
"""

from typing import Any, Dict, List, Optional

import httpx

from config import Config


class APIClientError(Exception):
    """Exception raised for API client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class APIClient:
    """
    HTTP client for the Tickerboard API.

    Example:
        >>> with APIClient() as client:
        ...     history = client.get_history("AAPL")
        ...     print(f"Bars: {history['count']}")
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API server. Defaults to Config.API_BASE_URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method.
            endpoint: API endpoint path.
            params: Query parameters.

        Returns:
            The successful response.

        Raises:
            APIClientError: If request fails.
        """
        try:
            response = self.client.request(method=method, url=endpoint, params=params)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            try:
                error_detail = e.response.json().get("detail", str(e))
            except ValueError:
                error_detail = str(e)
            raise APIClientError(str(error_detail), e.response.status_code)
        except httpx.RequestError as e:
            raise APIClientError(f"Request failed: {str(e)}")

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request and decode JSON."""
        return self._request("GET", endpoint, params=params).json()

    # Health endpoints
    def health_check(self) -> Dict[str, str]:
        return self._get("/api/health")

    def is_healthy(self) -> bool:
        """
        Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            result = self.health_check()
            return result.get("status") == "healthy"
        except APIClientError:
            return False

    # Price endpoints
    def get_symbols(self) -> List[str]:
        result = self._get("/api/prices/symbols")
        return result.get("symbols", [])

    def get_quote(self, symbol: str) -> Dict[str, Any]:
        """
        Get the latest quote for a symbol.

        Args:
            symbol: Stock symbol.

        Returns:
            Quote data dictionary.
        """
        return self._get(f"/api/prices/{symbol}")

    def get_history(
        self,
        symbol: str,
        period: str = Config.DEFAULT_PERIOD,
        interval: str = Config.DEFAULT_INTERVAL,
    ) -> Dict[str, Any]:
        """
        Get price history for a symbol.

        Returns:
            Dictionary with symbol, candles and count.
        """
        return self._get(
            f"/api/prices/{symbol}/history",
            params={"period": period, "interval": interval},
        )

    # FX endpoints
    def get_exchange_rate(self, base: str, target: str) -> Optional[float]:
        """
        Get an exchange rate.

        Returns:
            The rate, or None if the backend could not fetch one.
        """
        result = self._get(f"/api/fx/{base}/{target}")
        return result.get("rate")

    # News endpoints
    def get_news(self, query: str, page_size: int = Config.NEWS_PAGE_SIZE) -> List[Dict[str, Any]]:
        result = self._get("/api/news", params={"q": query, "page_size": page_size})
        return result.get("articles", [])

    # Chart endpoints
    def get_chart(self, symbol: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/api/chart/{symbol}", params=params or None)

    def export_csv(self, symbol: str, **params: Any) -> Optional[str]:
        """
        Download chart rows as CSV text.

        Returns:
            CSV text, or None if the backend has nothing to export.
        """
        try:
            response = self._request("GET", f"/api/chart/{symbol}/export", params=params or None)
        except APIClientError as e:
            if e.status_code == 404:
                return None
            raise
        return response.text
