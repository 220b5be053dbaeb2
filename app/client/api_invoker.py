"""
Callback-style HTTP helper for the counter API.

Each call reports through exactly one of ``on_success(data)`` or
``on_error(data)``. Nothing is retried.
"""
import logging
from typing import Any, Callable, Dict, Optional
import httpx

from app.core import config

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]

DEFAULT_HEADERS = {"Content-Type": "application/json"}
DEFAULT_TIMEOUT = 10.0


def build_url(base_url: str, endpoint: str) -> str:
    """Join base URL and endpoint without doubling the slash between them."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


def _noop(_data: Any) -> None:
    pass


class ApiInvoker:
    def __init__(
        self,
        base_url: str = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url or config.COUNTER_API_URL
        self._client = httpx.Client(transport=transport, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def get(
        self,
        endpoint: str,
        on_success: Callback = _noop,
        on_error: Callback = _noop,
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[Any]:
        return self._request("GET", endpoint, None, on_success, on_error, headers)

    def post(
        self,
        endpoint: str,
        body: Optional[dict] = None,
        on_success: Callback = _noop,
        on_error: Callback = _noop,
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[Any]:
        return self._request("POST", endpoint, body if body is not None else {}, on_success, on_error, headers)

    def _request(self, method, endpoint, body, on_success, on_error, headers) -> Optional[Any]:
        """
        Perform the request and dispatch to a callback.

        Returns:
            The decoded JSON body on success, None otherwise
        """
        url = build_url(self.base_url, endpoint)
        try:
            response = self._client.request(
                method,
                url,
                json=body,
                headers={**DEFAULT_HEADERS, **(headers or {})},
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            on_error({"error": "Network error", "details": str(e)})
            return None

        try:
            data = response.json()
        except ValueError:
            data = {"error": response.text}

        if response.is_success:
            on_success(data)
            return data

        logger.warning(f"{method} {url} -> {response.status_code}")
        on_error(data)
        return None
