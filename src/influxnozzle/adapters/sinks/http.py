"""HTTP sink adapter backed by httpx.

Posts line protocol batches to an InfluxDB-style write endpoint, using
HTTP basic auth when credentials are configured.
"""

import httpx

from influxnozzle.core.exceptions import TransportError

DEFAULT_TIMEOUT = 10.0


class HttpxMetricsSink:
    """httpx implementation of MetricsSinkPort.

    Args:
        user: Basic auth user name. Auth is skipped when empty.
        password: Basic auth password.
        timeout: Request timeout in seconds.
        client: Optional pre-built AsyncClient (e.g., with a mock
            transport). The sink does not close a client it did not create.
    """

    def __init__(
        self,
        user: str = "",
        password: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._auth = httpx.BasicAuth(user, password) if user else None
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def post(self, url: str, body: bytes) -> None:
        """POST a batch to the write URL.

        Raises:
            TransportError: On network errors or a non-2xx response.
        """
        client = self._get_client()
        try:
            response = await client.post(
                url,
                content=body,
                headers={"Content-Type": "text/plain; charset=utf-8"},
                auth=self._auth if self._auth is not None else httpx.USE_CLIENT_DEFAULT,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"InfluxDB request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(
                "InfluxDB request returned HTTP response: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

    async def aclose(self) -> None:
        """Close the underlying client if this sink created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
