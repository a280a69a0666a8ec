"""HTTP pointer output backend.

Sends pointer commands as HTTP requests to a pointer endpoint, which
owns the physical device.
"""

from __future__ import annotations

import logging

import httpx

from colorant.output.base import PointerOutput, PointerOutputError

logger = logging.getLogger(__name__)


class HttpPointerOutput(PointerOutput):
    """Sends pointer commands to an HTTP pointer endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:8090",
        timeout: float = 1.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def open(self) -> None:
        """Create the HTTP client and verify endpoint connectivity."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
        )
        try:
            resp = await self._client.get("/health")
            resp.raise_for_status()
            logger.info("Connected to pointer endpoint at %s", self._base_url)
        except httpx.HTTPError as e:
            await self._client.aclose()
            self._client = None
            raise PointerOutputError(
                f"Failed to connect to pointer endpoint: {e}", backend="http"
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from pointer endpoint")

    async def move(self, dx: float, dy: float) -> None:
        """Send a relative move via HTTP POST."""
        await self._post("/move", {"dx": dx, "dy": dy})
        logger.debug("Sent move: (%.2f, %.2f)", dx, dy)

    async def click(self) -> None:
        """Send a click via HTTP POST."""
        await self._post("/click", {})
        logger.debug("Sent click")

    async def flick(self, dx: float, dy: float) -> None:
        """Send a flick via HTTP POST."""
        await self._post("/flick", {"dx": dx, "dy": dy})
        logger.debug("Sent flick: (%.2f, %.2f)", dx, dy)

    async def _post(self, path: str, payload: dict) -> httpx.Response:
        """Send a POST request to the endpoint."""
        if self._client is None:
            raise PointerOutputError("Not connected to pointer endpoint", backend="http")
        try:
            resp = await self._client.post(path, json=payload)
            resp.raise_for_status()
            return resp
        except httpx.HTTPError as e:
            raise PointerOutputError(
                f"HTTP request to {path} failed: {e}", backend="http"
            ) from e
