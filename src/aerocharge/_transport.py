"""JSON-over-HTTP transport to ground control."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from aerocharge.config import ChargeConfig
from aerocharge.exceptions import GroundControlTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the gateway.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def post_json(self, endpoint: str, payload: Mapping[str, Any] | None = None) -> Any:
        ...


class JsonTransport:
    """POSTs JSON bodies to ground control and decodes JSON replies."""

    def __init__(self, config: ChargeConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def post_json(self, endpoint: str, payload: Mapping[str, Any] | None = None) -> Any:
        """Send *payload* (or an empty body) and return the decoded reply.

        An empty 2xx reply decodes to ``None``.

        Raises
        ------
        GroundControlTransportError
            On network failure, a non-2xx status, or a body that is not JSON.
        """
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        body = json.dumps(dict(payload), separators=(",", ":")) if payload is not None else None
        headers = {"accept": "application/json"}
        if body is not None:
            headers["content-type"] = "application/json; charset=UTF-8"

        _logger.debug("POST %s %s", url, body or "")

        try:
            async with self._http.post(url, data=body, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                status = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise GroundControlTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("Response %d from %s: %s", status, endpoint, text[:200])

        if not 200 <= status < 300:
            raise GroundControlTransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise GroundControlTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
