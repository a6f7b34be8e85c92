import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RelayResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RelayError(Exception):
    pass


def destination_host(url: str) -> str:
    # The full destination URL is a capability secret; only the host is logged.
    return urlsplit(url).hostname or "unknown"


class MatrixClient:
    def __init__(
        self,
        *,
        user_agent: str = "Slack-Matrix-Bridge/1.0",
        timeout_seconds: float = 20.0,
        default_username: str = "SlackBridge",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout_seconds = max(0.1, timeout_seconds)
        self.default_username = default_username
        self._transport = transport

    async def post_payload(self, url: str, payload: dict[str, Any]) -> RelayResult:
        body = dict(payload)
        if not body.get("username") and self.default_username:
            body["username"] = self.default_username

        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        host = destination_host(url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            logger.warning(
                "Failed to reach Matrix destination",
                extra={"event": "matrix_relay_failed", "destination_host": host, "error": repr(exc)},
            )
            raise RelayError(str(exc) or exc.__class__.__name__) from exc

        logger.info(
            "Relayed payload to Matrix destination",
            extra={
                "event": "matrix_relay_completed",
                "destination_host": host,
                "status_code": response.status_code,
            },
        )
        return RelayResult(status_code=response.status_code, body=response.text)
