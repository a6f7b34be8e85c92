import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from slack_matrix_bridge.services.matrix_client import RelayError, destination_host
from slack_matrix_bridge.services.transpiler import transform_slack_to_matrix
from slack_matrix_bridge.services.url_codec import MIN_ENCODED_LENGTH, decode_matrix_url, has_allowed_scheme

if TYPE_CHECKING:
    from slack_matrix_bridge.services.matrix_client import MatrixClient

logger = logging.getLogger(__name__)

MISSING_DESTINATION = "Error: Missing destination URL. Usage: /<Base64-Hookshot-URL>"
INVALID_DESTINATION = "Error: Invalid Base64 encoded destination URL."
INVALID_PROTOCOL = "Error: Invalid protocol. Only http/https URLs are supported."
INVALID_PAYLOAD = "invalid_payload: JSON required"


@dataclass
class BridgeResponse:
    status_code: int
    body: str


def parse_payload(raw_payload: bytes) -> Any:
    return json.loads(raw_payload.decode("utf-8"))


def resolve_destination(encoded_path: str) -> tuple[str | None, BridgeResponse | None]:
    if not encoded_path or len(encoded_path) < MIN_ENCODED_LENGTH:
        return None, BridgeResponse(400, MISSING_DESTINATION)
    try:
        destination = decode_matrix_url(encoded_path)
    except ValueError:
        return None, BridgeResponse(400, INVALID_DESTINATION)
    if not has_allowed_scheme(destination):
        return None, BridgeResponse(400, INVALID_PROTOCOL)
    return destination, None


async def handle_slack_webhook(
    encoded_path: str,
    raw_payload: bytes,
    matrix_client: "MatrixClient",
) -> BridgeResponse:
    destination, rejection = resolve_destination(encoded_path)
    if rejection is not None:
        logger.warning(
            "Rejected Slack webhook destination",
            extra={"event": "slack_webhook_bad_destination", "reason": rejection.body},
        )
        return rejection

    try:
        slack_payload = parse_payload(raw_payload)
    except (UnicodeDecodeError, ValueError):
        logger.warning("Invalid Slack webhook payload", extra={"event": "slack_webhook_invalid_json"})
        return BridgeResponse(400, INVALID_PAYLOAD)

    matrix_payload = transform_slack_to_matrix(slack_payload)
    host = destination_host(destination)

    try:
        relayed = await matrix_client.post_payload(destination, matrix_payload)
    except RelayError as exc:
        return BridgeResponse(502, f"Bridge Error: Failed to connect to Matrix destination. {exc}")

    if relayed.ok:
        logger.info(
            "Slack webhook relayed",
            extra={"event": "slack_webhook_relayed", "destination_host": host, "has_html": "html" in matrix_payload},
        )
        return BridgeResponse(200, "ok")

    logger.warning(
        "Matrix destination rejected payload",
        extra={"event": "slack_webhook_upstream_error", "destination_host": host, "status_code": relayed.status_code},
    )
    return BridgeResponse(relayed.status_code, f"Upstream Matrix Error: {relayed.status_code} {relayed.body}")
