from typing import Any

from slack_matrix_bridge.services.blocks import TranspileResult, parse_attachment, parse_block
from slack_matrix_bridge.services.mrkdwn import mrkdwn_to_html

EMPTY_PAYLOAD_TEXT = "Received empty Slack payload"


def transform_slack_to_matrix(payload: Any) -> dict[str, str]:
    """Translate a Slack webhook payload into a Matrix Hookshot payload.

    Blocks are rendered first, then legacy attachments; both contribute when
    both are present. The top-level ``text`` is only used when neither
    produced any output. The returned dict always has ``text``; ``html`` and
    ``username`` are omitted when there is nothing to send.
    """
    payload = payload if isinstance(payload, dict) else {}
    result = TranspileResult()

    blocks = payload.get("blocks")
    if isinstance(blocks, list) and blocks:
        for block in blocks:
            result.extend(parse_block(block))

    attachments = payload.get("attachments")
    if isinstance(attachments, list) and attachments:
        for attachment in attachments:
            result.extend(parse_attachment(attachment))

    fallback_text = payload.get("text")
    if not result.html and not result.plain and isinstance(fallback_text, str) and fallback_text:
        result = TranspileResult(html=mrkdwn_to_html(fallback_text), plain=fallback_text)

    matrix_payload = {"text": result.plain.strip() or EMPTY_PAYLOAD_TEXT}
    html = result.html.strip()
    if html:
        matrix_payload["html"] = html

    username = payload.get("username")
    if isinstance(username, str) and username:
        matrix_payload["username"] = username
    return matrix_payload
