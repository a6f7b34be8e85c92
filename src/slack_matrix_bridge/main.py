import logging

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from slack_matrix_bridge.config import get_settings
from slack_matrix_bridge.landing_page import LANDING_PAGE
from slack_matrix_bridge.services.logging_config import configure_logging
from slack_matrix_bridge.services.matrix_client import MatrixClient
from slack_matrix_bridge.webhooks.slack_handler import handle_slack_webhook

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

matrix_client = MatrixClient(
    user_agent=settings.relay_user_agent,
    timeout_seconds=settings.relay_timeout_seconds,
    default_username=settings.default_username,
)

app = FastAPI(title="Slack-Matrix Bridge", version="1.0.0")

PLAIN_TEXT = "text/plain; charset=utf-8"
NON_POST_METHODS = ["GET", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]


@app.get("/", response_class=HTMLResponse)
def landing_page() -> HTMLResponse:
    return HTMLResponse(LANDING_PAGE)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}


@app.post("/{encoded_path:path}")
async def slack_webhook(encoded_path: str, request: Request) -> PlainTextResponse:
    raw_payload = await request.body()
    logger.info("Received Slack webhook", extra={"event": "slack_webhook_received", "bytes": len(raw_payload)})
    try:
        result = await handle_slack_webhook(encoded_path, raw_payload, matrix_client)
    except Exception as exc:
        logger.exception("Unhandled exception while relaying Slack webhook", extra={"event": "slack_webhook_error"})
        raise HTTPException(status_code=500, detail="slack webhook processing error") from exc
    return PlainTextResponse(result.body, status_code=result.status_code, media_type=PLAIN_TEXT)


@app.api_route("/{encoded_path:path}", methods=NON_POST_METHODS)
def method_not_allowed(encoded_path: str) -> PlainTextResponse:
    return PlainTextResponse(
        "Method not allowed. Please POST to this endpoint.",
        status_code=405,
        headers={"Allow": "POST"},
        media_type=PLAIN_TEXT,
    )


def run() -> None:
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_config=None)
