from slack_matrix_bridge.services.mrkdwn import mrkdwn_to_html
from slack_matrix_bridge.services.transpiler import EMPTY_PAYLOAD_TEXT, transform_slack_to_matrix


def test_empty_payload_uses_sentinel_and_omits_html() -> None:
    result = transform_slack_to_matrix({})
    assert result == {"text": EMPTY_PAYLOAD_TEXT}
    assert "html" not in result
    assert "username" not in result


def test_non_dict_payload_is_treated_as_empty() -> None:
    assert transform_slack_to_matrix(None) == {"text": "Received empty Slack payload"}
    assert transform_slack_to_matrix(["text"]) == {"text": "Received empty Slack payload"}


def test_text_only_payload() -> None:
    text = "Deploy *done* for <https://example.com|app>"
    result = transform_slack_to_matrix({"text": text})
    assert result["text"] == text
    assert result["html"] == mrkdwn_to_html(text)


def test_username_is_copied_through() -> None:
    result = transform_slack_to_matrix({"text": "hi", "username": "DeployBot"})
    assert result["username"] == "DeployBot"


def test_block_order_is_preserved() -> None:
    result = transform_slack_to_matrix(
        {
            "blocks": [
                {"type": "header", "text": {"type": "plain_text", "text": "Title"}},
                {"type": "divider"},
            ]
        }
    )
    assert "<h3>Title</h3><hr>" in result["html"]
    assert result["text"] == "## Title\n---"


def test_danger_attachment_starts_with_red_icon() -> None:
    result = transform_slack_to_matrix({"attachments": [{"color": "danger", "title": "Error occurred"}]})
    assert result["text"].startswith("🔴 Error occurred")


def test_blocks_take_priority_over_text() -> None:
    result = transform_slack_to_matrix(
        {
            "text": "fallback only",
            "blocks": [{"type": "section", "text": {"type": "mrkdwn", "text": "Block content"}}],
        }
    )
    assert result["text"] == "Block content"
    assert result["html"] == "<p>Block content</p>"


def test_blocks_and_attachments_are_additive() -> None:
    result = transform_slack_to_matrix(
        {
            "blocks": [{"type": "section", "text": {"type": "mrkdwn", "text": "From block"}}],
            "attachments": [{"color": "good", "title": "From attachment"}],
        }
    )
    assert result["html"] == "<p>From block</p><h4>🟢 From attachment</h4>"
    assert result["text"] == "From block\n🟢 From attachment"


def test_unknown_blocks_fall_back_to_text() -> None:
    result = transform_slack_to_matrix({"text": "Approve?", "blocks": [{"type": "actions", "elements": []}]})
    assert result == {"text": "Approve?", "html": "Approve?"}


def test_empty_lists_fall_back_to_text() -> None:
    result = transform_slack_to_matrix({"text": "hello", "blocks": [], "attachments": []})
    assert result == {"text": "hello", "html": "hello"}


def test_context_only_payload_keeps_wrapper_html() -> None:
    result = transform_slack_to_matrix({"blocks": [{"type": "context", "elements": []}]})
    assert result["text"] == EMPTY_PAYLOAD_TEXT
    assert result["html"] == "<br><small></small>"


def test_plain_and_html_are_trimmed() -> None:
    result = transform_slack_to_matrix(
        {"blocks": [{"type": "context", "elements": [{"type": "mrkdwn", "text": "meta"}]}]}
    )
    assert result["text"] == "meta"
    assert result["html"] == "<br><small>meta </small>"


def test_special_characters_are_escaped() -> None:
    result = transform_slack_to_matrix({"text": "Special chars: < > & \" ' and emojis: 🎉 🚀"})
    assert "&lt;" in result["html"]
    assert "&gt;" in result["html"]
    assert "&amp;" in result["html"]
    assert "🎉" in result["html"]


def test_transform_is_deterministic() -> None:
    payload = {
        "username": "ci",
        "blocks": [{"type": "section", "fields": [{"value": "*a*"}]}],
        "attachments": [{"color": "#ff0000", "title": "t", "fields": [{"title": "k", "value": "v"}]}],
    }
    assert transform_slack_to_matrix(payload) == transform_slack_to_matrix(payload)
