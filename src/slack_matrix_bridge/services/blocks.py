from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from slack_matrix_bridge.services.mrkdwn import escape_html, is_safe_link, mrkdwn_to_html

RED_ICON = "🔴 "
GREEN_ICON = "🟢 "
WARNING_ICON = "⚠️ "
INFO_ICON = "🔵 "

_DANGER_PREFIXES = ("#d00000", "#ff")
_GOOD_PREFIXES = ("#36a64f", "#0f0")
# "#ff" also appears here but is claimed by the danger check first.
_WARNING_PREFIXES = ("#ff", "#fc0")


@dataclass
class TranspileResult:
    html: str = ""
    plain: str = ""

    def extend(self, other: TranspileResult) -> None:
        self.html += other.html
        self.plain += other.plain


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _text_of(text_object: Any) -> str:
    return _as_text(_as_dict(text_object).get("text"))


def _parse_section(block: dict[str, Any]) -> TranspileResult:
    result = TranspileResult()

    text = _text_of(block.get("text"))
    if text:
        result.html += f"<p>{mrkdwn_to_html(text)}</p>"
        result.plain += text + "\n"

    fields = block.get("fields")
    if isinstance(fields, list):
        result.html += "<ul>"
        for field in fields:
            value = _as_text(_as_dict(field).get("value"))
            result.html += f"<li><b>{mrkdwn_to_html(value)}</b></li>"
            result.plain += f"- {value}\n"
        result.html += "</ul>"

    return result


def _parse_header(block: dict[str, Any]) -> TranspileResult:
    text = _text_of(block.get("text"))
    if not text:
        return TranspileResult()
    return TranspileResult(html=f"<h3>{escape_html(text)}</h3>", plain=f"## {text}\n")


def _parse_context(block: dict[str, Any]) -> TranspileResult:
    result = TranspileResult(html="<br><small>")
    for element in _as_list(block.get("elements")):
        text = _text_of(element)
        if text:
            result.html += mrkdwn_to_html(text) + " "
            result.plain += text + " "
    result.html += "</small>"
    return result


def _parse_image(block: dict[str, Any]) -> TranspileResult:
    image_url = _as_text(block.get("image_url"))
    if not is_safe_link(image_url):
        return TranspileResult()
    alt_text = _as_text(block.get("alt_text")) or "Image"
    return TranspileResult(
        html=f'<img src="{escape_html(image_url)}" alt="{escape_html(alt_text)}" /><br>',
        plain=f"[Image: {alt_text}]\n",
    )


def parse_block(block: Any) -> TranspileResult:
    block = _as_dict(block)
    block_type = block.get("type")

    if block_type == "section":
        return _parse_section(block)
    if block_type == "header":
        return _parse_header(block)
    if block_type == "context":
        return _parse_context(block)
    if block_type == "divider":
        return TranspileResult(html="<hr>", plain="---")
    if block_type == "image":
        return _parse_image(block)

    # Unknown and interactive block types (actions, input, ...) render nothing.
    return TranspileResult()


def map_color_to_icon(color: Any) -> str:
    if not color or not isinstance(color, str):
        return ""

    lower_color = color.lower()
    if lower_color == "danger" or lower_color.startswith(_DANGER_PREFIXES):
        return RED_ICON
    if lower_color == "good" or lower_color.startswith(_GOOD_PREFIXES):
        return GREEN_ICON
    if lower_color == "warning" or lower_color.startswith(_WARNING_PREFIXES):
        return WARNING_ICON
    return INFO_ICON


def parse_attachment(attachment: Any) -> TranspileResult:
    attachment = _as_dict(attachment)
    result = TranspileResult()
    icon = map_color_to_icon(attachment.get("color"))

    pretext = _as_text(attachment.get("pretext"))
    if pretext:
        result.html += f"<p>{mrkdwn_to_html(pretext)}</p>"
        result.plain += pretext + "\n"

    title = _as_text(attachment.get("title"))
    if title:
        title_link = _as_text(attachment.get("title_link"))
        if is_safe_link(title_link):
            title_html = f'<a href="{escape_html(title_link)}">{escape_html(title)}</a>'
        else:
            title_html = escape_html(title)
        result.html += f"<h4>{icon}{title_html}</h4>"
        result.plain += f"{icon}{title}\n"

    text = _as_text(attachment.get("text"))
    if text:
        result.html += f"<p>{mrkdwn_to_html(text)}</p>"
        result.plain += text + "\n"

    fields = attachment.get("fields")
    if isinstance(fields, list):
        result.html += "<ul>"
        for field in fields:
            field = _as_dict(field)
            field_title = _as_text(field.get("title"))
            value = _as_text(field.get("value"))
            label = f"<b>{escape_html(field_title)}:</b> " if field_title else ""
            result.html += f"<li>{label}{mrkdwn_to_html(value)}</li>"
            result.plain += f"{field_title}: {value}\n"
        result.html += "</ul>"

    return result
