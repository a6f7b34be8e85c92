import re
from typing import Any, Callable

_HTML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

SAFE_LINK_SCHEMES = ("http:", "https:", "mailto:")

# Links are matched against already-escaped text, so the delimiters are the
# entities. The target must use a safe scheme and neither part may run past
# the next &lt; or &gt;.
_LINK_TARGET = r"(?![!@#])((?i:https?|mailto):(?:(?!&[lg]t;)[^|\s\x00])+)"
LABELED_LINK_RE = re.compile(r"&lt;" + _LINK_TARGET + r"\|((?:(?!&[lg]t;)[^\n\x00])+)&gt;")
BARE_LINK_RE = re.compile(r"&lt;" + _LINK_TARGET + r"&gt;")

# Emphasis markers only count next to whitespace, the string edges, or one of
# the entities produced by escape_html.
_ENTITY = r"&(?:lt|gt|amp|quot|#39);"
_OPEN_BOUNDARY = r"(?:^|(?<=\s)|(?<=&lt;)|(?<=&gt;)|(?<=&amp;)|(?<=&quot;)|(?<=&#39;))"
_CLOSE_BOUNDARY = r"(?=\Z|\s|" + _ENTITY + ")"
BOLD_RE = re.compile(_OPEN_BOUNDARY + r"\*([^*\x00]+)\*" + _CLOSE_BOUNDARY)
ITALIC_RE = re.compile(_OPEN_BOUNDARY + r"_([^_\x00]+)_" + _CLOSE_BOUNDARY)
STRIKE_RE = re.compile(r"~([^~\x00]+)~")
CODE_RE = re.compile(r"`([^`\x00]+)`")

# Escaped text holds no raw "<", so every tag here was generated by a pass.
_TAG_RE = re.compile(r"<[^>]*>")
_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")

RewritePass = Callable[[str], str]


def escape_html(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    escaped = raw
    for char, entity in _HTML_ENTITIES:
        escaped = escaped.replace(char, entity)
    return escaped


def is_safe_link(url: Any) -> bool:
    return isinstance(url, str) and url.strip().lower().startswith(SAFE_LINK_SCHEMES)


def _sub_outside_tags(pattern: re.Pattern[str], replacement: str, text: str) -> str:
    # Generated tags are swapped for placeholders so a pattern can neither
    # match inside an attribute nor span across a tag.
    tags: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        tags.append(match.group(0))
        return f"\x00{len(tags) - 1}\x00"

    masked = _TAG_RE.sub(_stash, text)
    rewritten = pattern.sub(replacement, masked)
    return _PLACEHOLDER_RE.sub(lambda match: tags[int(match.group(1))], rewritten)


def rewrite_links(text: str) -> str:
    text = LABELED_LINK_RE.sub(r'<a href="\1">\2</a>', text)
    return BARE_LINK_RE.sub(r'<a href="\1">\1</a>', text)


def rewrite_bold(text: str) -> str:
    return _sub_outside_tags(BOLD_RE, r"<b>\1</b>", text)


def rewrite_italic(text: str) -> str:
    return _sub_outside_tags(ITALIC_RE, r"<i>\1</i>", text)


def rewrite_strikethrough(text: str) -> str:
    return _sub_outside_tags(STRIKE_RE, r"<s>\1</s>", text)


def rewrite_code(text: str) -> str:
    return _sub_outside_tags(CODE_RE, r"<code>\1</code>", text)


def rewrite_newlines(text: str) -> str:
    return text.replace("\n", "<br>")


# Order matters: escaping must happen before any tag is inserted, and
# newlines are converted last.
REWRITE_PASSES: tuple[RewritePass, ...] = (
    escape_html,
    rewrite_links,
    rewrite_bold,
    rewrite_italic,
    rewrite_strikethrough,
    rewrite_code,
    rewrite_newlines,
)


def mrkdwn_to_html(markup: Any) -> str:
    """Convert a Slack mrkdwn string into the HTML subset Matrix renders."""
    if not markup or not isinstance(markup, str):
        return ""
    # NUL delimits tag placeholders and is not valid in HTML text anyway.
    html = markup.replace("\x00", "")
    for rewrite in REWRITE_PASSES:
        html = rewrite(html)
    return html
