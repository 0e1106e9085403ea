"""Reply formatting for chat display.

A best-effort cosmetic pass, not a markdown parser: substitutions run in a
fixed order and later patterns can match across tags inserted by earlier
ones. Nested structures, code blocks, links and tables are left as text.
"""

import re

_LINE_FLAGS = re.MULTILINE | re.IGNORECASE

# (pattern, replacement) applied in order
_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^### (.*)$", _LINE_FLAGS), r"<h3 class='font-bold mt-2 mb-1 text-base'>\1</h3>"),
    (re.compile(r"^## (.*)$", _LINE_FLAGS), r"<h2 class='font-bold mt-3 mb-1 text-lg'>\1</h2>"),
    (re.compile(r"^# (.*)$", _LINE_FLAGS), r"<h1 class='font-bold mt-3 mb-1 text-xl'>\1</h1>"),
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (re.compile(r"^- (.+)$", _LINE_FLAGS), r"<li class='ml-4 list-disc'>\1</li>"),
]


def escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_answer(raw: str) -> str:
    """Convert markdown-like reply text to HTML for chat display.

    Supports: ``#``/``##``/``###`` headings, ``**bold**``, ``*italic*``,
    ``- `` bullets, and line breaks.
    """
    # Escape HTML entities first; the result is rendered unsanitized
    text = escape_html(raw)
    # Line anchors and <br /> handling assume bare \n line endings
    text = re.sub(r"\r\n?", "\n", text)

    for pattern, replacement in _SUBSTITUTIONS:
        text = pattern.sub(replacement, text)

    return text.replace("\n", "<br />")
