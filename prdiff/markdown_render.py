from __future__ import annotations

import logging
from html import escape

import markdown

log = logging.getLogger(__name__)

# GitHub-like settings: fenced code, hard line breaks, heading ids.
MARKDOWN_EXTENSIONS = ["fenced_code", "codehilite", "nl2br", "toc", "tables", "sane_lists"]
MARKDOWN_EXTENSION_CONFIGS = {
    "codehilite": {"guess_lang": False, "css_class": "highlight"},
}


def render_markdown(text: str) -> str:
    """Render a comment body to HTML.

    Errors from the markdown library are logged and turned into a short error
    paragraph so one bad comment does not break the page.
    """
    if not isinstance(text, str):
        raise TypeError(f"render_markdown expects a string, not {type(text).__name__}")

    try:
        return markdown.markdown(
            text,
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        )
    except Exception as error:  # noqa: BLE001
        log.warning("Failed to render markdown: %s", error)
        return f"<p>Error rendering markdown: {escape(str(error))}</p>"
