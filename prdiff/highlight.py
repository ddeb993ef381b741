from __future__ import annotations

import logging
from html import escape
from typing import Callable

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from .line_splitter import split_highlighted_html

log = logging.getLogger(__name__)

Highlighter = Callable[..., str]

# stripnl/ensurenl would add or drop newlines and break the line alignment.
_LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}
_FORMATTER = HtmlFormatter(nowrap=True)


def _lexer_for(text: str, language_hint: str | None):
    if language_hint:
        try:
            return get_lexer_by_name(language_hint, **_LEXER_OPTIONS)
        except ClassNotFound:
            log.debug("unknown language hint %r, guessing instead", language_hint)
    try:
        return guess_lexer(text, **_LEXER_OPTIONS)
    except ClassNotFound:
        return TextLexer(**_LEXER_OPTIONS)


def highlight_code(text: str, language_hint: str | None = None) -> str:
    """Highlight ``text`` with pygments and return bare ``<span>``-wrapped HTML."""
    if not text:
        return ""
    return pygments_highlight(text, _lexer_for(text, language_hint), _FORMATTER)


def language_for_path(path: str | None) -> str | None:
    if not path:
        return None
    try:
        lexer = get_lexer_for_filename(path)
    except ClassNotFound:
        return None
    return lexer.aliases[0] if lexer.aliases else None


def _highlight_single_line(code: str, highlighter: Highlighter, language_hint: str | None) -> str:
    try:
        fragments = split_highlighted_html(highlighter(code, language_hint))
    except Exception as error:  # noqa: BLE001
        log.warning("syntax highlighting failed for line, using plain text: %s", error)
        return escape(code)
    return "".join(fragments)


def highlight_lines(
    code_lines: list[str],
    highlighter: Highlighter | None = None,
    language_hint: str | None = None,
    *,
    block: bool = True,
) -> list[str]:
    """Return exactly one highlighted fragment per entry of ``code_lines``.

    The whole block is highlighted at once so multi-line tokens keep their colours.
    When the block output does not split back into the same number of lines, every
    line is highlighted on its own instead. A highlighter that raises on the block
    yields escaped plain text.
    """
    if not code_lines:
        return []
    highlighter = highlighter or highlight_code

    if not block:
        return [_highlight_single_line(code, highlighter, language_hint) for code in code_lines]

    try:
        fragments = split_highlighted_html(highlighter("\n".join(code_lines), language_hint))
    except Exception as error:  # noqa: BLE001
        log.warning("syntax highlighting failed, using plain text: %s", error)
        return [escape(code) for code in code_lines]

    if len(fragments) == len(code_lines):
        return fragments

    log.debug(
        "highlighted block has %d lines, expected %d; highlighting line by line",
        len(fragments),
        len(code_lines),
    )
    return [_highlight_single_line(code, highlighter, language_hint) for code in code_lines]
