from __future__ import annotations

import re

# Pygments' HtmlFormatter only ever emits <span ...> wrappers around tokens.
WRAPPER_TAG_RE = re.compile(r"<(/?)span(?:\s[^>]*)?>")


def split_highlighted_html(html: str) -> list[str]:
    """Split highlighted HTML into one self-contained fragment per source line.

    Spans still open at a newline are closed at the end of the fragment and reopened,
    in their original order, at the start of the next one. A closing tag with nothing
    open is copied through unchanged.
    """
    fragments: list[str] = []
    tag_stack: list[str] = []
    current: list[str] = []
    index = 0
    length = len(html)

    while index < length:
        char = html[index]
        if char == "\n":
            current.append("</span>" * len(tag_stack))
            fragments.append("".join(current))
            current = list(tag_stack)
            index += 1
            continue

        if char == "<":
            match = WRAPPER_TAG_RE.match(html, index)
            if match:
                tag = match.group(0)
                current.append(tag)
                if match.group(1):
                    if tag_stack:
                        tag_stack.pop()
                else:
                    tag_stack.append(tag)
                index = match.end()
                continue

        current.append(char)
        index += 1

    if current or tag_stack:
        current.append("</span>" * len(tag_stack))
        fragments.append("".join(current))
    return fragments


def count_wrapper_tags(fragment: str) -> tuple[int, int]:
    opened = 0
    closed = 0
    for match in WRAPPER_TAG_RE.finditer(fragment):
        if match.group(1):
            closed += 1
        else:
            opened += 1
    return opened, closed
