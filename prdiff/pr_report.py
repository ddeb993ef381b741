from __future__ import annotations

from collections.abc import Mapping, Sequence
from html import escape
from typing import Any

from pygments.formatters import HtmlFormatter

from .comments import ReviewComment, group_by_file, optional_int
from .config import RenderConfig
from .diff_table import render_diff_table
from .formatting import pluralize
from .highlight import Highlighter
from .markdown_render import render_markdown

BASE_CSS = """
    body { font-family: -apple-system, "Segoe UI", sans-serif; margin: 24px; color: #1f2328; }
    h1 { font-size: 20px; }
    .file { border: 1px solid #d0d7de; border-radius: 6px; margin-bottom: 16px; }
    .file-header { background: #f6f8fa; padding: 8px 12px; font-family: monospace; }
    .file-stats { color: #59636e; margin-left: 8px; }
    .diff-table { border-collapse: collapse; width: 100%; font-family: monospace; font-size: 12px; }
    .diff-line-num { color: #59636e; text-align: right; padding: 0 8px; width: 1%; user-select: none; }
    .diff-line { white-space: pre; padding: 0 8px; }
    .diff-add-row { background: #e6ffec; }
    .diff-remove-row { background: #ffebe9; }
    .no-diff { color: #59636e; padding: 8px 12px; }
    .comment { border-top: 1px solid #d0d7de; padding: 8px 12px; }
    .comment-meta { color: #59636e; font-size: 12px; }
"""


def _file_stats(entry: Mapping[str, Any]) -> str:
    return "{status} +{adds} -{deletes}".format(
        status=escape(str(entry.get("status", "modified"))),
        adds=optional_int(entry.get("additions")) or 0,
        deletes=optional_int(entry.get("deletions")) or 0,
    )


def render_file_section(
    entry: Mapping[str, Any],
    config: RenderConfig,
    highlighter: Highlighter | None = None,
) -> str:
    filename = str(entry.get("filename") or "(unknown)")
    patch = entry.get("patch")
    table = render_diff_table(
        patch if isinstance(patch, str) else "",
        highlighter,
        config.language_hint_for(filename),
        block_highlight=config.block_highlight,
    )
    return (
        "<section class='file' data-file='{file_key}'>"
        "<div class='file-header'>{filename}<span class='file-stats'>{stats}</span></div>"
        "{table}"
        "</section>".format(
            file_key=escape(filename.lower()),
            filename=escape(filename),
            stats=_file_stats(entry),
            table=table,
        )
    )


def render_comment(comment: ReviewComment) -> str:
    line = comment.sort_line
    return (
        "<div class='comment' data-comment-id='{comment_id}'>"
        "<div class='comment-meta'>{author}{line}</div>"
        "{body}"
        "</div>".format(
            comment_id=escape(str(comment.id)),
            author=escape(comment.author or "unknown"),
            line=f" on line {line}" if line else "",
            body=render_markdown(comment.body),
        )
    )


def render_comment_groups(groups: Mapping[str, Sequence[ReviewComment]]) -> str:
    sections: list[str] = []
    for path in sorted(groups):
        comments = groups[path]
        sections.append(
            "<section class='file comments' data-file='{file_key}'>"
            "<div class='file-header'>{path}<span class='file-stats'>{count}</span></div>"
            "{comments}"
            "</section>".format(
                file_key=escape(path.lower()),
                path=escape(path),
                count=escape(pluralize(len(comments), "comment")),
                comments="".join(render_comment(comment) for comment in comments),
            )
        )
    return "".join(sections)


def render_pr_report_html(
    files: Sequence[Mapping[str, Any]],
    comments: Sequence[Any] = (),
    *,
    title: str = "Pull Request Diff",
    config: RenderConfig | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Build a standalone HTML page with every file diff and the grouped review comments."""
    if isinstance(files, (str, bytes)) or not isinstance(files, Sequence):
        raise TypeError(f"render_pr_report_html expects a sequence of files, not {type(files).__name__}")
    config = config or RenderConfig()

    file_sections = [
        render_file_section(entry, config, highlighter) for entry in files if isinstance(entry, Mapping)
    ]
    groups = group_by_file(comments)
    comment_total = sum(len(values) for values in groups.values())
    pygments_css = HtmlFormatter(style=config.style).get_style_defs([".diff-line", ".highlight"])

    return """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{page_title}</title>
  <style>{base_css}
{pygments_css}
  </style>
</head>
<body>
  <h1>{page_title}</h1>
  <p class="summary">{file_count} / {comment_count}</p>
  <h2>Files</h2>
  {file_sections}
  <h2>Comments</h2>
  {comment_sections}
</body>
</html>
""".format(
        page_title=escape(title),
        base_css=BASE_CSS,
        pygments_css=pygments_css,
        file_count=escape(pluralize(len(file_sections), "file")),
        comment_count=escape(pluralize(comment_total, "comment")),
        file_sections="\n  ".join(file_sections),
        comment_sections=render_comment_groups(groups) or "<p class='no-diff'>No comments</p>",
    )
