from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .comments import ReviewComment
from .formatting import pluralize
from .patch_lines import KIND_ADD, KIND_REMOVE, classify_patch_lines


def kind_style(kind: str) -> str:
    if kind == KIND_ADD:
        return "green"
    if kind == KIND_REMOVE:
        return "red"
    return "white"


def render_summary(console: Console, title: str, files: Sequence[Mapping[str, Any]], comment_total: int) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Title", title)
    table.add_row("Files", pluralize(len(files), "file"))
    table.add_row("Comments", pluralize(comment_total, "comment"))
    console.print(Panel(table, title="Pull Request", border_style="blue"))


def render_files(console: Console, files: Sequence[Mapping[str, Any]]) -> None:
    table = Table(title=f"Files ({len(files)})", header_style="bold magenta")
    table.add_column("status", no_wrap=True)
    table.add_column("file", overflow="ellipsis")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    table.add_column("rows", justify="right")
    for entry in files:
        patch = entry.get("patch")
        rows = len(classify_patch_lines(patch)) if isinstance(patch, str) and patch.strip() else 0
        table.add_row(
            str(entry.get("status", "-")),
            str(entry.get("filename", "-")),
            str(entry.get("additions", 0)),
            str(entry.get("deletions", 0)),
            str(rows),
        )
    console.print(table)


def render_comment_groups(console: Console, groups: Mapping[str, Sequence[ReviewComment]]) -> None:
    for path in sorted(groups):
        comments = groups[path]
        table = Table(title=f"{path} ({pluralize(len(comments), 'comment')})", header_style="bold magenta")
        table.add_column("line", justify="right", no_wrap=True)
        table.add_column("id", style="cyan", no_wrap=True)
        table.add_column("author", no_wrap=True)
        table.add_column("body", overflow="fold")
        for comment in comments:
            table.add_row(
                str(comment.sort_line or "-"),
                str(comment.id),
                comment.author or "-",
                Text(comment.body.strip()),
            )
        console.print(table)


def render_patch(console: Console, patch: str, max_lines: int) -> None:
    lines_table = Table(title=f"Lines (max {max_lines})", header_style="bold magenta")
    lines_table.add_column("old", justify="right")
    lines_table.add_column("new", justify="right")
    lines_table.add_column("content")
    for line in classify_patch_lines(patch).lines[:max_lines]:
        prefix = {KIND_ADD: "+", KIND_REMOVE: "-"}.get(line.kind, " ")
        lines_table.add_row(
            "" if line.old_line is None else str(line.old_line),
            "" if line.new_line is None else str(line.new_line),
            Text(prefix + line.code, style=kind_style(line.kind)),
        )
    console.print(lines_table)
