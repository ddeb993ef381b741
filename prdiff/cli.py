from __future__ import annotations

import argparse
import json
import logging
import sys
import webbrowser
from pathlib import Path
from typing import Any

from rich.console import Console

from .comments import group_by_file
from .config import RenderConfig, load_render_config
from .console_render import render_comment_groups, render_files, render_patch, render_summary
from .diff_table import render_diff_table
from .pr_report import render_pr_report_html
from .pr_url import parse_pr_url


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise RuntimeError(f"File not found: {path}") from error
    except json.JSONDecodeError as error:
        raise RuntimeError(f"Invalid JSON: {error}") from error


def load_json_list(path: Path | None) -> list[Any]:
    if path is None:
        return []
    value = load_json(path)
    if not isinstance(value, list):
        raise RuntimeError(f"Expected a JSON array in {path}")
    return value


def read_config(path: str | None) -> RenderConfig:
    return load_render_config(Path(path)) if path else RenderConfig()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Optional TOML render config.")
    parser.add_argument("--verbose", action="store_true", help="Log highlighting fallbacks and diagnostics.")


def parse_render_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render one unified-diff patch as an HTML table.")
    parser.add_argument("--input", required=True, help="Patch file path.")
    parser.add_argument("--output", required=True, help="Output HTML path.")
    parser.add_argument("--language", help="Language hint for highlighting (default: auto-detect).")
    _add_common_args(parser)
    return parser.parse_args(argv)


def run_render(argv: list[str]) -> int:
    args = parse_render_args(argv)
    configure_logging(args.verbose)
    try:
        config = read_config(args.config)
        patch = Path(args.input).read_text(encoding="utf-8")
        html = render_diff_table(
            patch,
            language_hint=args.language or config.language_hint_for(args.input),
            block_highlight=config.block_highlight,
        )
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
    except (OSError, RuntimeError, TypeError) as error:
        print(f"[error] {error}", file=sys.stderr)
        return 1

    print(f"Wrote: {args.output}")
    return 0


def parse_export_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export pull request files and review comments as one HTML page.")
    parser.add_argument("--files", required=True, help="JSON array of GitHub pull request files.")
    parser.add_argument("--comments", help="JSON array of GitHub review comments.")
    parser.add_argument("--output", required=True, help="Output HTML path.")
    parser.add_argument("--url", help="Pull request URL, used for the page title.")
    parser.add_argument("--title", help="Optional custom report title.")
    parser.add_argument("--open", action="store_true", help="Open the generated HTML in your default browser.")
    _add_common_args(parser)
    return parser.parse_args(argv)


def report_title(url: str | None, title: str | None) -> str:
    if title:
        return title
    ref = parse_pr_url(url) if url else None
    return f"Pull Request {ref.label}" if ref else "Pull Request Diff"


def run_export(argv: list[str]) -> int:
    args = parse_export_args(argv)
    configure_logging(args.verbose)
    output = Path(args.output)
    try:
        config = read_config(args.config)
        files = load_json_list(Path(args.files))
        comments = load_json_list(Path(args.comments) if args.comments else None)
        html = render_pr_report_html(files, comments, title=report_title(args.url, args.title), config=config)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
    except (OSError, RuntimeError, TypeError) as error:
        print(f"[error] {error}", file=sys.stderr)
        return 1

    print(f"Wrote: {output}")
    if args.open:
        webbrowser.open(output.resolve().as_uri())
    return 0


def parse_view_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show pull request review comments grouped by file.")
    parser.add_argument("comments", help="JSON array of GitHub review comments.")
    parser.add_argument("--files", help="Optional JSON array of GitHub pull request files.")
    parser.add_argument("--file", dest="file_path", help="Also print the classified patch of this file.")
    parser.add_argument("--max-lines", type=int, default=120, help="Max lines in patch view.")
    parser.add_argument("--url", help="Pull request URL, used for the title.")
    parser.add_argument("--verbose", action="store_true", help="Log dropped comments and diagnostics.")
    return parser.parse_args(argv)


def run_view(argv: list[str], console: Console | None = None) -> int:
    args = parse_view_args(argv)
    configure_logging(args.verbose)
    console = console or Console()
    try:
        comments = load_json_list(Path(args.comments))
        files = load_json_list(Path(args.files) if args.files else None)
        groups = group_by_file(comments)
    except (OSError, RuntimeError, TypeError) as error:
        print(f"[error] {error}", file=sys.stderr)
        return 1

    files = [entry for entry in files if isinstance(entry, dict)]
    render_summary(console, report_title(args.url, None), files, sum(len(values) for values in groups.values()))
    if files:
        render_files(console, files)
    render_comment_groups(console, groups)

    if args.file_path:
        matched = [entry for entry in files if entry.get("filename") == args.file_path]
        if not matched:
            print(f"[error] File not found in files: {args.file_path}", file=sys.stderr)
            return 1
        patch = matched[0].get("patch")
        render_patch(console, patch if isinstance(patch, str) else "", args.max_lines)
    return 0
