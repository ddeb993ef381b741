from __future__ import annotations

from .highlight import Highlighter, highlight_lines
from .patch_lines import KIND_ADD, KIND_REMOVE, ClassifiedPatch, LineRecord, classify_patch_lines

NO_DIFF_HTML = '<p class="no-diff">No diff available</p>'

ROW_CLASSES = {
    KIND_ADD: "diff-add-row",
    KIND_REMOVE: "diff-remove-row",
}
CODE_CLASSES = {
    KIND_ADD: "diff-line diff-add",
    KIND_REMOVE: "diff-line diff-remove",
}
MARKERS = {
    KIND_ADD: '<span class="add">+</span>',
    KIND_REMOVE: '<span class="rem">-</span>',
}
CONTEXT_ROW_CLASS = "diff-context-row"
CONTEXT_CODE_CLASS = "diff-line diff-context"
CONTEXT_MARKER = "<span> </span>"


def _number_cell(value: int | None) -> str:
    return "" if value is None else str(value)


def render_row(line: LineRecord, fragment: str) -> str:
    old_number = "" if line.kind == KIND_ADD else _number_cell(line.old_line)
    new_number = "" if line.kind == KIND_REMOVE else _number_cell(line.new_line)
    return (
        '<tr class="{row_class}">'
        '<td class="diff-line-num diff-line-num-old">{old_number}</td>'
        '<td class="diff-line-num diff-line-num-new">{new_number}</td>'
        '<td class="{code_class}">{marker}{fragment}</td>'
        "</tr>".format(
            row_class=ROW_CLASSES.get(line.kind, CONTEXT_ROW_CLASS),
            old_number=old_number,
            new_number=new_number,
            code_class=CODE_CLASSES.get(line.kind, CONTEXT_CODE_CLASS),
            marker=MARKERS.get(line.kind, CONTEXT_MARKER),
            fragment=fragment,
        )
    )


def render_table(classified: ClassifiedPatch, fragments: list[str]) -> str:
    if not classified.lines:
        return NO_DIFF_HTML
    rows = [render_row(line, fragment) for line, fragment in zip(classified.lines, fragments, strict=True)]
    return '<table class="diff-table">' + "".join(rows) + "</table>"


def render_diff_table(
    patch: str,
    highlighter: Highlighter | None = None,
    language_hint: str | None = None,
    *,
    block_highlight: bool = True,
) -> str:
    """Render a unified-diff patch as a syntax highlighted HTML table.

    ``highlighter`` is called as ``highlighter(text, language_hint)`` and defaults to
    pygments. Blank patches, and patches with nothing but hunk or file headers, give
    the ``NO_DIFF_HTML`` placeholder.
    """
    if not isinstance(patch, str):
        raise TypeError(f"render_diff_table expects patch text, not {type(patch).__name__}")
    if not patch.strip():
        return NO_DIFF_HTML

    classified = classify_patch_lines(patch)
    fragments = highlight_lines(classified.code_lines, highlighter, language_hint, block=block_highlight)
    return render_table(classified, fragments)
