from __future__ import annotations

import re
from dataclasses import dataclass, field

HUNK_HEADER_RE = re.compile(r"@@ -(?P<old_start>\d+)(?:,\d+)? \+(?P<new_start>\d+)(?:,\d+)? @@")

KIND_ADD = "add"
KIND_REMOVE = "remove"
KIND_CONTEXT = "context"


@dataclass(frozen=True)
class HunkStart:
    old_start: int
    new_start: int


@dataclass(frozen=True)
class LineRecord:
    kind: str
    code: str
    old_line: int | None = None
    new_line: int | None = None


@dataclass
class _Counters:
    old_line: int = 0
    new_line: int = 0


@dataclass
class ClassifiedPatch:
    lines: list[LineRecord] = field(default_factory=list)

    @property
    def kinds(self) -> list[str]:
        return [line.kind for line in self.lines]

    @property
    def code_lines(self) -> list[str]:
        return [line.code for line in self.lines]

    @property
    def code_text(self) -> str:
        return "\n".join(self.code_lines)

    def __len__(self) -> int:
        return len(self.lines)


def parse_hunk_header(line: str) -> HunkStart | None:
    """Return the old/new start lines of a hunk header, or None.

    Counts are optional and ignored. The header shape may appear anywhere in the
    line. A line with an ``@@`` prefix whose body does not match is no match.
    """
    match = HUNK_HEADER_RE.search(line)
    if not match:
        return None
    return HunkStart(old_start=int(match.group("old_start")), new_start=int(match.group("new_start")))


def is_file_header(line: str) -> bool:
    return line.startswith("+++") or line.startswith("---")


def classify_patch_lines(patch: str) -> ClassifiedPatch:
    """Classify every displayable line of a unified-diff patch.

    Hunk headers reset the running counters. A header that does not parse keeps the
    previous counters, so lines after it continue the earlier numbering. Context lines
    seen before any hunk header carry no line numbers.
    """
    if not isinstance(patch, str):
        raise TypeError(f"patch must be str, not {type(patch).__name__}")

    counters = _Counters()
    result = ClassifiedPatch()
    for line in patch.split("\n"):
        if line.startswith("@@"):
            hunk = parse_hunk_header(line)
            if hunk is not None:
                counters.old_line = hunk.old_start
                counters.new_line = hunk.new_start
            continue

        if is_file_header(line):
            continue

        if line.startswith("+"):
            result.lines.append(LineRecord(kind=KIND_ADD, code=line[1:], new_line=counters.new_line))
            counters.new_line += 1
        elif line.startswith("-"):
            result.lines.append(LineRecord(kind=KIND_REMOVE, code=line[1:], old_line=counters.old_line))
            counters.old_line += 1
        else:
            code = line[1:] if line.startswith(" ") else line
            result.lines.append(
                LineRecord(
                    kind=KIND_CONTEXT,
                    code=code,
                    old_line=counters.old_line or None,
                    new_line=counters.new_line or None,
                )
            )
            if counters.old_line:
                counters.old_line += 1
            if counters.new_line:
                counters.new_line += 1
    return result
