from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewComment:
    id: Any = None
    path: str | None = None
    line: int | None = None
    original_line: int | None = None
    body: str = ""
    author: str | None = None
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ReviewComment:
        user = payload.get("user")
        author = user.get("login") if isinstance(user, Mapping) else None
        return cls(
            id=payload.get("id"),
            path=_optional_path(payload.get("path")),
            line=optional_int(payload.get("line")),
            original_line=optional_int(payload.get("original_line")),
            body=str(payload.get("body") or ""),
            author=author,
            payload=payload,
        )

    @property
    def sort_line(self) -> int:
        return self.line or self.original_line or 0


def _optional_path(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def coerce_comment(item: Any) -> ReviewComment | None:
    if isinstance(item, ReviewComment):
        return item
    if isinstance(item, Mapping):
        return ReviewComment.from_payload(item)
    return None


def group_by_file(comments: Sequence[Any]) -> dict[str, list[ReviewComment]]:
    """Group review comments by file path, each group ordered by line.

    The sort key is ``line``, then ``original_line``, then 0. The sort is stable, so
    replies anchored to the same line keep the order GitHub returned them in.
    Comments without a path are left out and logged.
    """
    if isinstance(comments, (str, bytes)) or not isinstance(comments, Sequence):
        raise TypeError(f"group_by_file expects a sequence of comments, not {type(comments).__name__}")

    groups: dict[str, list[ReviewComment]] = {}
    for item in comments:
        comment = coerce_comment(item)
        if comment is None or not isinstance(comment.path, str) or not comment.path:
            log.warning("Comment missing path property: %r", item)
            continue
        groups.setdefault(comment.path, []).append(comment)

    for path, values in groups.items():
        groups[path] = sorted(values, key=lambda comment: comment.sort_line)
    return groups
