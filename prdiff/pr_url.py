from __future__ import annotations

import re
from dataclasses import dataclass

PR_URL_RE = re.compile(r"github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+)/pull/(?P<number>\d+)")
PR_PATH_RE = re.compile(r"/pull/\d+")


@dataclass(frozen=True)
class PullRequestRef:
    owner: str
    repo: str
    number: int

    @property
    def label(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


def parse_pr_url(url: str) -> PullRequestRef | None:
    match = PR_URL_RE.search(url)
    if not match:
        return None
    return PullRequestRef(owner=match.group("owner"), repo=match.group("repo"), number=int(match.group("number")))


def extract_pr_number(url: str) -> int | None:
    ref = parse_pr_url(url)
    return ref.number if ref else None


def increment_pr_number(url: str, increment: int) -> str:
    ref = parse_pr_url(url)
    if ref is None:
        return url
    return PR_PATH_RE.sub(f"/pull/{ref.number + increment}", url, count=1)


def is_valid_pr_url(url: object) -> bool:
    if not url or not isinstance(url, str):
        return False
    return parse_pr_url(url) is not None
