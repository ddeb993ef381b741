#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from prdiff.cli import run_render  # noqa: E402


def main(argv: list[str]) -> int:
    return run_render(argv)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
