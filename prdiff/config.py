from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .highlight import language_for_path


@dataclass(frozen=True)
class RenderConfig:
    language: str | None = None
    block_highlight: bool = True
    style: str = "default"
    guess_language_from_path: bool = True

    def language_hint_for(self, path: str | None) -> str | None:
        if self.language:
            return self.language
        if self.guess_language_from_path:
            return language_for_path(path)
        return None


def _bool_option(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise RuntimeError(f"{key} must be true or false, not {value!r}")
    return value


def load_render_config(path: Path) -> RenderConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise RuntimeError(f"File not found: {path}") from error
    except tomllib.TOMLDecodeError as error:
        raise RuntimeError(f"Invalid TOML: {error}") from error

    language = str(data.get("language") or "").strip() or None
    style = str(data.get("style") or "default").strip()
    try:
        get_style_by_name(style)
    except ClassNotFound as error:
        raise RuntimeError(f"Unknown pygments style: {style}") from error

    return RenderConfig(
        language=language,
        block_highlight=_bool_option(data, "block_highlight", True),
        style=style,
        guess_language_from_path=_bool_option(data, "guess_language_from_path", True),
    )
