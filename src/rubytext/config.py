from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tomllib

from .context import RubyTextOptions

__all__ = ["DEFAULT_CONFIG_FILENAME", "LoadedConfig", "load_config"]

DEFAULT_CONFIG_FILENAME = "rubytext.toml"

_BOOL_KEYS = ("ruby_text_enabled", "definition_enabled")
_STR_KEYS = ("opening_bracket", "closing_bracket", "separator")


@dataclass
class LoadedConfig:
    options: RubyTextOptions = field(default_factory=RubyTextOptions)
    glossary: dict[str, str] = field(default_factory=dict)


def load_config(path: Path) -> LoadedConfig:
    """
    Read converter options from a TOML file::

        [rubytext]
        separator = "/"
        opening_bracket = "＜"
        closing_bracket = "＞"

        [rubytext.glossary]
        漢字 = "かん じ"

    Keys may also sit at the top level of the file. Unknown keys are ignored.
    """
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Failed to parse config file: {path}") from exc
    section = raw.get("rubytext", raw)
    if not isinstance(section, dict):
        raise ValueError(f"{path.name}: 'rubytext' must be a table.")

    options = RubyTextOptions()
    for key in _BOOL_KEYS:
        if key not in section:
            continue
        value = section[key]
        if not isinstance(value, bool):
            raise ValueError(f"{path.name}: '{key}' must be true or false.")
        setattr(options, key, value)
    for key in _STR_KEYS:
        if key not in section:
            continue
        value = section[key]
        if not isinstance(value, str):
            raise ValueError(f"{path.name}: '{key}' must be a string.")
        setattr(options, key, value)

    glossary_payload = section.get("glossary", {})
    if not isinstance(glossary_payload, dict):
        raise ValueError(f"{path.name}: 'glossary' must be a table of base = reading.")
    glossary: dict[str, str] = {}
    for base, reading in glossary_payload.items():
        if not isinstance(reading, str) or not base.strip():
            continue
        glossary[base] = reading
    return LoadedConfig(options=options, glossary=glossary)
