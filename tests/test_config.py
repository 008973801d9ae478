from __future__ import annotations

from pathlib import Path

import pytest

from rubytext.config import load_config
from rubytext.context import RubyTextOptions


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "rubytext.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_section_and_glossary(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[rubytext]
separator = "/"
opening_bracket = "＜"
closing_bracket = "＞"
definition_enabled = false

[rubytext.glossary]
"東京都" = "とう/きょう/と"
"  " = "ignored"
"数" = 3
""",
    )
    loaded = load_config(path)
    assert loaded.options == RubyTextOptions(
        definition_enabled=False,
        opening_bracket="＜",
        closing_bracket="＞",
        separator="/",
    )
    assert loaded.glossary == {"東京都": "とう/きょう/と"}


def test_load_config_accepts_top_level_keys(tmp_path: Path) -> None:
    path = _write(tmp_path, 'ruby_text_enabled = false\nunknown = "x"\n')
    loaded = load_config(path)
    assert loaded.options.ruby_text_enabled is False
    assert loaded.options.separator == " "
    assert loaded.glossary == {}


def test_load_config_empty_file_gives_defaults(tmp_path: Path) -> None:
    loaded = load_config(_write(tmp_path, ""))
    assert loaded.options == RubyTextOptions()


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ('ruby_text_enabled = "yes"\n', "'ruby_text_enabled' must be true or false"),
        ("separator = 1\n", "'separator' must be a string"),
        ('rubytext = "on"\n', "'rubytext' must be a table"),
        ('glossary = ["漢字"]\n', "'glossary' must be a table"),
        ("separator = \n", "Failed to parse config file"),
    ],
)
def test_load_config_rejects_bad_values(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(ValueError) as excinfo:
        load_config(_write(tmp_path, text))
    assert message in str(excinfo.value)
