from __future__ import annotations

import pytest

from rubytext.delimiters import match_balanced
from rubytext.syntax import match_definition, match_inline_ruby


def test_match_balanced_handles_nesting() -> None:
    span = match_balanced("[a[b]c]d", 0, "[", "]")
    assert span is not None
    assert span.inner == "a[b]c"
    assert span.end == 7
    assert match_balanced("[a[b]c", 0, "[", "]") is None
    assert match_balanced("x[a]", 0, "[", "]") is None


@pytest.mark.parametrize(
    ("source", "base", "reading"),
    [
        ("[親文字]^(ルビ)", "親文字", "ルビ"),
        ("[親文字]^（ルビ）", "親文字", "ルビ"),
        ("[親文字]（ルビ）", "親文字", "ルビ"),
        ("[base]^(ruby)", "base", "ruby"),
        ("[優先]^()", "優先", ""),
    ],
)
def test_inline_forms(source: str, base: str, reading: str) -> None:
    found = match_inline_ruby(source)
    assert found is not None
    assert found.annotation.base == base
    assert found.annotation.reading == reading
    assert found.annotation.attributes is None
    assert found.extent == len(source)


def test_inline_nested_brackets_and_parens() -> None:
    found = match_inline_ruby("[[注]釈]^(ちゅう(しゃく))の後")
    assert found is not None
    assert found.annotation.base == "[注]釈"
    assert found.annotation.reading == "ちゅう(しゃく)"
    assert found.extent == len("[[注]釈]^(ちゅう(しゃく))")


def test_inline_consumes_trailing_attributes() -> None:
    source = "[漢字]^(かんじ){#k .a .b lang=ja}です"
    found = match_inline_ruby(source)
    assert found is not None
    attributes = found.annotation.attributes
    assert attributes is not None
    assert attributes.id == "k"
    assert attributes.classes == ["a", "b"]
    assert attributes.extra == {"lang": "ja"}
    assert source[found.extent :] == "です"


def test_inline_empty_attribute_fragment_is_not_none() -> None:
    found = match_inline_ruby("[漢字]^(){}")
    assert found is not None
    assert found.annotation.attributes is not None
    assert found.annotation.attributes.is_empty()


def test_inline_match_at_offset() -> None:
    source = "これは[漢字]^(かんじ)です"
    found = match_inline_ruby(source, 3)
    assert found is not None
    assert source[3 : 3 + found.extent] == "[漢字]^(かんじ)"


@pytest.mark.parametrize(
    "source",
    [
        "[]^(から)",
        "[漢字]",
        "[漢字](かんじ)",
        "[漢字]^かんじ",
        "[漢字^(かんじ)",
        "[漢字]^(かんじ",
        "[漢字]（かんじ",
        "漢字]^(かんじ)",
    ],
)
def test_inline_rejects_malformed(source: str) -> None:
    assert match_inline_ruby(source) is None


def test_definition_basic() -> None:
    found = match_definition("**[漢字]: かん じ\n")
    assert found is not None
    assert found.base == "漢字"
    assert found.reading == "かん じ"
    assert found.attributes is None


def test_definition_drops_one_leading_space() -> None:
    found = match_definition("**[ 優先 ]:   ゆうせん  ")
    assert found is not None
    assert found.base == "優先"
    assert found.reading == "  ゆうせん"

    compact = match_definition("**[優先]:ゆうせん")
    assert compact is not None
    assert compact.reading == "ゆうせん"

    tabbed = match_definition("**[漢字]:\tかんじ")
    assert tabbed is not None
    assert tabbed.reading == "\tかんじ"


def test_definition_with_attributes() -> None:
    found = match_definition("**[属性値]: ぞくせいち  {#id .class lang=ja}")
    assert found is not None
    assert found.reading == "ぞくせいち"
    assert found.attributes is not None
    assert found.attributes.id == "id"
    assert found.attributes.classes == ["class"]
    assert found.attributes.extra == {"lang": "ja"}


def test_definition_empty_reading_and_indent() -> None:
    found = match_definition("   **[形式]:")
    assert found is not None
    assert found.base == "形式"
    assert found.reading == ""


def test_definition_nested_base() -> None:
    found = match_definition("**[[注]釈]: ちゅうしゃく")
    assert found is not None
    assert found.base == "[注]釈"


@pytest.mark.parametrize(
    "line",
    [
        "**[漢字] : かんじ",
        "**[   ]: から",
        "**[漢字]",
        "**[漢字 かんじ",
        "*[HTML]: Hyper Text Markup Language",
        "[漢字]: かんじ",
        "**漢字**: かんじ",
    ],
)
def test_definition_rejects(line: str) -> None:
    assert match_definition(line) is None
