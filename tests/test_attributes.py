from __future__ import annotations

from rubytext.attributes import Attributes, parse_attributes


def test_parse_attributes_sorts_tokens_by_marker() -> None:
    attributes = parse_attributes("#word .kanji .jlpt lang=ja hidden")
    assert attributes.id == "word"
    assert attributes.classes == ["kanji", "jlpt"]
    assert attributes.class_name == "kanji jlpt"
    assert attributes.extra == {"lang": "ja", "hidden": "hidden"}


def test_parse_attributes_last_id_and_extra_win() -> None:
    attributes = parse_attributes("#first lang=en #second lang=ja")
    assert attributes.id == "second"
    assert attributes.extra == {"lang": "ja"}


def test_parse_attributes_splits_value_once() -> None:
    attributes = parse_attributes("data-expr=a=b")
    assert attributes.extra == {"data-expr": "a=b"}


def test_parse_attributes_empty_fragment() -> None:
    attributes = parse_attributes("   ")
    assert attributes == Attributes()
    assert attributes.is_empty()
    assert attributes.to_html() == ""


def test_parse_attributes_keeps_lone_markers_verbatim() -> None:
    attributes = parse_attributes("# .")
    assert attributes.id is None
    assert attributes.classes == []
    assert attributes.extra == {"#": "#", ".": "."}


def test_to_html_orders_id_class_then_extra_and_escapes() -> None:
    attributes = parse_attributes('title=a"b .c #i')
    assert attributes.to_html() == ' id="i" class="c" title="a&quot;b"'
