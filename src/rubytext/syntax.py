from __future__ import annotations

import re
from dataclasses import dataclass

from .attributes import Attributes, parse_attributes
from .delimiters import match_balanced
from .elements import Annotation

__all__ = [
    "DEFINITION_PREFIX",
    "DefinitionMatch",
    "InlineRubyMatch",
    "match_definition",
    "match_inline_ruby",
]

DEFINITION_PREFIX = "**"

_LEADING_INDENT = re.compile(r" {0,3}")
_TRAILING_ATTRIBUTES = re.compile(r"[ ]*\{([^}]*)\}$")


@dataclass(frozen=True)
class DefinitionMatch:
    base: str
    reading: str
    attributes: Attributes | None = None


@dataclass(frozen=True)
class InlineRubyMatch:
    annotation: Annotation
    extent: int


def match_definition(line: str) -> DefinitionMatch | None:
    """
    Recognize a ruby definition line::

        **[漢字]: かん じ
        **[属性値]: ぞくせいち {#id .class lang=ja}

    The colon must follow the closing bracket directly. A single space after
    the colon is dropped, matching abbreviation definitions, and so are
    trailing spaces. Tabs are kept.
    """
    line = line.rstrip("\r\n")
    indent = _LEADING_INDENT.match(line)
    pos = indent.end() if indent else 0
    if not line.startswith(DEFINITION_PREFIX, pos):
        return None
    pos += len(DEFINITION_PREFIX)

    span = match_balanced(line, pos, "[", "]")
    if span is None:
        return None
    base = span.inner.strip()
    if not base:
        return None
    rest = line[span.end :]
    if not rest.startswith(":"):
        return None

    reading = rest[1:]
    if reading.startswith(" "):
        reading = reading[1:]
    reading = reading.rstrip(" ")
    attributes: Attributes | None = None
    m = _TRAILING_ATTRIBUTES.search(reading)
    if m:
        attributes = parse_attributes(m.group(1))
        reading = reading[: m.start()]
    return DefinitionMatch(base=base, reading=reading, attributes=attributes)


def match_inline_ruby(text: str, pos: int = 0) -> InlineRubyMatch | None:
    """
    Recognize one of the inline ruby forms starting at ``text[pos]``:

    1. ``[base]^(reading)``
    2. ``[base]^（reading）``
    3. ``[base]（reading）``

    An attribute fragment ``{...}`` directly after the closing parenthesis is
    consumed as well. ``extent`` counts every consumed character.
    """
    base_span = match_balanced(text, pos, "[", "]")
    if base_span is None or not base_span.inner:
        return None
    cursor = base_span.end
    if cursor >= len(text):
        return None

    reading_span = None
    if text[cursor] == "^":
        reading_span = match_balanced(text, cursor + 1, "(", ")")
        if reading_span is None:
            reading_span = match_balanced(text, cursor + 1, "（", "）")
    else:
        reading_span = match_balanced(text, cursor, "（", "）")
    if reading_span is None:
        return None
    cursor = reading_span.end

    attributes: Attributes | None = None
    attr_span = match_balanced(text, cursor, "{", "}")
    if attr_span is not None:
        attributes = parse_attributes(attr_span.inner)
        cursor = attr_span.end

    annotation = Annotation(base=base_span.inner, reading=reading_span.inner, attributes=attributes)
    return InlineRubyMatch(annotation=annotation, extent=cursor - pos)
