from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .attributes import Attributes

__all__ = [
    "Annotation",
    "ElementBuilder",
    "RubyElement",
    "RubyPair",
    "build_ruby_element",
    "render_ruby_element",
    "split_ruby",
]


@dataclass(frozen=True)
class Annotation:
    base: str
    reading: str
    attributes: Attributes | None = None


@dataclass(frozen=True)
class RubyPair:
    base: str
    reading: str


@dataclass
class RubyElement:
    """Structured ``<ruby>`` node: one or more base/reading pairs plus attributes."""

    pairs: list[RubyPair] = field(default_factory=list)
    attributes: Attributes | None = None

    @property
    def base(self) -> str:
        return "".join(pair.base for pair in self.pairs)


ElementBuilder = Callable[[str, str, "Attributes | None"], RubyElement]


def split_ruby(base: str, reading: str, separator: str = " ") -> list[RubyPair]:
    """
    Pair each base character with its own reading piece (mono-ruby) when the
    reading is written with exactly one piece per character, e.g.
    ``[日本語]^(に ほん ご)``. Any other shape keeps the whole span as a
    single group.
    """
    if separator:
        pieces = reading.split(separator)
        if len(pieces) > 1 and len(pieces) == len(base):
            return [RubyPair(base=char, reading=piece) for char, piece in zip(base, pieces)]
    return [RubyPair(base=base, reading=reading)]


def build_ruby_element(
    base: str,
    reading: str,
    attributes: Attributes | None = None,
    *,
    separator: str = " ",
) -> RubyElement:
    return RubyElement(pairs=split_ruby(base, reading, separator), attributes=attributes)


def render_ruby_element(
    element: RubyElement,
    render_inline: Callable[[str], str],
    opening: str = "（",
    closing: str = "）",
) -> str:
    parts: list[str] = ["<ruby"]
    if element.attributes is not None:
        parts.append(element.attributes.to_html())
    parts.append(">")
    for pair in element.pairs:
        parts.append(render_inline(pair.base))
        if opening:
            parts.append(f"<rp>{opening}</rp>")
        parts.append(f"<rt>{render_inline(pair.reading)}</rt>")
        if closing:
            parts.append(f"<rp>{closing}</rp>")
    parts.append("</ruby>")
    return "".join(parts)
