from __future__ import annotations

from dataclasses import dataclass, field

from mistune.util import escape

__all__ = ["Attributes", "parse_attributes"]


@dataclass
class Attributes:
    """
    HTML attributes attached to a ``<ruby>`` element.

    ``classes`` keeps insertion order (repeats are kept, as written) and
    ``extra`` keeps first-insertion order with last write winning.
    """

    id: str | None = None
    classes: list[str] = field(default_factory=list)
    extra: dict[str, str] = field(default_factory=dict)

    @property
    def class_name(self) -> str | None:
        if not self.classes:
            return None
        return " ".join(self.classes)

    def is_empty(self) -> bool:
        return self.id is None and not self.classes and not self.extra

    def items(self) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        if self.id is not None:
            pairs.append(("id", self.id))
        class_name = self.class_name
        if class_name is not None:
            pairs.append(("class", class_name))
        pairs.extend(self.extra.items())
        return pairs

    def to_html(self) -> str:
        return "".join(f' {name}="{escape(value)}"' for name, value in self.items())


def parse_attributes(text: str) -> Attributes:
    """Parse the inside of a ``{...}`` fragment, e.g. ``#id .class lang=ja``."""
    attributes = Attributes()
    for token in text.split():
        marker = token[0]
        if marker == "#" and len(token) > 1:
            attributes.id = token[1:]
        elif marker == "." and len(token) > 1:
            attributes.classes.append(token[1:])
        elif "=" in token:
            name, value = token.split("=", 1)
            attributes.extra[name] = value
        else:
            attributes.extra[token] = token
    return attributes
