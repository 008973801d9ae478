from __future__ import annotations

import contextlib
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Iterator

from .attributes import Attributes
from .definitions import DefinitionRegistry
from .elements import Annotation, ElementBuilder, RubyElement, build_ruby_element
from .logging_utils import _debug_log

__all__ = [
    "COMPLETION_DEPTH_LIMIT",
    "ConversionContext",
    "DEFAULT_CLOSING_BRACKET",
    "DEFAULT_OPENING_BRACKET",
    "DEFAULT_SEPARATOR",
    "RubyTextOptions",
]

DEFAULT_OPENING_BRACKET = "（"
DEFAULT_CLOSING_BRACKET = "）"
DEFAULT_SEPARATOR = " "
# Empty readings are filled from definitions at top level and inside one
# level of ruby, never deeper.
COMPLETION_DEPTH_LIMIT = 2


@dataclass
class RubyTextOptions:
    ruby_text_enabled: bool = True
    definition_enabled: bool = True
    opening_bracket: str = DEFAULT_OPENING_BRACKET
    closing_bracket: str = DEFAULT_CLOSING_BRACKET
    separator: str = DEFAULT_SEPARATOR

    def copy(self) -> RubyTextOptions:
        return replace(self)


@dataclass
class ConversionContext:
    """
    Per-document state: collected definitions, the ruby nesting depth and a
    frozen copy of the options in effect when the document started.
    """

    options: RubyTextOptions = field(default_factory=RubyTextOptions)
    registry: DefinitionRegistry = field(default_factory=DefinitionRegistry)
    builder: ElementBuilder | None = None
    depth: int = 0

    def __post_init__(self) -> None:
        if self.builder is None:
            self.builder = partial(build_ruby_element, separator=self.options.separator)

    @contextlib.contextmanager
    def nested(self) -> Iterator[int]:
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    @property
    def auto_annotation_active(self) -> bool:
        return self.options.definition_enabled and self.depth == 0 and bool(self.registry)

    def complete(self, annotation: Annotation) -> Annotation:
        """
        Fill an empty reading (and missing attributes) from the registry.

        Attributes written inline always win; only an annotation that carried
        no ``{...}`` fragment at all borrows the defined attributes.
        """
        if annotation.reading or not self.options.definition_enabled:
            return annotation
        defined = self.registry.lookup(annotation.base)
        if defined is None:
            return annotation
        reading = annotation.reading
        if self.depth < COMPLETION_DEPTH_LIMIT:
            reading = defined.reading
            _debug_log(f"completed empty reading for {annotation.base!r} at depth {self.depth}")
        attributes: Attributes | None = annotation.attributes
        if attributes is None:
            attributes = defined.attributes
        return Annotation(base=annotation.base, reading=reading, attributes=attributes)

    def build(self, annotation: Annotation) -> RubyElement:
        assert self.builder is not None
        return self.builder(annotation.base, annotation.reading, annotation.attributes)
