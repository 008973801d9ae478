from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping

from .attributes import Attributes

__all__ = ["Definition", "DefinitionRegistry", "InvalidBase"]


class InvalidBase(ValueError):
    """Raised when a definition is registered with an empty base text."""


@dataclass(frozen=True)
class Definition:
    base: str
    reading: str
    attributes: Attributes | None = None

    @property
    def length(self) -> int:
        return len(self.base)


class DefinitionRegistry:
    """
    Document-scoped ``base -> reading`` definitions.

    Definitions are indexed by the first character of their base text. Each
    bucket is kept ordered by base length, longest first, so the first
    candidate that matches at a position is also the longest one.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, list[Definition]] = {}

    def define(self, base: str, reading: str, attributes: Attributes | None = None) -> Definition:
        if not base.strip():
            raise InvalidBase("Ruby definition base text must not be empty.")
        definition = Definition(base=base, reading=reading, attributes=attributes)
        bucket = self._buckets.setdefault(base[0], [])
        for idx, existing in enumerate(bucket):
            if existing.base == base:
                bucket[idx] = definition
                break
        else:
            bucket.append(definition)
        bucket.sort(key=lambda item: item.length, reverse=True)
        return definition

    def lookup(self, base: str) -> Definition | None:
        if not base:
            return None
        for definition in self._buckets.get(base[0], ()):
            if definition.base == base:
                return definition
        return None

    def candidates_starting_with(self, unit: str) -> tuple[Definition, ...]:
        return tuple(self._buckets.get(unit, ()))

    def update(self, mapping: Mapping[str, str]) -> None:
        for base, reading in mapping.items():
            self.define(base, reading)

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, base: object) -> bool:
        return isinstance(base, str) and self.lookup(base) is not None

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __bool__(self) -> bool:
        return any(self._buckets.values())

    def __iter__(self) -> Iterator[Definition]:
        for bucket in self._buckets.values():
            yield from bucket
