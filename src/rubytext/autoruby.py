from __future__ import annotations

from typing import Callable

from .context import ConversionContext
from .definitions import Definition

__all__ = ["scan_text"]

RenderDefinition = Callable[[Definition], str]


def _verbatim(text: str) -> str:
    return text


def scan_text(
    ctx: ConversionContext,
    text: str,
    render: RenderDefinition,
    plain: Callable[[str], str] | None = None,
) -> str:
    """
    Replace every defined base in ``text`` with its rendered ruby markup.

    ``text`` is raw source text, not HTML. Runs between matches go through
    ``plain`` (the renderer's own text escaping) and are copied as is when it
    is omitted.

    Single left-to-right pass: at each position the candidates sharing the
    current character are tried longest first, the first exact match is
    emitted and skipped over, otherwise one character is copied as is.
    """
    emit = plain or _verbatim
    registry = ctx.registry
    parts: list[str] = []
    plain_start = 0
    idx = 0
    length = len(text)
    while idx < length:
        for definition in registry.candidates_starting_with(text[idx]):
            if text.startswith(definition.base, idx):
                if plain_start < idx:
                    parts.append(emit(text[plain_start:idx]))
                parts.append(render(definition))
                idx += definition.length
                plain_start = idx
                break
        else:
            idx += 1
    if plain_start == 0:
        return emit(text)
    if plain_start < length:
        parts.append(emit(text[plain_start:]))
    return "".join(parts)
