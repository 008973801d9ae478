from __future__ import annotations

from dataclasses import dataclass

__all__ = ["BalancedSpan", "match_balanced"]


@dataclass(frozen=True)
class BalancedSpan:
    """Inner text of a balanced ``open ... close`` run and the offset past it."""

    inner: str
    start: int
    end: int


def match_balanced(text: str, pos: int, opening: str, closing: str) -> BalancedSpan | None:
    """
    Match a delimited run starting exactly at ``pos``.

    Nested pairs of the same delimiters are allowed inside; the run ends at
    the closing delimiter that brings the nesting level back to zero. Returns
    ``None`` when ``text[pos]`` is not ``opening`` or the run never closes.
    """
    if pos >= len(text) or text[pos] != opening:
        return None
    depth = 0
    idx = pos
    length = len(text)
    while idx < length:
        ch = text[idx]
        if ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return BalancedSpan(inner=text[pos + 1 : idx], start=pos, end=idx + 1)
        idx += 1
    return None
