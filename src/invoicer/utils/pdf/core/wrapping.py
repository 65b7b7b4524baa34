from __future__ import annotations

from typing import Callable


def wrap(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Greedy word wrap.

    Words are appended to the current line; once the line (including the word
    just appended) measures >= max_width it is committed *with* that word, so a
    committed line may be wider than max_width. Words are never split.
    Empty or whitespace-only text gives [].
    """
    lines: list[str] = []
    current: list[str] = []
    for word in str(text or "").split():
        current.append(word)
        candidate = " ".join(current)
        if measure(candidate) >= max_width:
            lines.append(candidate)
            current = []
    if current:
        lines.append(" ".join(current))
    return lines


def wrap_within(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Greedy word wrap that keeps lines inside max_width: a word that would
    overflow starts the next line. Only a single word wider than max_width
    may exceed it. Empty or whitespace-only text gives [].
    """
    lines: list[str] = []
    current: list[str] = []
    for word in str(text or "").split():
        if current and measure(" ".join(current + [word])) > max_width:
            lines.append(" ".join(current))
            current = []
        current.append(word)
    if current:
        lines.append(" ".join(current))
    return lines
