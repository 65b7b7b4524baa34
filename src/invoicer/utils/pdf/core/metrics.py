"""
Text width measurement from TrueType advance tables.

Widths are returned in millimetres, the unit of the layout engine.
"""

from __future__ import annotations

from typing import Callable

from invoicer.utils.pdf.core.fonts import FontSet, TrueTypeFont

PT_TO_MM = 25.4 / 72.0

MeasureFn = Callable[[str], float]


def measure(text: str, font: TrueTypeFont, size: float) -> float:
    """
    Width of `text` set in `font` at `size` points.
    Words are summed individually and joined by one space advance each,
    so runs of whitespace count as a single space.
    """
    words = str(text or "").split()
    if not words:
        return 0.0
    scale = float(size) / float(font.units_per_em or 1000)
    words_width = sum(font.text_advance(word) for word in words) * scale
    space_advance = font.advance(font.space_gid) * scale
    return (words_width + (len(words) - 1) * space_advance) * PT_TO_MM


class TextMetrics:
    """Binds a loaded FontSet so callers refer to fonts by key ("regular" / "bold")."""

    def __init__(self, fonts: FontSet):
        self.fonts = fonts

    def measure(self, text: str, font: str = "regular", size: float = 10.0) -> float:
        return measure(text, self.fonts.get(font), size)

    def space_advance(self, font: str = "regular", size: float = 10.0) -> float:
        face = self.fonts.get(font)
        return face.advance(face.space_gid) * float(size) / float(face.units_per_em or 1000) * PT_TO_MM

    def measure_fn(self, font: str = "regular", size: float = 10.0) -> MeasureFn:
        face = self.fonts.get(font)

        def _measure(text: str) -> float:
            return measure(text, face, size)

        return _measure
