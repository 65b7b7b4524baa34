"""
Positioned primitives produced by the layout engine and consumed by the renderers.
All coordinates are millimetres, origin bottom-left; text `y` is the baseline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator, Union


@dataclass(frozen=True)
class Rule:
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float = 0.0  # points; 0 is a hairline
    color: str = "black"


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font: str = "regular"
    size: float = 10.0
    color: str = "black"


@dataclass(frozen=True)
class QrImage:
    """QR matrix placed with its top-left corner at (x, y)."""

    matrix: tuple[tuple[bool, ...], ...]
    x: float
    y: float
    side: float
    payload: str = ""

    @property
    def module(self) -> float:
        return self.side / max(1, len(self.matrix))


Primitive = Union[Rule, TextRun, QrImage, "LayoutBlock"]


@dataclass(frozen=True)
class LayoutBlock:
    name: str
    origin: tuple[float, float]  # top-left corner
    extent: tuple[float, float]  # width, height
    children: tuple[Primitive, ...] = ()

    def walk(self) -> Iterator[Primitive]:
        """Depth-first over leaf primitives."""
        for child in self.children:
            if isinstance(child, LayoutBlock):
                yield from child.walk()
            else:
                yield child

    def texts(self) -> list[str]:
        return [p.text for p in self.walk() if isinstance(p, TextRun)]


@dataclass(frozen=True)
class PagePlan:
    width: float
    height: float
    blocks: tuple[LayoutBlock, ...]
    total: Decimal
    formatted_total: str
    qr_payload: str | None = None
    title: str = ""
    warnings: tuple[str, ...] = field(default=())

    def block(self, name: str) -> LayoutBlock | None:
        return next((b for b in self.blocks if b.name == name), None)

    def walk(self) -> Iterator[Primitive]:
        for block in self.blocks:
            yield from block.walk()

    def texts(self) -> list[str]:
        return [p.text for p in self.walk() if isinstance(p, TextRun)]
