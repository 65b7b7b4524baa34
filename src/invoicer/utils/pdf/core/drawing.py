"""
PDF content-stream operators. Coordinates here are PDF points.
"""

from __future__ import annotations

from typing import Sequence

MM_TO_PT = 72.0 / 25.4

# Bezier control point offset for a quarter circle
_KAPPA = 0.5522847498


def mm(value: float) -> float:
    return value * MM_TO_PT


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def _fill_color(rgb: tuple[float, float, float]) -> str:
    return f"{_num(rgb[0])} {_num(rgb[1])} {_num(rgb[2])} rg\n"


def _stroke_color(rgb: tuple[float, float, float]) -> str:
    return f"{_num(rgb[0])} {_num(rgb[1])} {_num(rgb[2])} RG\n"


def _draw_text_hex(hex_text: str, x: float, y: float, font: str, size: float) -> str:
    return f"BT {font} {_num(size)} Tf {_num(x)} {_num(y)} Td <{hex_text}> Tj ET\n"


def _draw_line(x1: float, y1: float, x2: float, y2: float, width: float) -> str:
    return f"{_num(width)} w {_num(x1)} {_num(y1)} m {_num(x2)} {_num(y2)} l S\n"


def _rounded_rect_path(x: float, y: float, w: float, h: float, r: float) -> str:
    k = r * _KAPPA
    return (
        f"{_num(x + r)} {_num(y)} m "
        f"{_num(x + w - r)} {_num(y)} l "
        f"{_num(x + w - r + k)} {_num(y)} {_num(x + w)} {_num(y + r - k)} {_num(x + w)} {_num(y + r)} c "
        f"{_num(x + w)} {_num(y + h - r)} l "
        f"{_num(x + w)} {_num(y + h - r + k)} {_num(x + w - r + k)} {_num(y + h)} {_num(x + w - r)} {_num(y + h)} c "
        f"{_num(x + r)} {_num(y + h)} l "
        f"{_num(x + r - k)} {_num(y + h)} {_num(x)} {_num(y + h - r + k)} {_num(x)} {_num(y + h - r)} c "
        f"{_num(x)} {_num(y + r)} l "
        f"{_num(x)} {_num(y + r - k)} {_num(x + r - k)} {_num(y)} {_num(x + r)} {_num(y)} c h\n"
    )


def _draw_qr(matrix: Sequence[Sequence[bool]] | None, x: float, y: float, size: float, radius_ratio: float = 0.3) -> str:
    """
    Dark modules as rounded squares; (x, y) is the top-left corner, nothing is
    painted for light modules so the background stays transparent.
    """
    if not matrix:
        return ""
    ops = []
    radius = size * radius_ratio
    for r, row in enumerate(matrix):
        for c, dark in enumerate(row):
            if dark:
                px = x + c * size
                py = y - (r + 1) * size  # PDF y grows up
                ops.append(_rounded_rect_path(px, py, size, size, radius))
    if not ops:
        return ""
    return "".join(ops) + "f\n"
