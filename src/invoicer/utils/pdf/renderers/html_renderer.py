"""
HTML/CSS backend. Uses the same page plan as the PDF renderer; millimetre
coordinates are flipped to a top-left origin and every primitive is absolutely
positioned inside an A4-sized page box.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from invoicer.utils.pdf.core.fonts import FontSet, get_fonts
from invoicer.utils.pdf.core.layout_common import color
from invoicer.utils.pdf.core.metrics import PT_TO_MM
from invoicer.utils.pdf.layout.blocks import LayoutBlock, PagePlan, QrImage, Rule, TextRun

TEMPLATE_DIR = Path(__file__).resolve().parents[3] / "assets" / "templates"
STYLESHEET = "invoice.css"
HAIRLINE_PT = 0.25


def _css_color(name: str) -> str:
    r, g, b = color(name)
    return f"rgb({round(r * 255)}, {round(g * 255)}, {round(b * 255)})"


def _mm(value: float) -> str:
    return f"{value:.2f}mm"


def _element(primitive, plan: PagePlan, fonts: FontSet) -> dict:
    if isinstance(primitive, LayoutBlock):
        return _block_view(primitive, plan, fonts)
    if isinstance(primitive, TextRun):
        ascent = primitive.size * PT_TO_MM * fonts.get(primitive.font).ascent_ratio()
        return {
            "kind": "text",
            "text": primitive.text,
            "left": _mm(primitive.x),
            "top": _mm(plan.height - primitive.y - ascent),
            "size": f"{primitive.size:g}pt",
            "weight": "bold" if primitive.font == "bold" else "normal",
            "color": _css_color(primitive.color),
        }
    if isinstance(primitive, Rule):
        return {
            "kind": "rule",
            "left": _mm(min(primitive.x1, primitive.x2)),
            "top": _mm(plan.height - primitive.y1),
            "width": _mm(abs(primitive.x2 - primitive.x1)),
            "thickness": f"{max(primitive.thickness, HAIRLINE_PT):g}pt",
            "color": _css_color(primitive.color),
        }
    if isinstance(primitive, QrImage):
        size = len(primitive.matrix)
        modules = [(c, r) for r, row in enumerate(primitive.matrix) for c, dark in enumerate(row) if dark]
        return {
            "kind": "qr",
            "left": _mm(primitive.x),
            "top": _mm(plan.height - primitive.y),
            "side": _mm(primitive.side),
            "size": size,
            "modules": modules,
            "payload": primitive.payload,
        }
    raise TypeError(f"Unknown primitive: {primitive!r}")


def _block_view(block: LayoutBlock, plan: PagePlan, fonts: FontSet) -> dict:
    return {
        "kind": "block",
        "name": block.name,
        "elements": [_element(child, plan, fonts) for child in block.children],
    }


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html(plan: PagePlan, fonts: FontSet | None = None, stylesheet: str = STYLESHEET) -> str:
    fonts = fonts or get_fonts()
    template = _environment().get_template("invoice.html.j2")
    return template.render(
        title=plan.title,
        stylesheet=stylesheet,
        page_width=_mm(plan.width),
        page_height=_mm(plan.height),
        blocks=[_block_view(block, plan, fonts) for block in plan.blocks],
        total=plan.formatted_total,
    )


def stylesheet_text() -> str:
    return (TEMPLATE_DIR / STYLESHEET).read_text(encoding="utf-8")
