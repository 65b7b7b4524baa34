from __future__ import annotations

from invoicer.utils.pdf.core.builder import build_pdf_bytes
from invoicer.utils.pdf.core.drawing import _draw_line, _draw_qr, _draw_text_hex, _fill_color, _stroke_color, mm
from invoicer.utils.pdf.core.fonts import FontSet, GlyphUsage, get_fonts
from invoicer.utils.pdf.core.layout_common import color
from invoicer.utils.pdf.layout.blocks import PagePlan, QrImage, Rule, TextRun


def render_page_stream(plan: PagePlan, fonts: FontSet, usage: GlyphUsage) -> str:
    """Content stream for the single invoice page, in block order."""
    parts: list[str] = []
    for primitive in plan.walk():
        if isinstance(primitive, Rule):
            parts.append(_stroke_color(color(primitive.color)))
            parts.append(_draw_line(mm(primitive.x1), mm(primitive.y1), mm(primitive.x2), mm(primitive.y2), primitive.thickness))
        elif isinstance(primitive, TextRun):
            if not primitive.text:
                continue
            hex_text = usage.encode_text_hex(fonts, primitive.font, primitive.text)
            parts.append(_fill_color(color(primitive.color)))
            parts.append(
                _draw_text_hex(hex_text, mm(primitive.x), mm(primitive.y), fonts.resource_name(primitive.font), primitive.size)
            )
        elif isinstance(primitive, QrImage):
            parts.append(_fill_color(color("black")))
            parts.append(_draw_qr(primitive.matrix, mm(primitive.x), mm(primitive.y), mm(primitive.module)))
    return "".join(parts)


def render_pdf_bytes(plan: PagePlan, fonts: FontSet | None = None) -> bytes:
    fonts = fonts or get_fonts()
    usage = GlyphUsage()
    stream = render_page_stream(plan, fonts, usage)
    return build_pdf_bytes([stream], fonts, usage, page_size=(mm(plan.width), mm(plan.height)), title=plan.title)
