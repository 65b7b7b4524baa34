from __future__ import annotations

from decimal import Decimal

from invoicer.utils.pdf.core.layout_common import (
    HEADING_HEIGHT,
    HEADING_RULE_THICKNESS,
    HEADING_RULE_W,
    HEADING_SIZE,
    HEADING_TITLE,
)
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.layout.blocks import LayoutBlock, Rule, TextRun


def format_invoice_number(number: Decimal) -> str:
    return format(number, "f")


def build_heading(number: Decimal, metrics: TextMetrics, x: float, y: float, bound_x: float) -> tuple[LayoutBlock, float]:
    """Gray rule over "Faktura <number>"; the number continues after the bold title."""
    rule_end = max(x + HEADING_RULE_W, bound_x)
    baseline = y - 8.0
    number_x = x + metrics.measure(HEADING_TITLE, "bold", HEADING_SIZE) + metrics.space_advance("bold", HEADING_SIZE)
    children = (
        Rule(x, y, rule_end, y, thickness=HEADING_RULE_THICKNESS, color="gray"),
        TextRun(HEADING_TITLE, x, baseline, font="bold", size=HEADING_SIZE, color="black"),
        TextRun(format_invoice_number(number), number_x, baseline, font="regular", size=HEADING_SIZE, color="gray"),
    )
    block = LayoutBlock("heading", (x, y), (rule_end - x, HEADING_HEIGHT), children)
    return block, HEADING_HEIGHT
