from __future__ import annotations

from datetime import date

from invoicer.utils.pdf.core.layout_common import DATE_FORMAT
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.layout.blocks import LayoutBlock
from invoicer.utils.pdf.sections.payment import build_label_value_block


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def build_dates_block(
    issue_date: date,
    due_date: date,
    metrics: TextMetrics,
    x: float,
    y: float,
    max_x: float,
) -> tuple[LayoutBlock, float]:
    rows = [
        ("Datum vystavení", format_date(issue_date)),
        ("Datum splatnosti", format_date(due_date)),
    ]
    return build_label_value_block("dates", rows, metrics, x, y, max_x)
