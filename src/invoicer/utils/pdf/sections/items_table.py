from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from invoicer.core.calculations.money import format_money
from invoicer.core.models.currency import Currency
from invoicer.core.models.item import InvoiceItem
from invoicer.utils.pdf.core.layout_common import (
    HEADER_TOTAL,
    HEADER_UNIT_PRICE,
    LINE_HEIGHT,
    ROW_ADVANCE,
    TABLE_GAP,
    TABLE_PADDING,
    TABLE_SIZE,
    TOTAL_RULE_THICKNESS,
    TOTAL_SIZE,
)
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.core.wrapping import wrap
from invoicer.utils.pdf.layout.blocks import LayoutBlock, Rule, TextRun


@dataclass(frozen=True)
class TableColumns:
    """Horizontal geometry shared by every row, fixed before any row is drawn."""

    count_x: float
    unit_x: float
    description_x: float
    description_end: float
    unit_price_right: float
    total_right: float

    @property
    def description_width(self) -> float:
        return self.description_end - self.description_x


def widest_price(items: Sequence[InvoiceItem], currency: Currency, metrics: TextMetrics) -> str:
    """Formatted line total that measures widest; zero when there are no items."""
    prices = [format_money(item.price(), currency) for item in items] or [format_money(Decimal("0"), currency)]
    return max(prices, key=lambda text: metrics.measure(text, "regular", TABLE_SIZE))


def widest_count(items: Sequence[InvoiceItem], metrics: TextMetrics) -> str:
    """Count column label that measures widest, free-text units of `Other` items included."""
    labels = [item.count_label() for item in items] or [""]
    return max(labels, key=lambda text: metrics.measure(text, "regular", TABLE_SIZE))


def measure_columns(items: Sequence[InvoiceItem], currency: Currency, metrics: TextMetrics, x: float, max_x: float) -> TableColumns:
    """First pass over the items: column edges from the widest price and the widest count label."""
    total_header_w = metrics.measure(HEADER_TOTAL, "regular", TABLE_SIZE)
    unit_header_w = metrics.measure(HEADER_UNIT_PRICE, "regular", TABLE_SIZE)
    max_price_w = metrics.measure(widest_price(items, currency, metrics), "regular", TABLE_SIZE)
    count_w = metrics.measure(widest_count(items, metrics), "regular", TABLE_SIZE)
    return TableColumns(
        count_x=x,
        unit_x=x + count_w + TABLE_GAP,
        description_x=x + count_w + TABLE_GAP * 3,
        description_end=max_x - total_header_w - max_price_w - unit_header_w - TABLE_GAP * 4,
        unit_price_right=max_x - total_header_w - max_price_w - TABLE_GAP,
        total_right=max_x,
    )


def build_item_row(
    item: InvoiceItem,
    currency: Currency,
    columns: TableColumns,
    metrics: TextMetrics,
    y: float,
) -> tuple[LayoutBlock, int]:
    """One table row at baseline `y`. Returns the row and its description line count."""
    children: list = [TextRun(item.count_label(), columns.count_x, y, size=TABLE_SIZE)]
    unit = item.unit_label()
    if unit:
        children.append(TextRun(unit, columns.unit_x, y, size=TABLE_SIZE))

    lines = wrap(item.description, columns.description_width, metrics.measure_fn("regular", TABLE_SIZE))
    for idx, line in enumerate(lines):
        children.append(TextRun(line, columns.description_x, y - LINE_HEIGHT * idx, size=TABLE_SIZE))

    unit_price = format_money(item.price_per_unit, currency)
    children.append(
        TextRun(unit_price, columns.unit_price_right - metrics.measure(unit_price, "regular", TABLE_SIZE), y, size=TABLE_SIZE)
    )
    price = format_money(item.price(), currency)
    children.append(TextRun(price, columns.total_right - metrics.measure(price, "regular", TABLE_SIZE), y, size=TABLE_SIZE))

    line_count = max(1, len(lines))
    height = ROW_ADVANCE + LINE_HEIGHT * (line_count - 1)
    block = LayoutBlock("item", (columns.count_x, y + LINE_HEIGHT), (columns.total_right - columns.count_x, height), tuple(children))
    return block, line_count


def build_items_table(
    items: Sequence[InvoiceItem],
    currency: Currency,
    total: Decimal,
    metrics: TextMetrics,
    x: float,
    y: float,
    max_x: float,
) -> tuple[LayoutBlock, float]:
    lh = LINE_HEIGHT
    header_y = y - TABLE_PADDING
    columns = measure_columns(items, currency, metrics, x, max_x)

    children: list = [Rule(x, header_y, max_x, header_y, thickness=0.0, color="light_gray")]
    total_header_w = metrics.measure(HEADER_TOTAL, "regular", TABLE_SIZE)
    unit_header_w = metrics.measure(HEADER_UNIT_PRICE, "regular", TABLE_SIZE)
    children.append(TextRun(HEADER_TOTAL, max_x - total_header_w, header_y + lh * 0.5, size=TABLE_SIZE, color="gray"))
    children.append(
        TextRun(HEADER_UNIT_PRICE, columns.unit_price_right - unit_header_w, header_y + lh * 0.5, size=TABLE_SIZE, color="gray")
    )

    # second pass: rows
    y_offset = lh
    for item in items:
        row, _ = build_item_row(item, currency, columns, metrics, header_y - y_offset)
        children.append(row)
        y_offset += row.extent[1]

    closing_y = header_y - y_offset + lh
    children.append(Rule(x, closing_y, max_x, closing_y, thickness=0.0, color="light_gray"))

    total_rule_y = header_y - y_offset - lh
    children.append(Rule((max_x + x) / 2.0, total_rule_y, max_x, total_rule_y, thickness=TOTAL_RULE_THICKNESS, color="black"))

    total_text = format_money(total, currency)
    total_y = header_y - y_offset - lh * 2.4
    children.append(
        TextRun(total_text, max_x - metrics.measure(total_text, "bold", TOTAL_SIZE), total_y, font="bold", size=TOTAL_SIZE)
    )

    height = y - total_y + lh
    return LayoutBlock("items", (x, y), (max_x - x, height), tuple(children)), height
