from __future__ import annotations

from invoicer.core.models.entity import Entity, EntityRole
from invoicer.utils.pdf.core.layout_common import BODY_SIZE, LINE_HEIGHT
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.core.wrapping import wrap_within
from invoicer.utils.pdf.layout.blocks import LayoutBlock, Rule, TextRun

NOT_VAT_REGISTERED = "Neplátce DPH"


def build_entity_lines(entity: Entity) -> list[tuple[str, str]]:
    """(label, value) rows of the billing part; empty label means a free-standing line."""
    rows = [("IČO", str(entity.identifier))]
    if entity.vat_number:
        rows.append(("DIČ", entity.vat_number))
    else:
        rows.append(("", NOT_VAT_REGISTERED))
    return rows


def build_entity_block(
    entity: Entity,
    role: EntityRole,
    metrics: TextMetrics,
    x: float,
    y: float,
    max_x: float,
) -> tuple[LayoutBlock, float]:
    lh = LINE_HEIGHT
    children: list = [
        Rule(x, y, x + 4.0, y, thickness=0.0, color="black"),
        TextRun(role.label, x, y - 5.0, size=BODY_SIZE, color="gray"),
    ]

    name_lines = wrap_within(entity.name, max_x - x, metrics.measure_fn("bold", BODY_SIZE)) or [""]
    # names longer than the column push everything below down by one line each
    extra = (len(name_lines) - 1) * lh
    for idx, line in enumerate(name_lines):
        children.append(TextRun(line, x, y - (5.0 + lh * (2 + idx)), font="bold", size=BODY_SIZE))

    children.append(TextRun(entity.address.first_line(), x, y - (6.0 + lh * 3) - extra, size=BODY_SIZE, color="gray"))
    children.append(TextRun(entity.address.second_line(), x, y - (6.0 + lh * 4) - extra, size=BODY_SIZE, color="gray"))

    for offset, (label, value) in enumerate(build_entity_lines(entity), start=6):
        row_y = y - (6.0 + lh * offset) - extra
        if label:
            children.append(TextRun(label, x, row_y, size=BODY_SIZE, color="gray"))
            value_x = max_x - metrics.measure(value, "regular", BODY_SIZE)
            children.append(TextRun(value, value_x, row_y, size=BODY_SIZE, color="black"))
        else:
            children.append(TextRun(value, x, row_y, size=BODY_SIZE, color="black"))

    height = 6.0 + lh * 8 + extra
    block = LayoutBlock(f"entity-{role.name.lower()}", (x, y), (max_x - x, height), tuple(children))
    return block, height
