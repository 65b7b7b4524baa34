"""
Top-to-bottom invoice layout.

Each stage receives the current vertical cursor and returns its block and the
height it consumed. Side-by-side stages (the two entities, payment + dates) are
computed independently and the cursor drops by the taller one.
"""

from __future__ import annotations

import logging

from invoicer.core.calculations.money import format_money
from invoicer.core.models.entity import EntityRole
from invoicer.core.models.invoice import Invoice
from invoicer.core.models.payment import BankTransfer
from invoicer.utils.pdf.core.fonts import FontSet, get_fonts
from invoicer.utils.pdf.core.layout_common import (
    LEFT_MAX,
    LEFT_X,
    LINE_HEIGHT,
    MARGIN_BOTTOM,
    PAGE_H,
    PAGE_W,
    RIGHT_MAX,
    RIGHT_X,
    TOP_Y,
)
from invoicer.utils.pdf.core.metrics import TextMetrics
from invoicer.utils.pdf.layout.blocks import LayoutBlock, PagePlan
from invoicer.utils.pdf.sections.dates import build_dates_block
from invoicer.utils.pdf.sections.entity import build_entity_block
from invoicer.utils.pdf.sections.heading import build_heading, format_invoice_number
from invoicer.utils.pdf.sections.items_table import build_items_table
from invoicer.utils.pdf.sections.payment import build_payment_block
from invoicer.utils.pdf.sections.spayd import build_note_block, build_qr_block
from invoicer.utils.qr import build_payment_qr

logger = logging.getLogger(__name__)


class LayoutEngine:
    def __init__(self, fonts: FontSet | None = None):
        self.fonts = fonts or get_fonts()
        self.metrics = TextMetrics(self.fonts)

    def layout(self, invoice: Invoice) -> PagePlan:
        metrics = self.metrics
        total = invoice.total()
        blocks: list[LayoutBlock] = []
        warnings: list[str] = []
        y = TOP_Y

        heading, height = build_heading(invoice.number, metrics, RIGHT_X, y, RIGHT_MAX)
        blocks.append(heading)
        y -= height

        contractor, contractor_h = build_entity_block(invoice.contractor, EntityRole.CONTRACTOR, metrics, LEFT_X, y, LEFT_MAX)
        client, client_h = build_entity_block(invoice.client, EntityRole.CLIENT, metrics, RIGHT_X, y, RIGHT_MAX)
        blocks.extend([contractor, client])
        y -= max(contractor_h, client_h) + LINE_HEIGHT

        payment, payment_h = build_payment_block(invoice.iban, invoice.payment_method, metrics, LEFT_X, y, LEFT_MAX)
        dates, dates_h = build_dates_block(invoice.issue_date, invoice.due_date, metrics, RIGHT_X, y, RIGHT_MAX)
        blocks.extend([payment, dates])
        y -= max(payment_h, dates_h)

        items, items_h = build_items_table(invoice.items, invoice.currency, total, metrics, LEFT_X, y, RIGHT_MAX)
        blocks.append(items)
        y -= items_h

        qr_payload = None
        if isinstance(invoice.payment_method, BankTransfer):
            qr = build_payment_qr(invoice.iban, total, invoice.currency, invoice.payment_method.variable_symbol)
            qr_payload = qr.payload
            qr_block, qr_h = build_qr_block(qr, LEFT_X, y)
            blocks.append(qr_block)
            y -= qr_h
            if invoice.note:
                blocks.append(build_note_block(invoice.note, metrics, LEFT_X, RIGHT_MAX))

        if y < MARGIN_BOTTOM:
            message = f"Content overflows the page by {MARGIN_BOTTOM - y:.1f} mm"
            logger.warning("Invoice %s: %s", format_invoice_number(invoice.number), message)
            warnings.append(message)

        return PagePlan(
            width=PAGE_W,
            height=PAGE_H,
            blocks=tuple(blocks),
            total=total,
            formatted_total=format_money(total, invoice.currency),
            qr_payload=qr_payload,
            title=f"Faktura {format_invoice_number(invoice.number)}",
            warnings=tuple(warnings),
        )


def layout_invoice(invoice: Invoice, fonts: FontSet | None = None) -> PagePlan:
    return LayoutEngine(fonts).layout(invoice)
