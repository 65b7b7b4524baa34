from __future__ import annotations

from invoicer.utils.pdf.core.layout_common import NOTE_SIZE, NOTE_Y, QR_SIDE
from invoicer.utils.pdf.core.metrics import PT_TO_MM, TextMetrics
from invoicer.utils.pdf.core.wrapping import wrap_within
from invoicer.utils.pdf.layout.blocks import LayoutBlock, QrImage, TextRun
from invoicer.utils.qr import PaymentQr


def build_qr_block(qr: PaymentQr, x: float, y: float) -> tuple[LayoutBlock, float]:
    image = QrImage(matrix=qr.matrix, x=x, y=y, side=QR_SIDE, payload=qr.payload)
    return LayoutBlock("payment-qr", (x, y), (QR_SIDE, QR_SIDE), (image,)), QR_SIDE


def build_note_block(note: str, metrics: TextMetrics, x: float, max_x: float) -> LayoutBlock:
    """
    Footer note wrapped to the page width; the last line sits on NOTE_Y and
    earlier lines stack above it. Line breaks in the note are treated as spaces.
    """
    line_h = NOTE_SIZE * PT_TO_MM * 1.2
    lines = wrap_within(note, max_x - x, metrics.measure_fn("regular", NOTE_SIZE))
    runs = tuple(
        TextRun(line, x, NOTE_Y + line_h * (len(lines) - 1 - idx), size=NOTE_SIZE, color="black")
        for idx, line in enumerate(lines)
    )
    height = line_h * len(lines)
    return LayoutBlock("note", (x, NOTE_Y + height), (max_x - x, height), runs)
