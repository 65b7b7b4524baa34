from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from invoicer.core.errors import InvoicerError
from invoicer.core.services.invoice import build_invoice, parse_item_spec
from invoicer.core.services.registry import resolve_entity
from invoicer.core.services.settings import load_settings
from invoicer.utils.pdf.exports.invoice import export_invoice_html, export_invoice_pdf
from invoicer.utils.variable_symbol import generate_invoice_number

logger = logging.getLogger("invoicer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="invoicer", description="Generate a Czech invoice as PDF or HTML.")
    parser.add_argument("--client", required=True, help="client IČO")
    parser.add_argument("--contractor", help="contractor IČO (defaults to settings)")
    parser.add_argument("--number", help="invoice number, also used as variable symbol")
    parser.add_argument(
        "--item",
        action="append",
        default=[],
        help="hours:H:M:PRICE:DESC, qty:N:PRICE:DESC or other:UNIT:PRICE:DESC (repeatable)",
    )
    parser.add_argument("--issue-date", type=date.fromisoformat, help="YYYY-MM-DD, defaults to today")
    parser.add_argument("--format", choices=("pdf", "html"), default="pdf")
    parser.add_argument("--output", type=Path, help="output path (default: faktura-<number>.<format>)")
    parser.add_argument("--config", type=Path, help="JSON settings file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )
    try:
        settings = load_settings(args.config)
        issue_date = args.issue_date or date.today()
        number = args.number or generate_invoice_number(issue_date)
        items = [parse_item_spec(spec) for spec in args.item]
        lookup = {"base_url": settings.ares_url, "timeout": settings.timeout, "attempts": settings.retries}
        contractor = resolve_entity(args.contractor or settings.contractor, **lookup)
        client = resolve_entity(args.client, **lookup)
        invoice = build_invoice(number, contractor, client, items, settings, issue_date=issue_date)
        output = args.output or Path(f"faktura-{number}.{args.format}")
        if args.format == "html":
            export_invoice_html(output, invoice)
        else:
            export_invoice_pdf(output, invoice)
    except (InvoicerError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
