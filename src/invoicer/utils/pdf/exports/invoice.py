from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from invoicer.core.errors import RenderIOError
from invoicer.core.models.invoice import Invoice
from invoicer.utils.pdf.core.fonts import BOLD_FILE, REGULAR_FILE, FontSet, get_fonts
from invoicer.utils.pdf.layout.engine import LayoutEngine
from invoicer.utils.pdf.renderers.html_renderer import STYLESHEET, render_html, stylesheet_text
from invoicer.utils.pdf.renderers.pdf_renderer import render_pdf_bytes

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode of an existing target, else what a plain open() would create under the current umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, data: bytes) -> Path:
    """
    Write `data` next to `path` under a temporary name and rename it into place.
    The file gets the permissions of the replaced target (or the umask default).
    On failure the temporary file is removed and RenderIOError is raised.
    """
    path = Path(path)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise RenderIOError(f"Cannot write {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.info("Wrote %s (%d bytes)", path, len(data))
    return path


def export_invoice_pdf(path: Path, invoice: Invoice, fonts: FontSet | None = None) -> Path:
    fonts = fonts or get_fonts()
    plan = LayoutEngine(fonts).layout(invoice)
    return write_atomic(Path(path), render_pdf_bytes(plan, fonts))


def export_invoice_html(path: Path, invoice: Invoice, fonts: FontSet | None = None) -> Path:
    """
    Write the HTML document plus `invoice.css` and the two fonts it references
    into the target directory. Font copies are rewritten when their bytes differ.
    """
    fonts = fonts or get_fonts()
    path = Path(path)
    plan = LayoutEngine(fonts).layout(invoice)
    html = render_html(plan, fonts, stylesheet=STYLESHEET)

    write_atomic(path.parent / STYLESHEET, stylesheet_text().encode("utf-8"))
    fonts_dir = path.parent / "fonts"
    for name, font in ((REGULAR_FILE, fonts.regular), (BOLD_FILE, fonts.bold)):
        target = fonts_dir / name
        if not target.exists() or target.read_bytes() != font.data:
            write_atomic(target, font.data)
    return write_atomic(path, html.encode("utf-8"))

