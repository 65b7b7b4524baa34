from __future__ import annotations

import bisect
import logging
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from invoicer.core.errors import FontMetricsUnavailable

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).resolve().parents[3] / "assets" / "fonts"
REGULAR_FILE = "DejaVuSans.ttf"
BOLD_FILE = "DejaVuSans-Bold.ttf"
FONT_DIR_ENV = "INVOICER_PDF_FONT"

# Process-wide cache; fonts are read-only after loading.
_FONTS: "FontSet | None" = None


@dataclass(frozen=True)
class _TtfTables:
    cmap: tuple[int, int]
    head: tuple[int, int]
    hhea: tuple[int, int]
    hmtx: tuple[int, int]
    maxp: tuple[int, int]


class TrueTypeFont:
    def __init__(self, path: Path, pdf_name: str):
        self.path = path
        self.pdf_name = pdf_name  # Name object, e.g. "/InvoicerRegular"
        self.data = path.read_bytes()
        self.tables = self._parse_tables(self.data)

        head_offset, _ = self.tables.head
        self.units_per_em = struct.unpack_from(">H", self.data, head_offset + 18)[0]
        x_min, y_min, x_max, y_max = struct.unpack_from(">hhhh", self.data, head_offset + 36)
        self.bbox = (x_min, y_min, x_max, y_max)

        hhea_offset, _ = self.tables.hhea
        self.ascent, self.descent = struct.unpack_from(">hh", self.data, hhea_offset + 4)
        self.number_of_hmetrics = struct.unpack_from(">H", self.data, hhea_offset + 34)[0]

        maxp_offset, _ = self.tables.maxp
        self.num_glyphs = struct.unpack_from(">H", self.data, maxp_offset + 4)[0]

        self._advance_widths = self._load_advance_widths()
        self._cmap_lookup = self._build_cmap_lookup()
        self.space_gid = self.glyph_id(ord(" "))

    @staticmethod
    def _parse_tables(data: bytes) -> _TtfTables:
        if len(data) < 12:
            raise ValueError("Invalid TTF (too small)")
        num_tables = struct.unpack_from(">H", data, 4)[0]
        directory_offset = 12
        entries: dict[str, tuple[int, int]] = {}
        for i in range(num_tables):
            base = directory_offset + i * 16
            tag = data[base : base + 4].decode("ascii", "replace")
            offset = struct.unpack_from(">I", data, base + 8)[0]
            length = struct.unpack_from(">I", data, base + 12)[0]
            entries[tag] = (offset, length)

        required = ["cmap", "head", "hhea", "hmtx", "maxp"]
        missing = [t for t in required if t not in entries]
        if missing:
            raise ValueError(f"TTF missing tables: {', '.join(missing)}")
        return _TtfTables(
            cmap=entries["cmap"],
            head=entries["head"],
            hhea=entries["hhea"],
            hmtx=entries["hmtx"],
            maxp=entries["maxp"],
        )

    def _load_advance_widths(self) -> list[int]:
        hmtx_offset, _ = self.tables.hmtx
        widths: list[int] = []
        count = min(self.number_of_hmetrics, self.num_glyphs)
        for i in range(count):
            adv = struct.unpack_from(">H", self.data, hmtx_offset + i * 4)[0]
            widths.append(int(adv))
        if not widths:
            widths = [int(self.units_per_em)]
        if len(widths) < self.num_glyphs:
            widths.extend([widths[-1]] * (self.num_glyphs - len(widths)))
        return widths

    def advance(self, gid: int) -> int:
        """Advance width in font units."""
        if gid < 0 or gid >= len(self._advance_widths):
            return self.units_per_em // 2
        return self._advance_widths[gid]

    def width_1000(self, gid: int) -> int:
        adv = self.advance(gid)
        return max(0, int(round((adv * 1000.0) / float(self.units_per_em or 1000))))

    def glyph_id(self, codepoint: int) -> int:
        gid = self._cmap_lookup(codepoint)
        if gid is None:
            return 0
        if gid < 0 or gid >= self.num_glyphs:
            return 0
        return int(gid)

    def glyph_ids(self, text: str) -> list[int]:
        return [self.glyph_id(ord(ch)) for ch in str(text)]

    def text_advance(self, text: str) -> int:
        """Sum of glyph advances in font units (no kerning)."""
        return sum(self.advance(gid) for gid in self.glyph_ids(text))

    def ascent_ratio(self) -> float:
        return self.ascent / float(self.units_per_em or 1000)

    def _build_cmap_lookup(self) -> Callable[[int], int | None]:
        cmap_offset, _ = self.tables.cmap
        version, num_tables = struct.unpack_from(">HH", self.data, cmap_offset)
        if version != 0 or num_tables <= 0:
            raise ValueError("Invalid cmap table")

        records = []
        for i in range(num_tables):
            base = cmap_offset + 4 + i * 8
            platform_id, encoding_id, sub_offset = struct.unpack_from(">HHI", self.data, base)
            records.append((platform_id, encoding_id, sub_offset))

        preferred = [
            (3, 10),  # Windows, Unicode full repertoire (format 12)
            (3, 1),  # Windows, Unicode BMP (format 4)
            (0, 4),  # Unicode platform
            (0, 3),
            (0, 2),
            (0, 1),
        ]
        chosen = None
        for pid, eid in preferred:
            match = next((r for r in records if r[0] == pid and r[1] == eid), None)
            if match:
                chosen = match
                break
        if not chosen:
            chosen = records[0]

        _, _, sub_offset = chosen
        subtable_start = cmap_offset + sub_offset
        fmt = struct.unpack_from(">H", self.data, subtable_start)[0]
        if fmt == 4:
            return self._parse_cmap_format4(subtable_start)
        if fmt == 12:
            return self._parse_cmap_format12(subtable_start)
        raise ValueError(f"Unsupported cmap format: {fmt}")

    def _parse_cmap_format4(self, start: int) -> Callable[[int], int | None]:
        seg_count_x2 = struct.unpack_from(">H", self.data, start + 6)[0]
        seg_count = int(seg_count_x2 // 2)
        end_codes_offset = start + 14
        end_codes = list(struct.unpack_from(f">{seg_count}H", self.data, end_codes_offset))
        start_codes_offset = end_codes_offset + 2 * seg_count + 2
        start_codes = list(struct.unpack_from(f">{seg_count}H", self.data, start_codes_offset))
        id_delta_offset = start_codes_offset + 2 * seg_count
        id_deltas = list(struct.unpack_from(f">{seg_count}h", self.data, id_delta_offset))
        id_range_offset_offset = id_delta_offset + 2 * seg_count
        id_range_offsets = list(struct.unpack_from(f">{seg_count}H", self.data, id_range_offset_offset))

        def lookup(codepoint: int) -> int | None:
            if codepoint < 0 or codepoint > 0xFFFF:
                return None
            c = int(codepoint)
            # end codes are sorted ascending
            i = bisect.bisect_left(end_codes, c)
            if i >= seg_count or start_codes[i] > c:
                return None
            ro = id_range_offsets[i]
            if ro == 0:
                return (c + id_deltas[i]) & 0xFFFF
            glyph_index_addr = id_range_offset_offset + 2 * i + ro + 2 * (c - start_codes[i])
            if glyph_index_addr + 2 > len(self.data):
                return None
            glyph_index = struct.unpack_from(">H", self.data, glyph_index_addr)[0]
            if glyph_index == 0:
                return 0
            return (glyph_index + id_deltas[i]) & 0xFFFF

        return lookup

    def _parse_cmap_format12(self, start: int) -> Callable[[int], int | None]:
        n_groups = struct.unpack_from(">I", self.data, start + 12)[0]
        groups_offset = start + 16
        groups: list[tuple[int, int, int]] = []
        for i in range(n_groups):
            base = groups_offset + i * 12
            start_char, end_char, start_gid = struct.unpack_from(">III", self.data, base)
            groups.append((start_char, end_char, start_gid))
        end_chars = [g[1] for g in groups]

        def lookup(codepoint: int) -> int | None:
            c = int(codepoint)
            i = bisect.bisect_left(end_chars, c)
            if i >= len(groups):
                return None
            start_char, _, start_gid = groups[i]
            if c < start_char:
                return None
            return int(start_gid + (c - start_char))

        return lookup


@dataclass(frozen=True)
class FontSet:
    regular: TrueTypeFont
    bold: TrueTypeFont

    def get(self, key: str) -> TrueTypeFont:
        if key == "bold":
            return self.bold
        return self.regular

    def resource_name(self, key: str) -> str:
        return "/F2" if key == "bold" else "/F1"


@dataclass
class GlyphUsage:
    """Glyph ids used by one render, per font key. Fonts themselves stay untouched."""

    used: dict[str, set[int]] = field(default_factory=lambda: {"regular": set(), "bold": set()})

    def encode_text_hex(self, fonts: FontSet, key: str, text: str) -> str:
        font = fonts.get(key)
        gids = font.glyph_ids(text)
        self.used.setdefault(key, set()).update(gids)
        out = bytearray()
        for gid in gids:
            out += int(gid).to_bytes(2, "big", signed=False)
        return out.hex().upper()

    def gids(self, fonts: FontSet, key: str) -> set[int]:
        return self.used.get(key, set()) | {fonts.get(key).space_gid}


def _font_candidates() -> list[tuple[Path, Path]]:
    override = os.environ.get(FONT_DIR_ENV)
    candidates: list[tuple[Path, Path]] = []
    if override:
        base_dir = Path(override)
        candidates.append((base_dir / "regular.ttf", base_dir / "bold.ttf"))
    candidates.append((FONTS_DIR / REGULAR_FILE, FONTS_DIR / BOLD_FILE))
    return candidates


def load_fonts(regular_path: Path | None = None, bold_path: Path | None = None) -> FontSet:
    """
    Load the regular + bold pair. Both are mandatory; failure raises FontMetricsUnavailable.
    """
    if regular_path is not None and bold_path is not None:
        candidates = [(regular_path, bold_path)]
    else:
        candidates = _font_candidates()

    errors: list[str] = []
    for reg, bold in candidates:
        if not reg.exists() or not bold.exists():
            errors.append(f"{reg.parent}: missing font files")
            continue
        try:
            font_set = FontSet(
                regular=TrueTypeFont(reg, pdf_name="/InvoicerRegular"),
                bold=TrueTypeFont(bold, pdf_name="/InvoicerBold"),
            )
        except (ValueError, struct.error) as exc:
            errors.append(f"{reg.parent}: {exc}")
            continue
        logger.debug("Loaded fonts %s, %s", reg, bold)
        return font_set
    raise FontMetricsUnavailable("Cannot load fonts: " + "; ".join(errors))


def get_fonts() -> FontSet:
    global _FONTS
    if _FONTS is None:
        _FONTS = load_fonts()
    return _FONTS


def _scale_font_units(value: int, units_per_em: int) -> int:
    if units_per_em <= 0:
        return int(value)
    return int(round(value * 1000.0 / float(units_per_em)))


def _format_cid_widths(font: TrueTypeFont, gids: set[int]) -> str:
    ordered = sorted(gids)
    if not ordered:
        return ""
    parts: list[str] = []
    i = 0
    while i < len(ordered):
        start = ordered[i]
        widths = [font.width_1000(start)]
        j = i + 1
        while j < len(ordered) and ordered[j] == ordered[j - 1] + 1:
            widths.append(font.width_1000(ordered[j]))
            j += 1
        parts.append(f"{start} [{' '.join(str(w) for w in widths)}]")
        i = j
    return " ".join(parts)


def _build_unicode_font_objs(fonts: FontSet, usage: GlyphUsage) -> tuple[list[bytes], int, int, int]:
    reg_file_id, reg_desc_id, reg_cid_id, reg_type0_id = 3, 4, 5, 6
    bold_file_id, bold_desc_id, bold_cid_id, bold_type0_id = 7, 8, 9, 10
    next_free = 11

    def fontfile_obj(obj_id: int, font: TrueTypeFont) -> bytes:
        data = font.data
        return (
            f"{obj_id} 0 obj << /Length {len(data)} /Length1 {len(data)} >> stream\n".encode("ascii")
            + data
            + b"\nendstream endobj\n"
        )

    def font_descriptor_obj(obj_id: int, fontfile_id: int, font: TrueTypeFont) -> bytes:
        units = int(font.units_per_em or 1000)
        x_min, y_min, x_max, y_max = font.bbox
        bbox = [
            _scale_font_units(x_min, units),
            _scale_font_units(y_min, units),
            _scale_font_units(x_max, units),
            _scale_font_units(y_max, units),
        ]
        ascent = _scale_font_units(int(font.ascent), units)
        descent = _scale_font_units(int(font.descent), units)
        cap_height = ascent
        return (
            f"{obj_id} 0 obj << /Type /FontDescriptor /FontName {font.pdf_name} "
            f"/Flags 32 /FontBBox [{bbox[0]} {bbox[1]} {bbox[2]} {bbox[3]}] "
            f"/ItalicAngle 0 /Ascent {ascent} /Descent {descent} /CapHeight {cap_height} "
            f"/StemV 80 /FontFile2 {fontfile_id} 0 R >> endobj\n"
        ).encode("ascii")

    def cid_font_obj(obj_id: int, desc_id: int, font: TrueTypeFont, gids: set[int]) -> bytes:
        dw = font.width_1000(font.space_gid) or 500
        widths = _format_cid_widths(font, gids)
        w_part = f" /W [{widths}]" if widths else ""
        return (
            f"{obj_id} 0 obj << /Type /Font /Subtype /CIDFontType2 /BaseFont {font.pdf_name} "
            f"/CIDSystemInfo << /Registry (Adobe) /Ordering (Identity) /Supplement 0 >> "
            f"/FontDescriptor {desc_id} 0 R /CIDToGIDMap /Identity /DW {dw}{w_part} >> endobj\n"
        ).encode("ascii")

    def type0_font_obj(obj_id: int, cid_id: int, font: TrueTypeFont) -> bytes:
        return (
            f"{obj_id} 0 obj << /Type /Font /Subtype /Type0 /BaseFont {font.pdf_name}-Identity-H "
            f"/Encoding /Identity-H /DescendantFonts [{cid_id} 0 R] >> endobj\n"
        ).encode("ascii")

    regular, bold = fonts.regular, fonts.bold
    objs = [
        fontfile_obj(reg_file_id, regular),
        font_descriptor_obj(reg_desc_id, reg_file_id, regular),
        cid_font_obj(reg_cid_id, reg_desc_id, regular, usage.gids(fonts, "regular")),
        type0_font_obj(reg_type0_id, reg_cid_id, regular),
        fontfile_obj(bold_file_id, bold),
        font_descriptor_obj(bold_desc_id, bold_file_id, bold),
        cid_font_obj(bold_cid_id, bold_desc_id, bold, usage.gids(fonts, "bold")),
        type0_font_obj(bold_type0_id, bold_cid_id, bold),
    ]
    return objs, reg_type0_id, bold_type0_id, next_free
