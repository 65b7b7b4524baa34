"""
Layout and style constants for the invoice template.
Geometry is in millimetres with the origin in the bottom-left corner (PDF convention).
"""

# Page geometry (A4)
PAGE_W, PAGE_H = 210.0, 297.0
MARGIN_X = 10.0
MARGIN_BOTTOM = 10.0
TOP_Y = PAGE_H - 10.5

# Columns
COLUMN_GAP_HALF = 6.25
LEFT_X = MARGIN_X
LEFT_MAX = 110.0 - COLUMN_GAP_HALF
RIGHT_X = 110.0 + COLUMN_GAP_HALF
RIGHT_MAX = PAGE_W - MARGIN_X

LINE_HEIGHT = 5.0

# Heading
HEADING_RULE_W = 84.0
HEADING_RULE_THICKNESS = 2.25
HEADING_SIZE = 17.5
HEADING_HEIGHT = 18.0
HEADING_TITLE = "Faktura"

# Sections
BODY_SIZE = 10.0

# Items table
TABLE_SIZE = 9.2
TABLE_GAP = 5.0
TABLE_PADDING = LINE_HEIGHT * 4.0
ROW_ADVANCE = LINE_HEIGHT * 1.25
TOTAL_SIZE = 16.0
TOTAL_RULE_THICKNESS = 1.5
HEADER_UNIT_PRICE = "CENA ZA MJ"
HEADER_TOTAL = "CELKEM"

# Payment QR + note
QR_SIDE = 40.0
NOTE_SIZE = 8.0
NOTE_Y = 6.0

DATE_FORMAT = "%d. %m. %Y"

# RGB components in 0-1 space
COLORS = {
    "black": (0.0, 0.0, 0.0),
    "gray": (90 / 256, 90 / 256, 90 / 256),
    "light_gray": (200 / 256, 200 / 256, 200 / 256),
}


def color(name: str) -> tuple[float, float, float]:
    return COLORS.get(name, (0.0, 0.0, 0.0))
