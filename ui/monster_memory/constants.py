from typing import Dict

from core.monster_memory import MemoryStatus


PAGE_TITLE = "Monster Memory Cases"
TABLE_TITLE = (
    "Information that monster(s) remembers or forgets after being "
    "temporary banished or flipped face-down"
)
TABLE_SUBTITLE = (
    "The information on this page is sourced from the OCG. "
    "Some or all of it may not apply to the TCG."
)
CONTRIBUTE_URL = "https://github.com/satellaa/monster-memory-cases"
CONTRIBUTE_LABEL = "Contribute information to the project"

COL_INFO = "Information on the card"
COL_TEMP_BANISHED = "Temporary Banished"
COL_FLIP_FACE_DOWN = "Flipped Face-down"
COL_FAQ = "FAQ"
TABLE_COLUMNS = [COL_INFO, COL_TEMP_BANISHED, COL_FLIP_FACE_DOWN, COL_FAQ]

SECTION_TEMP_BANISHED = "Temporary Banished"
SECTION_FLIP_FACE_DOWN = "Flipped Face-Down"

# (css class, hex colour) per status
STATUS_STYLES: Dict[MemoryStatus, Dict[str, str]] = {
    MemoryStatus.REMEMBERED: {"css_class": "status-remembered", "color": "#2563eb"},
    MemoryStatus.FORGOTTEN: {"css_class": "status-forgotten", "color": "#dc2626"},
    MemoryStatus.REFER_TO_RULING: {"css_class": "status-refer", "color": "#fb923c"},
}

FAQ_GLYPH = "?"
FAQ_STYLE_AVAILABLE = {"css_class": "faq-available", "color": "#2563eb"}
FAQ_STYLE_EMPTY = {"css_class": "faq-empty", "color": "#000000"}

EXPORT_FILE_NAME = "monster-memory-table.png"
EXPORT_SCALE = 2
