from typing import Any, Dict, List

import pandas as pd
from pandas.io.formats.style import Styler

from ui.monster_memory.constants import (
    COL_FAQ,
    COL_FLIP_FACE_DOWN,
    COL_INFO,
    COL_TEMP_BANISHED,
    FAQ_GLYPH,
    TABLE_COLUMNS,
)
from ui.monster_memory.view import RowView


def _rows_for_table(rows: List[RowView]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for row in rows:
        out.append(
            {
                COL_INFO: row.info,
                COL_TEMP_BANISHED: row.temporary_banished.label,
                COL_FLIP_FACE_DOWN: row.flip_face_down.label,
                COL_FAQ: FAQ_GLYPH,
            }
        )
    return out


def rows_frame(rows: List[RowView]) -> pd.DataFrame:
    df = pd.DataFrame(_rows_for_table(rows), columns=TABLE_COLUMNS)
    df.index = [row.id for row in rows]
    return df


def _cell_css(rows: List[RowView], columns: List[str]) -> pd.DataFrame:
    css: List[List[str]] = []
    for row in rows:
        by_col = {
            COL_INFO: "",
            COL_TEMP_BANISHED: f"color: {row.temporary_banished.color}; font-weight: 500",
            COL_FLIP_FACE_DOWN: f"color: {row.flip_face_down.color}; font-weight: 500",
            COL_FAQ: f"color: {row.faq.color}; font-weight: 700; text-align: center",
        }
        css.append([by_col[c] for c in columns])
    return pd.DataFrame(css, columns=columns, index=[row.id for row in rows])


def style_rows(rows: List[RowView]) -> Styler:
    """Status colours and the FAQ affordance state, per cell."""
    df = rows_frame(rows)
    css = _cell_css(rows, list(df.columns))
    return df.style.apply(lambda _: css, axis=None)
