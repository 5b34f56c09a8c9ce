# ui/monster_memory/render.py
from __future__ import annotations

import asyncio
from typing import Optional, Tuple

import streamlit as st

from core.monster_memory import DATASET_PATH, MonsterMemoryCase, MonsterMemoryCategory, load_categories
from ui.monster_memory.constants import (
    COL_FAQ,
    COL_FLIP_FACE_DOWN,
    COL_INFO,
    COL_TEMP_BANISHED,
    EXPORT_FILE_NAME,
    TABLE_SUBTITLE,
    TABLE_TITLE,
)
from ui.monster_memory.export import SnapshotExporter, trigger_download
from ui.monster_memory.generation import SnapshotTarget, build_snapshot_target
from ui.monster_memory.tables import style_rows
from ui.monster_memory.view import CategoryView, faq_sections, sources_html


@st.cache_resource(show_spinner=False)
def get_categories(path_str: str = str(DATASET_PATH)) -> Tuple[MonsterMemoryCategory, ...]:
    """Dataset for the whole process; shared read-only by every session."""
    return load_categories(path_str)


@st.dialog("FAQ", width="large")
def _faq_dialog(case: MonsterMemoryCase) -> None:
    for title, faqs in faq_sections(case):
        st.markdown(f"#### {title}:")
        for faq in faqs:
            st.markdown("**Q:**")
            st.markdown(faq.question)
            st.markdown("**A:**")
            st.markdown(faq.answer)
            if faq.sources:
                st.markdown("**Sources:**")
                st.markdown(sources_html(faq.sources), unsafe_allow_html=True)
            st.divider()


def _render_header() -> None:
    st.markdown(f"### {TABLE_TITLE.upper()}")
    st.caption(TABLE_SUBTITLE)
    st.button(
        "Save as image",
        icon=":material/download:",
        key="mm_save_image",
        on_click=_request_export,
    )


def _request_export() -> None:
    st.session_state["mm_export_requested"] = True


def _clear_export(ss) -> None:
    ss.pop("mm_export_png", None)
    ss.pop("mm_export_category", None)


def _run_export(ss, target: Optional[SnapshotTarget]) -> None:
    # Debouncing lives in SnapshotExporter; the capture finishes inside this run.
    exporter: SnapshotExporter = ss.setdefault("mm_exporter", SnapshotExporter())
    _clear_export(ss)
    png = asyncio.run(exporter.export(target))
    if png is None:
        st.warning("Could not save the table as an image.")
        return

    nonce = int(ss.get("mm_export_nonce", 0)) + 1
    ss["mm_export_nonce"] = nonce
    ss["mm_export_png"] = png
    ss["mm_export_category"] = target.category
    # Drawn once per export; the component's reply reruns the script without it.
    trigger_download(png, key=f"mm_export_js_{nonce}")


def _render_download(ss, view: CategoryView) -> None:
    png = ss.get("mm_export_png")
    if png is None:
        return
    if ss.get("mm_export_category") != view.selected:
        _clear_export(ss)
        return

    st.download_button(
        "Download again",
        data=png,
        file_name=EXPORT_FILE_NAME,
        mime="image/png",
        on_click="ignore",
        key=f"mm_export_download_{ss.get('mm_export_nonce', 0)}",
    )


def _render_table(ss, view: CategoryView) -> None:
    rows = view.render_rows()
    if not rows:
        st.info("No cases recorded for this category yet.")
        return

    # The table key changes after each handled selection so the row is
    # unselected again once its dialog has been opened.
    nonce = int(ss.get("mm_table_nonce", 0))
    event = st.dataframe(
        style_rows(rows),
        key=f"mm_table_{view.selected}_{nonce}",
        hide_index=True,
        width="stretch",
        on_select="rerun",
        selection_mode="single-row",
        column_config={
            COL_INFO: st.column_config.TextColumn(COL_INFO, width="large"),
            COL_TEMP_BANISHED: st.column_config.TextColumn(COL_TEMP_BANISHED, width="medium"),
            COL_FLIP_FACE_DOWN: st.column_config.TextColumn(COL_FLIP_FACE_DOWN, width="medium"),
            COL_FAQ: st.column_config.TextColumn(COL_FAQ, width="small", help="Select a row to read its FAQ"),
        },
    )

    selected_rows = list(event.selection.rows) if event is not None else []
    if not selected_rows:
        return

    ss["mm_table_nonce"] = nonce + 1
    row = rows[selected_rows[0]]
    if row.faq.has_faqs:
        _faq_dialog(row.case)


def render(categories: Tuple[MonsterMemoryCategory, ...]) -> None:
    ss = st.session_state

    view = CategoryView(categories)
    ss.setdefault("mm_selected_category", view.selected)
    # Session state can outlive a dataset reload; fall back to the first category.
    if ss["mm_selected_category"] not in view.category_names:
        ss["mm_selected_category"] = view.selected

    _render_header()

    choice = st.selectbox(
        "Category",
        options=view.category_names,
        key="mm_selected_category",
        placeholder="Select a category",
        label_visibility="collapsed",
    )
    view.select(choice)

    _render_table(ss, view)

    if ss.pop("mm_export_requested", False):
        _run_export(ss, build_snapshot_target(view))

    _render_download(ss, view)
