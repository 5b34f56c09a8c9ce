"""Pure projections of the dataset for the table view.

Nothing here touches Streamlit: the render module feeds these values to
widgets, and the snapshot generator draws them with PIL.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from core.monster_memory import FAQ, MemoryStatus, MonsterMemoryCase, MonsterMemoryCategory, Source
from ui.monster_memory.constants import (
    FAQ_STYLE_AVAILABLE,
    FAQ_STYLE_EMPTY,
    SECTION_FLIP_FACE_DOWN,
    SECTION_TEMP_BANISHED,
    STATUS_STYLES,
)


class UnknownCategoryError(KeyError):
    """Raised when selecting a category name that is not in the dataset."""


class UnmappedStatusError(KeyError):
    """Raised when a status value has no visual treatment."""


@dataclass(frozen=True)
class StatusView:
    label: str
    css_class: str
    color: str


@dataclass(frozen=True)
class FaqAffordance:
    has_faqs: bool
    css_class: str
    color: str


@dataclass(frozen=True)
class RowView:
    id: int
    info: str
    temporary_banished: StatusView
    flip_face_down: StatusView
    faq: FaqAffordance
    case: MonsterMemoryCase


def status_view(status: Any) -> StatusView:
    style = STATUS_STYLES.get(status) if isinstance(status, MemoryStatus) else None
    if style is None:
        raise UnmappedStatusError(f"No visual treatment for status {status!r}")
    return StatusView(label=status.value, css_class=style["css_class"], color=style["color"])


def faq_affordance(case: MonsterMemoryCase) -> FaqAffordance:
    style = FAQ_STYLE_AVAILABLE if case.has_faqs else FAQ_STYLE_EMPTY
    return FaqAffordance(has_faqs=case.has_faqs, css_class=style["css_class"], color=style["color"])


def row_view(case: MonsterMemoryCase) -> RowView:
    return RowView(
        id=case.id,
        info=case.info,
        temporary_banished=status_view(case.temporary_banished),
        flip_face_down=status_view(case.flip_face_down),
        faq=faq_affordance(case),
        case=case,
    )


def faq_sections(case: MonsterMemoryCase) -> List[Tuple[str, Tuple[FAQ, ...]]]:
    """Titled FAQ sections for the dialog; empty axes are left out."""
    sections = []
    if case.temporary_banished_faqs:
        sections.append((SECTION_TEMP_BANISHED, case.temporary_banished_faqs))
    if case.flip_face_down_faqs:
        sections.append((SECTION_FLIP_FACE_DOWN, case.flip_face_down_faqs))
    return sections


def sources_html(sources: Sequence[Source]) -> str:
    items = "".join(
        f'<li><a href="{html.escape(s.url, quote=True)}" target="_blank" '
        f'rel="noopener noreferrer">{html.escape(s.text)}</a></li>'
        for s in sources
    )
    return f'<ul class="faq-sources">{items}</ul>'


class CategoryView:
    """Selected-category state over a read-only list of categories."""

    def __init__(self, categories: Sequence[MonsterMemoryCategory], selected: str | None = None):
        if not categories:
            raise ValueError("CategoryView needs at least one category")
        self._categories = tuple(categories)
        self._by_name = {c.name: c for c in self._categories}
        self._selected = self._categories[0].name
        if selected is not None:
            self.select(selected)

    @property
    def categories(self) -> Tuple[MonsterMemoryCategory, ...]:
        return self._categories

    @property
    def category_names(self) -> List[str]:
        return [c.name for c in self._categories]

    @property
    def selected(self) -> str:
        return self._selected

    @property
    def selected_category(self) -> MonsterMemoryCategory:
        return self._by_name[self._selected]

    def select(self, name: str) -> None:
        # Unknown names are rejected and leave the selection untouched.
        if name not in self._by_name:
            raise UnknownCategoryError(name)
        self._selected = name

    def render_rows(self) -> List[RowView]:
        return [row_view(case) for case in self.selected_category.items]
