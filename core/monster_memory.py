"""Monster memory dataset: models and loader.

The dataset is a JSON list of categories. Each category holds cases
describing what a monster remembers or forgets after being temporarily
banished or flipped face-down.

JSON schema (example):

[
  {
    "name": "Effects",
    "items": [
      {
        "id": 1,
        "info": "Once per turn effects",
        "temporaryBanished": "Forgotten",
        "flipFaceDown": "Forgotten",
        "temporaryBanishedFAQs": [],
        "flipFaceDownFAQs": [
          {
            "question": "...",
            "answer": "...",
            "sources": [{ "text": "Ruling", "url": "https://..." }]
          }
        ]
      }
    ]
  }
]

Everything returned by the loader is immutable (frozen dataclasses and
tuples). Malformed data raises `DatasetError` naming the offending path.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

DATASET_PATH = Path("data/cases.json")

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when the bundled dataset is missing or malformed."""


class MemoryStatus(Enum):
    REMEMBERED = "Remembered"
    FORGOTTEN = "Forgotten"
    REFER_TO_RULING = "Refer to ruling"


@dataclass(frozen=True)
class Source:
    text: str
    url: str


@dataclass(frozen=True)
class FAQ:
    question: str
    answer: str
    sources: Tuple[Source, ...] = ()


@dataclass(frozen=True)
class MonsterMemoryCase:
    id: int
    info: str
    temporary_banished: MemoryStatus
    flip_face_down: MemoryStatus
    temporary_banished_faqs: Tuple[FAQ, ...] = ()
    flip_face_down_faqs: Tuple[FAQ, ...] = ()

    @property
    def has_faqs(self) -> bool:
        return bool(self.temporary_banished_faqs or self.flip_face_down_faqs)


@dataclass(frozen=True)
class MonsterMemoryCategory:
    name: str
    items: Tuple[MonsterMemoryCase, ...] = ()


# -------------------------------------------------------------
# Field readers
# -------------------------------------------------------------
def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise DatasetError(f"{where}: missing required field {key!r}")
    return obj[key]


def _str_field(obj: Dict[str, Any], key: str, where: str) -> str:
    val = _require(obj, key, where)
    if not isinstance(val, str):
        raise DatasetError(f"{where}.{key}: expected string, got {type(val).__name__}")
    return val


def _list_field(obj: Dict[str, Any], key: str, where: str) -> List[Any]:
    val = _require(obj, key, where)
    if not isinstance(val, list):
        raise DatasetError(f"{where}.{key}: expected list, got {type(val).__name__}")
    return val


def _as_dict(val: Any, where: str) -> Dict[str, Any]:
    if not isinstance(val, dict):
        raise DatasetError(f"{where}: expected object, got {type(val).__name__}")
    return val


def _status_field(obj: Dict[str, Any], key: str, where: str) -> MemoryStatus:
    raw = _str_field(obj, key, where)
    try:
        return MemoryStatus(raw)
    except ValueError:
        allowed = ", ".join(repr(s.value) for s in MemoryStatus)
        raise DatasetError(f"{where}.{key}: unknown status {raw!r} (expected one of {allowed})") from None


# -------------------------------------------------------------
# Parsing
# -------------------------------------------------------------
def _parse_source(raw: Any, where: str) -> Source:
    obj = _as_dict(raw, where)
    return Source(text=_str_field(obj, "text", where), url=_str_field(obj, "url", where))


def _parse_faq(raw: Any, where: str) -> FAQ:
    obj = _as_dict(raw, where)
    sources = _list_field(obj, "sources", where)
    return FAQ(
        question=_str_field(obj, "question", where),
        answer=_str_field(obj, "answer", where),
        sources=tuple(_parse_source(s, f"{where}.sources[{i}]") for i, s in enumerate(sources)),
    )


def _parse_faqs(obj: Dict[str, Any], key: str, where: str) -> Tuple[FAQ, ...]:
    faqs = _list_field(obj, key, where)
    return tuple(_parse_faq(f, f"{where}.{key}[{i}]") for i, f in enumerate(faqs))


def _parse_case(raw: Any, where: str) -> MonsterMemoryCase:
    obj = _as_dict(raw, where)
    case_id = _require(obj, "id", where)
    # bool is an int subclass; reject it explicitly
    if isinstance(case_id, bool) or not isinstance(case_id, int):
        raise DatasetError(f"{where}.id: expected integer, got {type(case_id).__name__}")
    return MonsterMemoryCase(
        id=case_id,
        info=_str_field(obj, "info", where),
        temporary_banished=_status_field(obj, "temporaryBanished", where),
        flip_face_down=_status_field(obj, "flipFaceDown", where),
        temporary_banished_faqs=_parse_faqs(obj, "temporaryBanishedFAQs", where),
        flip_face_down_faqs=_parse_faqs(obj, "flipFaceDownFAQs", where),
    )


def _parse_category(raw: Any, where: str) -> MonsterMemoryCategory:
    obj = _as_dict(raw, where)
    name = _str_field(obj, "name", where)
    if not name.strip():
        raise DatasetError(f"{where}.name: category name must not be empty")

    items = _list_field(obj, "items", where)
    cases = tuple(_parse_case(c, f"{where}.items[{i}]") for i, c in enumerate(items))

    seen = set()
    for i, case in enumerate(cases):
        if case.id in seen:
            raise DatasetError(f"{where}.items[{i}].id: duplicate case id {case.id} in category {name!r}")
        seen.add(case.id)

    return MonsterMemoryCategory(name=name, items=cases)


def parse_categories(raw: Any) -> Tuple[MonsterMemoryCategory, ...]:
    """Validate an already-decoded dataset and build the immutable model."""
    if not isinstance(raw, list):
        raise DatasetError(f"dataset: expected list of categories, got {type(raw).__name__}")
    if not raw:
        raise DatasetError("dataset: at least one category is required")

    categories = tuple(_parse_category(c, f"[{i}]") for i, c in enumerate(raw))

    names = set()
    for i, cat in enumerate(categories):
        if cat.name in names:
            raise DatasetError(f"[{i}].name: duplicate category name {cat.name!r}")
        names.add(cat.name)

    return categories


def load_categories(path: Optional[str | Path] = None) -> Tuple[MonsterMemoryCategory, ...]:
    """Load and validate the dataset file.

    Fails fast with `DatasetError`; there is no partial load.
    """
    src = Path(path) if path else DATASET_PATH
    if not src.exists():
        raise DatasetError(f"Dataset file not found: {src}")

    try:
        with src.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{src}: invalid JSON ({exc})") from exc

    categories = parse_categories(raw)
    logger.info(
        "Loaded %d categories (%d cases) from %s",
        len(categories),
        sum(len(c.items) for c in categories),
        src,
    )
    return categories


# -------------------------------------------------------------
# Serialization
# -------------------------------------------------------------
def _faq_to_json(faq: FAQ) -> Dict[str, Any]:
    return {
        "question": faq.question,
        "answer": faq.answer,
        "sources": [{"text": s.text, "url": s.url} for s in faq.sources],
    }


def case_to_json(case: MonsterMemoryCase) -> Dict[str, Any]:
    return {
        "id": case.id,
        "info": case.info,
        "temporaryBanished": case.temporary_banished.value,
        "flipFaceDown": case.flip_face_down.value,
        "temporaryBanishedFAQs": [_faq_to_json(f) for f in case.temporary_banished_faqs],
        "flipFaceDownFAQs": [_faq_to_json(f) for f in case.flip_face_down_faqs],
    }


def categories_to_json(categories: Tuple[MonsterMemoryCategory, ...]) -> List[Dict[str, Any]]:
    """Inverse of `parse_categories`: back to the on-disk schema."""
    return [
        {"name": cat.name, "items": [case_to_json(c) for c in cat.items]}
        for cat in categories
    ]
