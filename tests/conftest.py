import copy
from pathlib import Path

import pytest

from core.monster_memory import parse_categories

BUNDLED_DATASET = Path(__file__).resolve().parents[1] / "data" / "cases.json"

EXAMPLE_RAW = [
    {
        "name": "Test",
        "items": [
            {
                "id": 1,
                "info": "Card X",
                "temporaryBanished": "Remembered",
                "flipFaceDown": "Forgotten",
                "temporaryBanishedFAQs": [],
                "flipFaceDownFAQs": [
                    {
                        "question": "Q1",
                        "answer": "A1",
                        "sources": [{"text": "Ruling", "url": "https://example.com"}],
                    }
                ],
            }
        ],
    }
]


def _case(case_id, info, tb="Remembered", ffd="Forgotten", tb_faqs=0, ffd_faqs=0):
    def _faqs(n, prefix):
        return [
            {"question": f"{prefix} Q{i}", "answer": f"{prefix} A{i}", "sources": []}
            for i in range(n)
        ]

    return {
        "id": case_id,
        "info": info,
        "temporaryBanished": tb,
        "flipFaceDown": ffd,
        "temporaryBanishedFAQs": _faqs(tb_faqs, "TB"),
        "flipFaceDownFAQs": _faqs(ffd_faqs, "FFD"),
    }


MULTI_RAW = [
    {
        "name": "Effects",
        "items": [
            _case(3, "Once per turn", "Forgotten", "Forgotten", tb_faqs=2, ffd_faqs=3),
            _case(1, "Hard once per turn", "Remembered", "Remembered"),
            _case(2, "ATK changes", "Refer to ruling", "Forgotten", ffd_faqs=1),
        ],
    },
    {"name": "Summons", "items": [_case(1, "Special Summoned", "Refer to ruling", "Remembered", tb_faqs=1)]},
    {"name": "Empty", "items": []},
]


@pytest.fixture
def example_raw():
    return copy.deepcopy(EXAMPLE_RAW)


@pytest.fixture
def example_categories():
    return parse_categories(copy.deepcopy(EXAMPLE_RAW))


@pytest.fixture
def multi_raw():
    return copy.deepcopy(MULTI_RAW)


@pytest.fixture
def multi_categories():
    return parse_categories(copy.deepcopy(MULTI_RAW))


@pytest.fixture
def make_case():
    return _case


@pytest.fixture
def bundled_dataset_path():
    return BUNDLED_DATASET
