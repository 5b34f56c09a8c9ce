import json

import pytest

from core.monster_memory import (
    DatasetError,
    MemoryStatus,
    MonsterMemoryCategory,
    categories_to_json,
    load_categories,
    parse_categories,
)


def _write(tmp_path, raw):
    p = tmp_path / "cases.json"
    p.write_text(json.dumps(raw), encoding="utf-8")
    return p


def test_parse_example_dataset(example_categories):
    assert len(example_categories) == 1
    cat = example_categories[0]
    assert isinstance(cat, MonsterMemoryCategory)
    assert cat.name == "Test"
    case = cat.items[0]
    assert case.id == 1
    assert case.info == "Card X"
    assert case.temporary_banished is MemoryStatus.REMEMBERED
    assert case.flip_face_down is MemoryStatus.FORGOTTEN
    assert case.temporary_banished_faqs == ()
    assert case.flip_face_down_faqs[0].sources[0].url == "https://example.com"
    assert case.has_faqs


def test_models_are_immutable(example_categories):
    case = example_categories[0].items[0]
    with pytest.raises(Exception):
        case.info = "changed"
    assert isinstance(example_categories[0].items, tuple)


def test_round_trip_is_lossless(example_raw, multi_raw):
    assert categories_to_json(parse_categories(example_raw)) == example_raw
    assert categories_to_json(parse_categories(multi_raw)) == multi_raw


def test_load_from_file(tmp_path, multi_raw):
    cats = load_categories(_write(tmp_path, multi_raw))
    assert [c.name for c in cats] == ["Effects", "Summons", "Empty"]
    assert [c.id for c in cats[0].items] == [3, 1, 2]


def test_bundled_dataset_loads_and_round_trips(bundled_dataset_path):
    raw = json.loads(bundled_dataset_path.read_text(encoding="utf-8"))
    cats = load_categories(bundled_dataset_path)
    assert cats
    assert categories_to_json(cats) == raw


def test_missing_file(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        load_categories(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    p = tmp_path / "cases.json"
    p.write_text("[{", encoding="utf-8")
    with pytest.raises(DatasetError, match="invalid JSON"):
        load_categories(p)


def test_empty_dataset_rejected():
    with pytest.raises(DatasetError, match="at least one category"):
        parse_categories([])


def test_top_level_must_be_list():
    with pytest.raises(DatasetError, match="expected list"):
        parse_categories({"name": "x", "items": []})


def test_missing_field_names_path(multi_raw):
    del multi_raw[0]["items"][2]["flipFaceDown"]
    with pytest.raises(DatasetError, match=r"\[0\]\.items\[2\]: missing required field 'flipFaceDown'"):
        parse_categories(multi_raw)


def test_wrong_type_names_path(multi_raw):
    multi_raw[1]["items"][0]["info"] = 42
    with pytest.raises(DatasetError, match=r"\[1\]\.items\[0\]\.info: expected string"):
        parse_categories(multi_raw)


def test_unknown_status_rejected(multi_raw):
    multi_raw[0]["items"][0]["temporaryBanished"] = "Maybe"
    with pytest.raises(DatasetError, match="unknown status 'Maybe'"):
        parse_categories(multi_raw)


def test_bool_id_rejected(multi_raw):
    multi_raw[0]["items"][0]["id"] = True
    with pytest.raises(DatasetError, match="expected integer"):
        parse_categories(multi_raw)


def test_faq_source_fields_checked(example_raw):
    del example_raw[0]["items"][0]["flipFaceDownFAQs"][0]["sources"][0]["url"]
    with pytest.raises(DatasetError, match=r"flipFaceDownFAQs\[0\]\.sources\[0\]: missing required field 'url'"):
        parse_categories(example_raw)


def test_duplicate_category_names(multi_raw):
    multi_raw[2]["name"] = "Effects"
    with pytest.raises(DatasetError, match="duplicate category name 'Effects'"):
        parse_categories(multi_raw)


def test_blank_category_name(multi_raw):
    multi_raw[1]["name"] = "   "
    with pytest.raises(DatasetError, match="must not be empty"):
        parse_categories(multi_raw)


def test_duplicate_case_ids(multi_raw):
    multi_raw[0]["items"][1]["id"] = 3
    with pytest.raises(DatasetError, match="duplicate case id 3"):
        parse_categories(multi_raw)


def test_same_case_id_allowed_across_categories(multi_categories):
    assert multi_categories[0].items[1].id == multi_categories[1].items[0].id == 1


def test_dataset_error_is_value_error():
    assert issubclass(DatasetError, ValueError)
