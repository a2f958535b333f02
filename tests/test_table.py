import pytest

from cmsops.core.models import Column, ImageCell, TextCell
from cmsops.core.table import (
    CellKind,
    RecordTable,
    filter_records,
    limit_words,
    render_cell,
)

COLUMNS = [Column("name", "Name"), Column("image", "Logo"), Column("note", "Note")]


def _records():
    return [
        {"id": "1", "name": TextCell("Acme Corp"), "image": ImageCell("https://img/acme.png")},
        {"id": "2", "name": "Globex", "note": 42},
        {"id": "3", "name": TextCell("Initech"), "image": TextCell("No image available")},
    ]


def test_filter_empty_query_keeps_all_in_order():
    records = _records()

    assert [r["id"] for r in filter_records(records, "")] == ["1", "2", "3"]


def test_filter_is_case_insensitive_on_text_cells_and_scalars():
    records = _records()

    assert [r["id"] for r in filter_records(records, "ACME")] == ["1"]
    assert [r["id"] for r in filter_records(records, "glob")] == ["2"]
    assert [r["id"] for r in filter_records(records, "42")] == ["2"]


def test_filter_does_not_match_image_urls():
    assert filter_records(_records(), "acme.png") == []


def test_filter_matches_any_cell_including_id():
    assert [r["id"] for r in filter_records(_records(), "3")] == ["3"]


@pytest.mark.parametrize("query", ["", "a", "corp", "no image", "zzz"])
def test_filter_is_idempotent(query: str):
    once = filter_records(_records(), query)

    assert filter_records(once, query) == once


def test_filter_does_not_mutate_input():
    records = _records()
    snapshot = [dict(r) for r in records]

    filter_records(records, "acme")

    assert records == snapshot


def test_limit_words_truncates_long_text_to_exact_limit():
    text = " ".join(f"w{i}" for i in range(30))

    rendered = limit_words(text)

    assert rendered.endswith("...")
    assert rendered[: -len("...")].split(" ") == [f"w{i}" for i in range(20)]


def test_limit_words_keeps_short_text_unchanged():
    text = " ".join(f"w{i}" for i in range(20))

    assert limit_words(text) == text


def test_render_cell_by_shape():
    assert render_cell(ImageCell("https://img/x.png")).kind == CellKind.IMAGE
    assert render_cell(TextCell("hello")).text == "hello"
    assert render_cell(7).text == "7"
    assert render_cell(None).kind == CellKind.PLACEHOLDER
    assert render_cell(None).text == "-"


def test_render_cell_respects_custom_word_limit():
    assert render_cell(TextCell("one two three"), word_limit=2).text == "one two..."


def test_render_row_uses_placeholder_for_missing_keys():
    table = RecordTable(COLUMNS, _records(), base_url="/dashboard/x")

    rows = dict((r["id"], cells) for r, cells in table.rows())

    assert rows["1"][2].text == "-"
    assert rows["2"][1].kind == CellKind.PLACEHOLDER


def test_table_requires_columns():
    with pytest.raises(ValueError, match="column"):
        RecordTable([], [], base_url="/dashboard/x")


def test_table_search_and_set_records_recompute_view():
    table = RecordTable(COLUMNS, _records(), base_url="/dashboard/x")

    assert [r["id"] for r in table.search("init")] == ["3"]

    table.set_records(_records()[:2])

    assert table.records == []
    assert len(table.search("")) == 2


def test_row_activation_navigates_to_detail_route():
    visited: list[str] = []
    table = RecordTable(
        COLUMNS, [{"id": "42"}], base_url="/dashboard/x", navigate=visited.append
    )

    table.activate(table.records[0])

    assert visited == ["/dashboard/x/42"]


def test_row_activation_without_navigate_raises():
    table = RecordTable(COLUMNS, [{"id": "42"}], base_url="/dashboard/x")

    with pytest.raises(RuntimeError):
        table.activate({"id": "42"})
