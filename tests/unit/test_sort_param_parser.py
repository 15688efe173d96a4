import pytest

from libs.sortable_columns import SortDirection, SortSpec, column_name_from_title, parse_sort_param


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("name", SortSpec("name", SortDirection.ASC)),
        ("-name", SortSpec("name", SortDirection.DESC)),
        (" -name ", SortSpec("name", SortDirection.DESC)),
        ("", SortSpec()),
        ("-", SortSpec()),
        ("- name", SortSpec("name", SortDirection.DESC)),
        ("--kaka", SortSpec()),
    ],
)
def test_parse_sort_param(raw, expected):
    assert parse_sort_param(raw) == expected


def test_parse_sort_param_handles_none_and_blank():
    assert parse_sort_param(None).is_empty
    assert parse_sort_param("   ").is_empty
    assert parse_sort_param(" - ").is_empty


def test_parse_sort_param_never_keeps_half_a_spec():
    for raw in [None, "", "-", "--", "a-b", "-a-b", "x", " -y", "-- z", "\t", "name-"]:
        spec = parse_sort_param(raw)
        assert (spec.column is None) == (spec.direction is None)


def test_parse_round_trips_plain_columns():
    for column in ["name", "created_at", "Price", "a b"]:
        assert parse_sort_param(column) == SortSpec(column, SortDirection.ASC)
        assert parse_sort_param("-" + column) == SortSpec(column, SortDirection.DESC)
        assert parse_sort_param(SortSpec(column, SortDirection.DESC).to_param()).column == column


def test_parse_sort_param_takes_last_of_repeated_values():
    assert parse_sort_param(["name", "-price"]) == SortSpec("price", SortDirection.DESC)
    assert parse_sort_param(("-name",)) == SortSpec("name", SortDirection.DESC)
    assert parse_sort_param([]) == SortSpec()


def test_sort_spec_requires_column_and_direction_together():
    with pytest.raises(ValueError):
        SortSpec(column="name")
    with pytest.raises(ValueError):
        SortSpec(direction=SortDirection.ASC)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Product", "product"),
        ("product", "product"),
        ("created_at", "created_at"),
        ("created at", "created_at"),
        ("CreatedAt", "created_at"),
        ("Created At", "created_at"),
    ],
)
def test_column_name_from_title(title, expected):
    assert column_name_from_title(title) == expected


def test_column_name_from_title_keeps_acronyms_together():
    assert column_name_from_title("HTTP Status") == "http_status"
    assert column_name_from_title("  Unit   Price ") == "unit_price"
