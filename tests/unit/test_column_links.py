import pytest

from libs.sortable_columns import (
    ColumnLinkRequest,
    ConfigurationError,
    MissingColumnError,
    SortableColumns,
    SortableConfig,
    SortDirection,
    SortSpec,
    build_column_link,
    column_link,
    normalize_params,
    parse_sort_param,
)


def test_active_ascending_column_toggles_to_descending():
    result = build_column_link(ColumnLinkRequest(title="Name"), SortSpec("name", SortDirection.ASC), SortableConfig())

    assert result.is_active
    assert result.column == "name"
    assert result.next_sort_value == "-name"
    assert result.indicator_class == "SortedAsc"
    assert result.indicator_text == "&nbsp;&darr;&nbsp;"
    assert result.css_classes == ("SortedAsc",)
    assert result.link_params == {"sort": "-name", "page": "1"}


def test_active_descending_column_toggles_back():
    result = column_link("Created At", SortSpec("created_at", SortDirection.DESC), SortableConfig())

    assert result.is_active
    assert result.next_sort_value == "created_at"
    assert result.indicator_class == "SortedDesc"
    assert result.indicator_text == "&nbsp;&uarr;&nbsp;"


def test_inactive_column_uses_requested_direction_without_indicator():
    current = SortSpec("name", SortDirection.ASC)

    plain = column_link("Price", current, SortableConfig())
    descending = column_link("Price", current, SortableConfig(), direction="desc")

    assert not plain.is_active
    assert plain.next_sort_value == "price"
    assert plain.indicator_text is None
    assert plain.indicator_class is None
    assert plain.css_classes == ()
    assert descending.next_sort_value == "-price"


def test_css_classes_keep_request_class_first():
    result = column_link(
        "Name",
        SortSpec("name", SortDirection.DESC),
        SortableConfig(),
        **{"class": "Header", "style": "width: 10em"},
    )

    assert result.css_classes == ("Header", "SortedDesc")
    assert result.html_attributes() == {"class": "Header SortedDesc", "style": "width: 10em"}


def test_empty_indicator_values_disable_indicator():
    config = SortableConfig().merged(indicator_text={"asc": ""}, indicator_class={"asc": ""})

    result = column_link("Name", SortSpec("name", SortDirection.ASC), config)

    assert result.is_active
    assert result.indicator_text is None
    assert result.indicator_class is None
    assert result.css_classes == ()


def test_link_params_preserve_other_parameters_and_reset_page():
    config = SortableConfig(sort_param="order", page_param="p")
    params = {"q": "lamp", "order": "name", "p": "4"}

    result = column_link("Category", parse_sort_param(params["order"]), config, params)

    assert result.link_params == {"q": "lamp", "order": "category", "p": "1"}
    assert params["p"] == "4"


def test_toggle_is_its_own_inverse():
    config = SortableConfig()
    request = ColumnLinkRequest(title="Name")
    first = build_column_link(request, SortSpec("name", SortDirection.ASC), config)
    second = build_column_link(request, parse_sort_param(first.next_sort_value), config)

    assert parse_sort_param(second.next_sort_value) == SortSpec("name", SortDirection.ASC)


def test_explicit_column_overrides_title_slug():
    result = column_link("Unit Price", SortSpec(), SortableConfig(), column="price")

    assert result.column == "price"


def test_unresolvable_column_raises():
    with pytest.raises(MissingColumnError):
        column_link("", SortSpec(), SortableConfig())
    with pytest.raises(MissingColumnError):
        column_link("Name", SortSpec(), SortableConfig(), column="  ")


def test_unknown_link_option_raises():
    with pytest.raises(ConfigurationError):
        column_link("Name", SortSpec(), SortableConfig(), colour="red")
    with pytest.raises(ConfigurationError):
        column_link("Name", SortSpec(), SortableConfig(), direction="sideways")


def test_sortable_request_renders_anchor_with_indicator():
    columns = SortableColumns().for_params({"q": "lamp", "sort": "name", "page": "3"})

    markup = columns.link("Name", **{"class": "Header"})

    assert markup == (
        '<a href="?q=lamp&amp;sort=-name&amp;page=1" class="Header SortedAsc">Name</a>'
        "&nbsp;&darr;&nbsp;"
    )


def test_sortable_request_escapes_title_and_skips_inactive_indicator():
    columns = SortableColumns().for_params({"sort": "-name"})

    markup = columns.link("Fish & Chips", column="dish")

    assert markup == '<a href="?sort=dish&amp;page=1">Fish &amp; Chips</a>'


def test_custom_renderer_receives_target_params_and_attributes():
    calls = []

    def renderer(label, target_params, attributes):
        calls.append((label, dict(target_params), dict(attributes)))
        return "<link>"

    columns = SortableColumns(renderer=renderer).for_params({"sort": "-price"})

    assert columns.link("Price", style="color: red") == "<link>&nbsp;&uarr;&nbsp;"
    assert calls == [("Price", {"sort": "price", "page": "1"}, {"class": "SortedDesc", "style": "color: red"})]


def test_normalize_params_keeps_repeated_keys():
    pairs = [("sort", "name"), ("tag", "a"), ("tag", "b"), ("q", "lamp")]

    assert normalize_params(pairs) == {"sort": "name", "tag": ["a", "b"], "q": "lamp"}
    assert normalize_params({"tag": ("a", "b"), "page": 2}) == {"tag": ["a", "b"], "page": "2"}
    assert normalize_params(None) == {}


def test_links_carry_every_value_of_repeated_parameters():
    columns = SortableColumns().for_params([("sort", "name"), ("tag", "a"), ("tag", "b")])

    result = columns.column("Category")

    assert result.link_params == {"sort": "category", "tag": ["a", "b"], "page": "1"}
    assert columns.link("Category") == '<a href="?sort=category&amp;tag=a&amp;tag=b&amp;page=1">Category</a>'
    assert columns.state == SortSpec("name", SortDirection.ASC)
