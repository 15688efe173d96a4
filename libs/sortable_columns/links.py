from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..logging_utils import get_logger
from .errors import MissingColumnError
from .models import ColumnLinkRequest, ColumnLinkResult, SortableConfig, SortDirection, SortSpec
from .parser import column_name_from_title

logger = get_logger("links")


def resolve_column(request: ColumnLinkRequest) -> str:
    column = request.column if request.column is not None else column_name_from_title(request.title)
    column = (column or "").strip()
    if not column:
        raise MissingColumnError(f"Unable to resolve a column for title {request.title!r}")
    return column


def sort_value(column: str, direction: SortDirection) -> str:
    return f"-{column}" if direction is SortDirection.DESC else column


ParamValue = Union[str, List[str]]


def normalize_params(params: Any) -> Dict[str, ParamValue]:
    """Copy request parameters, keeping every value of a repeated key.

    Accepts a plain mapping, a multi-dict exposing ``multi_items()`` (Starlette
    ``QueryParams``) or a sequence of ``(key, value)`` pairs. Repeated keys end
    up as lists, single keys stay strings.
    """

    if params is None:
        return {}
    if hasattr(params, "multi_items"):
        items: Iterable[Tuple[str, Any]] = params.multi_items()
    elif isinstance(params, Mapping):
        items = params.items()
    else:
        items = params
    merged: Dict[str, ParamValue] = {}
    for key, value in items:
        for item in value if isinstance(value, (list, tuple)) else [value]:
            existing = merged.get(key)
            if existing is None:
                merged[key] = str(item)
            elif isinstance(existing, list):
                existing.append(str(item))
            else:
                merged[key] = [existing, str(item)]
    return merged


def link_params(
    params: Any, config: SortableConfig, next_sort_value: str
) -> Dict[str, ParamValue]:
    """Current parameters with the sort replaced and the page reset to 1."""

    merged = normalize_params(params)
    merged[config.sort_param] = next_sort_value
    merged[config.page_param] = "1"
    return merged


def build_column_link(
    request: ColumnLinkRequest,
    current: SortSpec,
    config: SortableConfig,
    params: Any = None,
) -> ColumnLinkResult:
    column = resolve_column(request)
    is_active = current.column == column
    indicator_text: Optional[str] = None
    indicator_class: Optional[str] = None
    if is_active:
        # Clicking the sorted column flips the order; the indicator shows the current one.
        next_direction = current.direction.opposite()
        indicator_text = config.indicator_text.for_direction(current.direction)
        indicator_class = config.indicator_class.for_direction(current.direction)
    else:
        next_direction = request.direction

    css_classes: List[str] = []
    if request.css_class:
        css_classes.append(request.css_class)
    if indicator_class:
        css_classes.append(indicator_class)

    next_sort_value = sort_value(column, next_direction)
    logger.debug("Column %s active=%s next=%s", column, is_active, next_sort_value)
    return ColumnLinkResult(
        title=request.title,
        column=column,
        next_sort_value=next_sort_value,
        is_active=is_active,
        indicator_text=indicator_text,
        indicator_class=indicator_class,
        css_classes=tuple(css_classes),
        style=request.style,
        link_params=link_params(params, config, next_sort_value),
    )


def column_link(
    title: str,
    current: SortSpec,
    config: SortableConfig,
    params: Any = None,
    **options: Any,
) -> ColumnLinkResult:
    """Keyword flavour of :func:`build_column_link`; unknown options raise ``ConfigurationError``."""

    return build_column_link(ColumnLinkRequest.from_options(title, **options), current, config, params)
