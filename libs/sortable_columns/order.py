from __future__ import annotations

from typing import Any, Callable, Collection, Dict, Mapping, Optional

import pandas as pd

from ..logging_utils import get_logger
from .errors import ConfigurationError, UnknownColumnError
from .models import SortableConfig, SortDirection, SortSpec
from .parser import parse_sort_param, single_value

logger = get_logger("order")

OrderResolver = Callable[[Optional[str], str], Optional[str]]

ORDER_OPTIONS = ("sort_param",)


def build_order_clause(spec: SortSpec, resolver: Optional[OrderResolver] = None) -> Optional[str]:
    """Turn a parsed sort parameter into an ``ORDER BY`` fragment.

    Without a resolver the column is mapped straight through (``"name DESC"``).
    A resolver receives ``(column, "ASC" | "DESC")`` and returns the clause to
    use. When nothing was requested it gets ``(None, "ASC")``, ascending being
    the default direction. ``None`` or an empty string means there is not
    enough information to decide.
    """

    if resolver is None:
        if spec.is_empty:
            return None
        return f"{spec.column} {spec.direction.sql}"
    direction = spec.direction if spec.direction is not None else SortDirection.ASC
    clause = resolver(spec.column, direction.sql)
    return clause or None


def order_options(
    params: Mapping[str, Any],
    config: SortableConfig,
    resolver: Optional[OrderResolver] = None,
    **options: Any,
) -> Dict[str, str]:
    unknown = sorted(key for key in options if key not in ORDER_OPTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {unknown}")
    sort_param = options.get("sort_param") or config.sort_param
    spec = parse_sort_param(single_value(params.get(sort_param)))
    clause = build_order_clause(spec, resolver)
    if clause is None:
        return {}
    return {"order": clause}


def sort_dataset(dataset: pd.DataFrame, spec: SortSpec, *, allowed: Optional[Collection[str]] = None) -> pd.DataFrame:
    if not isinstance(dataset, pd.DataFrame):
        raise TypeError("Unsupported dataset type for sort")
    if spec.is_empty:
        return dataset
    if allowed is not None and spec.column not in allowed:
        raise UnknownColumnError(f"Column '{spec.column}' is not sortable")
    if spec.column not in dataset.columns:
        raise UnknownColumnError(f"Column '{spec.column}' missing from dataset")
    logger.debug("Sorting %d rows by %s %s", len(dataset), spec.column, spec.direction.sql)
    return dataset.sort_values(spec.column, ascending=spec.direction is SortDirection.ASC, kind="mergesort")
