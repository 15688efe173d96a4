# No postponed annotations here: FastAPI reads the signature of a callable-instance
# dependency without the module globals, so `Request` must already be resolved.
import html
from typing import Any, Callable, Collection, Dict, Mapping, Optional
from urllib.parse import urlencode

import pandas as pd
from fastapi import Request

from .links import ParamValue, column_link, normalize_params
from .models import ColumnLinkResult, SortableConfig, SortSpec
from .order import OrderResolver, build_order_clause, order_options, sort_dataset
from .parser import parse_sort_param, single_value

LinkRenderer = Callable[[str, Mapping[str, ParamValue], Mapping[str, str]], str]


def render_link(label: str, target_params: Mapping[str, ParamValue], attributes: Mapping[str, str]) -> str:
    """Default renderer: a relative ``<a>`` carrying only the query string."""

    href = "?" + urlencode(list(target_params.items()), doseq=True)
    attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in attributes.items())
    return f'<a href="{html.escape(href, quote=True)}"{attrs}>{label}</a>'


class SortableRequest:
    """Sortable column helpers bound to the parameters of one request."""

    def __init__(self, params: Any, config: SortableConfig, renderer: LinkRenderer = render_link) -> None:
        # Repeated keys keep all their values so links carry them through.
        self.params: Dict[str, ParamValue] = normalize_params(params)
        self.config = config
        self.renderer = renderer
        self.state: SortSpec = parse_sort_param(single_value(self.params.get(config.sort_param)))

    def order(self, resolver: Optional[OrderResolver] = None) -> Optional[str]:
        return build_order_clause(self.state, resolver)

    def options(self, resolver: Optional[OrderResolver] = None, **options: Any) -> Dict[str, str]:
        return order_options(self.params, self.config, resolver, **options)

    def column(self, title: str, **options: Any) -> ColumnLinkResult:
        return column_link(title, self.state, self.config, self.params, **options)

    def link(self, title: str, **options: Any) -> str:
        result = self.column(title, **options)
        markup = self.renderer(html.escape(title), result.link_params, result.html_attributes())
        if result.indicator_text:
            markup += result.indicator_text
        return markup

    def sort(self, dataset: pd.DataFrame, *, allowed: Optional[Collection[str]] = None) -> pd.DataFrame:
        return sort_dataset(dataset, self.state, allowed=allowed)


class SortableColumns:
    """FastAPI dependency producing a :class:`SortableRequest` per request.

    Usage::

        sortable = SortableColumns(config)

        @app.get("/items")
        def items(columns: SortableRequest = Depends(sortable)): ...
    """

    def __init__(self, config: Optional[SortableConfig] = None, *, renderer: LinkRenderer = render_link) -> None:
        self.config = config if config is not None else SortableConfig()
        self.renderer = renderer

    def __call__(self, request: Request) -> SortableRequest:
        return self.for_params(request.query_params)

    def for_params(self, params: Any) -> SortableRequest:
        return SortableRequest(params, self.config, self.renderer)
