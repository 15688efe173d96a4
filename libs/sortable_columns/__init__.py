from .config_loader import build_config, config_to_xml, load_sortable_config, write_config_template
from .errors import ConfigurationError, MissingColumnError, SortableColumnsError, UnknownColumnError
from .integration import SortableColumns, SortableRequest, render_link
from .links import build_column_link, column_link, normalize_params
from .models import ColumnLinkRequest, ColumnLinkResult, SortableConfig, SortDirection, SortSpec
from .order import build_order_clause, order_options, sort_dataset
from .parser import column_name_from_title, parse_sort_param
from .registry import SortableRegistry

__all__ = [
    "build_column_link",
    "build_config",
    "build_order_clause",
    "column_link",
    "column_name_from_title",
    "config_to_xml",
    "ColumnLinkRequest",
    "ColumnLinkResult",
    "ConfigurationError",
    "load_sortable_config",
    "MissingColumnError",
    "normalize_params",
    "order_options",
    "parse_sort_param",
    "render_link",
    "sort_dataset",
    "SortableColumns",
    "SortableColumnsError",
    "SortableConfig",
    "SortableRegistry",
    "SortableRequest",
    "SortDirection",
    "SortSpec",
    "UnknownColumnError",
    "write_config_template",
]
