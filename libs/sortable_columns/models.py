from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def opposite(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC

    @property
    def sql(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class SortSpec:
    """Decoded state of the sort parameter.

    ``column`` and ``direction`` are either both set or both ``None``.
    """

    column: Optional[str] = None
    direction: Optional[SortDirection] = None

    def __post_init__(self) -> None:
        if (self.column is None) != (self.direction is None):
            raise ValueError("SortSpec requires column and direction to be set together")

    @classmethod
    def empty(cls) -> "SortSpec":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.column is None

    def to_param(self) -> str:
        if self.column is None:
            return ""
        prefix = "-" if self.direction is SortDirection.DESC else ""
        return f"{prefix}{self.column}"


def _check_options(model: type, options: Mapping[str, Any], *, extra_names: Tuple[str, ...] = ()) -> None:
    known = set(model.model_fields) | set(extra_names)
    unknown = sorted(key for key in options if key not in known)
    if unknown:
        raise ConfigurationError(f"Unknown option(s): {unknown}")


class IndicatorMapping(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    asc: str = ""
    desc: str = ""

    def for_direction(self, direction: SortDirection) -> Optional[str]:
        # Empty strings switch the indicator off.
        return getattr(self, direction.value) or None


DEFAULT_INDICATOR_TEXT = {"asc": "&nbsp;&darr;&nbsp;", "desc": "&nbsp;&uarr;&nbsp;"}
DEFAULT_INDICATOR_CLASS = {"asc": "SortedAsc", "desc": "SortedDesc"}


class SortableConfig(BaseModel):
    """Settings shared by every sortable column of one view.

    Built once at activation time and read-only afterwards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    page_param: str = Field("page", min_length=1, description="Query parameter holding the page number")
    sort_param: str = Field("sort", min_length=1, description="Query parameter holding the sort column")
    indicator_text: IndicatorMapping = Field(default_factory=lambda: IndicatorMapping(**DEFAULT_INDICATOR_TEXT))
    indicator_class: IndicatorMapping = Field(default_factory=lambda: IndicatorMapping(**DEFAULT_INDICATOR_CLASS))

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "SortableConfig":
        _check_options(cls, options)
        try:
            return cls(**dict(options))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid sortable columns configuration: {exc}") from exc

    def merged(self, **overrides: Any) -> "SortableConfig":
        """Return a copy with ``overrides`` applied.

        Indicator mappings are merged key by key, so ``indicator_text={"asc": ""}``
        only switches off the ascending marker.
        """

        _check_options(SortableConfig, overrides)
        data = self.model_dump()
        for key, value in overrides.items():
            if isinstance(value, IndicatorMapping):
                value = value.model_dump()
            if isinstance(value, Mapping) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return SortableConfig.from_options(data)


class ColumnLinkRequest(BaseModel):
    """Options of a single sortable column header."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    title: str
    column: Optional[str] = None
    direction: SortDirection = SortDirection.ASC
    css_class: Optional[str] = Field(default=None, alias="class")
    style: Optional[str] = None

    @classmethod
    def from_options(cls, title: str, **options: Any) -> "ColumnLinkRequest":
        _check_options(cls, options, extra_names=("class",))
        try:
            return cls(title=title, **options)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid column options for {title!r}: {exc}") from exc


@dataclass(frozen=True)
class ColumnLinkResult:
    title: str
    column: str
    next_sort_value: str
    is_active: bool
    indicator_text: Optional[str] = None
    indicator_class: Optional[str] = None
    css_classes: Tuple[str, ...] = ()
    style: Optional[str] = None
    link_params: Dict[str, Union[str, List[str]]] = field(default_factory=dict)

    def html_attributes(self) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        if self.css_classes:
            attributes["class"] = " ".join(self.css_classes)
        if self.style:
            attributes["style"] = self.style
        return attributes
