from __future__ import annotations

import re
from typing import Any, Optional

from ..logging_utils import get_logger
from .models import SortDirection, SortSpec

logger = get_logger("parser")

# "-name" means "by name, descending". A second dash is never part of the column.
_SORT_PARAM_RE = re.compile(r"\A(-?)([^-]+)\Z")
_WORD_BREAK_RE = re.compile(r"\s+(\S)")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")


def single_value(value: Any) -> Optional[str]:
    # The last value wins for repeated keys, as with Starlette QueryParams.get.
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    return None if value is None else str(value)


def parse_sort_param(raw: Any) -> SortSpec:
    """Decode a sort parameter value such as ``"-created_at"``.

    Malformed values resolve to an empty :class:`SortSpec` rather than raising,
    leaving the default ordering to the caller.
    """

    text = (single_value(raw) or "").strip()
    match = _SORT_PARAM_RE.match(text)
    if match is None:
        if text:
            logger.debug("Ignoring malformed sort parameter %r", raw)
        return SortSpec.empty()
    column = match.group(2).strip()
    if not column:
        return SortSpec.empty()
    direction = SortDirection.DESC if match.group(1) else SortDirection.ASC
    return SortSpec(column=column, direction=direction)


def underscore(word: str) -> str:
    text = _ACRONYM_RE.sub(r"\1_\2", word)
    text = _CAMEL_RE.sub(r"\1_\2", text)
    return text.replace("-", "_").lower()


def column_name_from_title(title: str) -> str:
    """Derive a column name from a human title, ``"Created At"`` -> ``"created_at"``."""

    camelized = _WORD_BREAK_RE.sub(lambda m: m.group(1).upper(), (title or "").strip())
    return underscore(camelized)
