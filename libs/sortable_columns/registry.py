from __future__ import annotations

from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .config_loader import ConfigureCallback, build_config
from .integration import SortableColumns
from .models import SortableConfig


class SortableRegistry:
    """Activation point for sortable columns, one entry per view name.

    Activating a name twice returns the first instance; the configure
    callback only ever runs on the first activation.
    """

    def __init__(self, base_config: Optional[SortableConfig] = None) -> None:
        self.base_config = base_config if base_config is not None else SortableConfig()
        self._activated: Dict[str, SortableColumns] = {}
        self.logger = get_logger("registry")

    def activate(
        self,
        name: str,
        configure: Optional[ConfigureCallback] = None,
        *,
        config: Optional[SortableConfig] = None,
    ) -> SortableColumns:
        existing = self._activated.get(name)
        if existing is not None:
            self.logger.debug("Sortable columns already active for %s", name)
            return existing
        resolved = config if config is not None else self.base_config
        if configure is not None:
            resolved = build_config(configure, **resolved.model_dump())
        sortable = SortableColumns(resolved)
        self._activated[name] = sortable
        self.logger.info(
            "Activated sortable columns for %s (sort_param=%s page_param=%s)",
            name,
            resolved.sort_param,
            resolved.page_param,
        )
        return sortable

    def get(self, name: str) -> SortableColumns:
        sortable = self._activated.get(name)
        if sortable is None:
            raise KeyError(f"Sortable columns are not activated for '{name}'")
        return sortable

    def available(self) -> List[str]:
        return sorted(self._activated)
