from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from lxml import etree

from ..logging_utils import get_logger
from .errors import ConfigurationError
from .models import SortableConfig

logger = get_logger("config")

ConfigureCallback = Callable[[Dict[str, Any]], None]

ROOT_TAG = "sortableColumns"
ROOT_ATTRIBUTES = {"pageParam": "page_param", "sortParam": "sort_param"}
INDICATOR_ELEMENTS = {"indicatorText": "indicator_text", "indicatorClass": "indicator_class"}

TEMPLATE_COMMENTS = {
    ROOT_TAG: " Sortable columns settings. Load with libs.sortable_columns.load_sortable_config. ",
    "indicatorText": " Markup shown next to the sorted column, keyed by the current direction. ",
    "indicatorClass": " CSS class added to the sorted column link. Leave empty to disable. ",
}


def build_config(configure: Optional[ConfigureCallback] = None, **overrides: Any) -> SortableConfig:
    """Build a config from defaults, ``overrides`` and an optional callback.

    The callback receives the draft options as a plain dict and may mutate it;
    it runs exactly once. Unknown keys fail with ``ConfigurationError``.
    """

    config = SortableConfig().merged(**overrides) if overrides else SortableConfig()
    if configure is None:
        return config
    draft = config.model_dump()
    configure(draft)
    return SortableConfig.from_options(draft)


def _element_options(element, mapping: Dict[str, str]) -> Dict[str, str]:
    opts: Dict[str, str] = {}
    for name, value in element.attrib.items():
        if name not in mapping:
            raise ConfigurationError(f"Unknown attribute '{name}' on <{element.tag}>")
        opts[mapping[name]] = value
    return opts


def _parse_indicator(element) -> Dict[str, str]:
    unknown = sorted(set(element.attrib) - {"asc", "desc"})
    if unknown:
        raise ConfigurationError(f"Unknown attribute(s) {unknown} on <{element.tag}>")
    return {key: element.attrib[key] for key in ("asc", "desc") if key in element.attrib}


def load_sortable_config(path: Path) -> SortableConfig:
    try:
        tree = etree.parse(str(path))
    except (OSError, etree.XMLSyntaxError) as exc:
        raise ConfigurationError(f"Unable to read sortable columns config {path}: {exc}") from exc
    root = tree.getroot()
    if root.tag != ROOT_TAG:
        raise ConfigurationError(f"Root element must be <{ROOT_TAG}>, got <{root.tag}>")
    options: Dict[str, Any] = _element_options(root, ROOT_ATTRIBUTES)
    for child in root:
        if not isinstance(child.tag, str):
            # Comments and processing instructions.
            continue
        key = INDICATOR_ELEMENTS.get(child.tag)
        if key is None:
            raise ConfigurationError(f"Unknown element <{child.tag}> in {path}")
        options[key] = _parse_indicator(child)
    logger.info("Loaded sortable columns config from %s", path)
    return SortableConfig().merged(**options)


def config_to_xml(config: SortableConfig) -> bytes:
    """Serialize ``config`` in the format read by :func:`load_sortable_config`."""

    root = etree.Element(ROOT_TAG, {xml_name: getattr(config, name) for xml_name, name in ROOT_ATTRIBUTES.items()})
    for tag, name in INDICATOR_ELEMENTS.items():
        root.append(etree.Comment(TEMPLATE_COMMENTS[tag]))
        indicator = getattr(config, name)
        etree.SubElement(root, tag, asc=indicator.asc, desc=indicator.desc)
    document = etree.ElementTree(root)
    root.addprevious(etree.Comment(TEMPLATE_COMMENTS[ROOT_TAG]))
    return etree.tostring(document, pretty_print=True, xml_declaration=True, encoding="UTF-8")


def write_config_template(
    path: Path, *, overwrite: bool = False, config: Optional[SortableConfig] = None
) -> Path:
    target = Path(path)
    if target.exists() and not overwrite:
        raise FileExistsError(f"Config {target} already exists")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(config_to_xml(config if config is not None else SortableConfig()))
    logger.info("Wrote sortable columns config template to %s", target)
    return target
