from __future__ import annotations

import html
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from libs.logging_utils import configure_logging, log_exception
from libs.sortable_columns import (
    SortableConfig,
    SortableRegistry,
    SortableRequest,
    SortDirection,
    SortSpec,
    UnknownColumnError,
    load_sortable_config,
    sort_dataset,
)

BASE_PATH = Path(__file__).resolve().parents[2]
CONFIG_PATH = (BASE_PATH / "config" / "sortable_columns.xml").resolve()
CATALOG_PATH = (BASE_PATH / "data" / "catalog" / "products.csv").resolve()
PAGE_SIZE = 5

# (title, column) pairs rendered as table headers.
COLUMNS = [
    ("Name", "name"),
    ("Category", "category"),
    ("Price", "price"),
    ("Created At", "created_at"),
]
SORTABLE_COLUMNS = {column for _, column in COLUMNS}
DEFAULT_ORDER = SortSpec(column="name", direction=SortDirection.ASC)

configure_logging()

app = FastAPI(title="Product Catalog", version="0.1.0")
logger = logging.getLogger("catalog")


def _load_config() -> SortableConfig:
    if CONFIG_PATH.exists():
        return load_sortable_config(CONFIG_PATH)
    logger.warning("No sortable columns config at %s, using defaults", CONFIG_PATH)
    return SortableConfig()


registry = SortableRegistry(base_config=_load_config())
products_columns = registry.activate("products")


class ProductPage(BaseModel):
    sort: str = Field("", description="Effective sort parameter, empty when the default order applies")
    order: Optional[str] = Field(None, description="ORDER BY fragment derived from the sort parameter")
    page: int
    pages: int
    rows: List[Dict[str, object]] = Field(default_factory=list)


def _default_order(column: Optional[str], direction: str) -> str:
    # Ties fall back to the default order unless it is already the sort column.
    if column is None or column == DEFAULT_ORDER.column:
        return f"{column or DEFAULT_ORDER.column} {direction}"
    return f"{column} {direction}, {DEFAULT_ORDER.column} {DEFAULT_ORDER.direction.sql}"


def _load_catalog() -> pd.DataFrame:
    try:
        return pd.read_csv(CATALOG_PATH)
    except Exception as exc:
        log_exception(logger, f"Failed to load catalog at {CATALOG_PATH}", exc)
        raise HTTPException(status_code=500, detail="Unable to load catalog") from exc


def _sorted_catalog(columns: SortableRequest) -> pd.DataFrame:
    dataset = sort_dataset(_load_catalog(), DEFAULT_ORDER)
    try:
        return columns.sort(dataset, allowed=SORTABLE_COLUMNS)
    except UnknownColumnError as exc:
        logger.info("Rejected sort parameter %r: %s", columns.state.to_param(), exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _paginate(dataset: pd.DataFrame, page: int) -> tuple[pd.DataFrame, int]:
    pages = max(1, math.ceil(len(dataset) / PAGE_SIZE))
    page = min(max(page, 1), pages)
    start = (page - 1) * PAGE_SIZE
    return dataset.iloc[start : start + PAGE_SIZE], pages


@app.get("/healthz")
def health() -> dict:
    return {"status": "ok"}


@app.get("/api/products", response_model=ProductPage)
def list_products(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    columns: SortableRequest = Depends(products_columns),
) -> ProductPage:
    dataset = _sorted_catalog(columns)
    rows, pages = _paginate(dataset, page)
    return ProductPage(
        sort=columns.state.to_param(),
        order=columns.order(_default_order),
        page=min(page, pages),
        pages=pages,
        rows=rows.to_dict(orient="records"),
    )


@app.get("/products", response_class=HTMLResponse)
def products_page(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    columns: SortableRequest = Depends(products_columns),
) -> HTMLResponse:
    dataset = _sorted_catalog(columns)
    rows, pages = _paginate(dataset, page)
    header = "".join(f"<th>{columns.link(title, column=column)}</th>" for title, column in COLUMNS)
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(str(record[column]))}</td>" for _, column in COLUMNS) + "</tr>"
        for record in rows.to_dict(orient="records")
    )
    document = (
        "<!DOCTYPE html><html><head><title>Products</title></head><body>"
        f"<table><thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>"
        f"<p>Page {min(page, pages)} of {pages}</p>"
        "</body></html>"
    )
    return HTMLResponse(document)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("services.catalog.main:app", host="0.0.0.0", port=8082, reload=True)
