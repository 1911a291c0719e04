"""Translate a search request into parameterized catalog queries.

Filters are modelled as an ordered list of ``Predicate`` values. ``render_where``
is the only function that turns predicates into SQL, and the result, count and
facet statements all go through it, so a result page and its total can never
disagree about what matches. Every user-supplied value ends up as a bound
parameter; nothing here escapes or concatenates input.

Text matching and ranking follow the index contract in
``catalog.search.text_index``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.sql.elements import ColumnElement

from catalog.core.config import settings
from catalog.core.errors import InvalidRequest
from catalog.models.product import Product
from catalog.search.pagination import clamp_page, page_window

MATCHES = "matches"
EQUALS = "eq"

# Columns a predicate or a facet may refer to.
COLUMNS = {
    "search_vector": Product.search_vector,
    "manufacturer": Product.manufacturer,
    "category": Product.category,
    "sku": Product.sku,
}


def _strip_text(value: str) -> str:
    # PostgreSQL text cannot hold NUL characters
    return value.replace("\x00", "").strip()


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return _strip_text(value) or None


@dataclass(frozen=True)
class SearchRequest:
    """Normalized search input.

    ``text`` is trimmed (empty means no text filter), blank facet values become
    ``None`` and pages below 1 are clamped to 1.
    """

    text: str = ""
    manufacturer: str | None = None
    category: str | None = None
    page: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.page, bool) or not isinstance(self.page, int):
            raise InvalidRequest(f"page must be an integer, got {self.page!r}")
        object.__setattr__(self, "text", _strip_text(self.text or ""))
        object.__setattr__(self, "manufacturer", _clean(self.manufacturer))
        object.__setattr__(self, "category", _clean(self.category))
        object.__setattr__(self, "page", clamp_page(self.page))

    @classmethod
    def from_params(
        cls,
        q: str | None = None,
        manufacturer: str | None = None,
        category: str | None = None,
        page: str | int | None = None,
    ) -> "SearchRequest":
        """Build a request from raw query-string values; junk pages become 1."""
        try:
            page_number = int(page) if page is not None else 1
        except (TypeError, ValueError):
            page_number = 1
        return cls(text=q or "", manufacturer=manufacturer, category=category, page=page_number)

    @property
    def has_text(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class Predicate:
    column: str
    operator: str
    value: Any


def _tsquery(text: str) -> ColumnElement:
    # the regconfig argument is cast and bound by SQLAlchemy, like the text
    return func.plainto_tsquery(settings.SEARCH_LANGUAGE, text)


def build_predicates(request: SearchRequest) -> list[Predicate]:
    """Independent filters of the request, ANDed together by the renderer."""
    predicates = []
    if request.has_text:
        predicates.append(Predicate("search_vector", MATCHES, request.text))
    if request.manufacturer:
        predicates.append(Predicate("manufacturer", EQUALS, request.manufacturer))
    if request.category:
        predicates.append(Predicate("category", EQUALS, request.category))
    return predicates


def render_predicate(predicate: Predicate) -> ColumnElement[bool]:
    try:
        column = COLUMNS[predicate.column]
    except KeyError:
        raise ValueError(f"Unknown predicate column: {predicate.column!r}") from None

    if predicate.operator == EQUALS:
        return column == predicate.value
    if predicate.operator == MATCHES:
        return column.bool_op("@@")(_tsquery(predicate.value))
    raise ValueError(f"Unknown predicate operator: {predicate.operator!r}")


def render_where(predicates: list[Predicate]) -> list[ColumnElement[bool]]:
    """WHERE clauses for ``predicates``; inactive products are always excluded."""
    return [Product.active.is_(True), *(render_predicate(p) for p in predicates)]


def order_by_for(request: SearchRequest) -> list[ColumnElement]:
    """Rank order for text searches, name order otherwise; sku breaks ties."""
    if request.has_text:
        rank = func.ts_rank(Product.search_vector, _tsquery(request.text))
        return [rank.desc(), Product.sku.asc()]
    return [Product.name.asc(), Product.sku.asc()]


def select_products(
    predicates: list[Predicate],
    order_by: list[ColumnElement],
    limit: int,
    offset: int,
) -> Select:
    return (
        select(Product)
        .where(*render_where(predicates))
        .order_by(*order_by)
        .limit(limit)
        .offset(offset)
    )


def count_products(predicates: list[Predicate]) -> Select:
    return select(func.count()).select_from(Product).where(*render_where(predicates))


def group_counts(predicates: list[Predicate], column: str) -> Select:
    """``(value, count)`` rows per distinct ``column`` value, NULLs left out."""
    group_column = COLUMNS[column]
    return (
        select(group_column.label("value"), func.count().label("count"))
        .where(*render_where(predicates), group_column.is_not(None))
        .group_by(group_column)
        .order_by(group_column.asc())
    )


def manufacturer_facet_predicates(request: SearchRequest) -> list[Predicate]:
    # Always the whole active catalog so the navigation does not shift
    # while the user narrows the results.
    return []


def category_facet_predicates(request: SearchRequest) -> list[Predicate] | None:
    """Categories are listed within the selected manufacturer only.

    ``None`` means there is no category facet for this request.
    """
    if not request.manufacturer:
        return None
    return [Predicate("manufacturer", EQUALS, request.manufacturer)]


def results_window(request: SearchRequest) -> tuple[int, int]:
    return page_window(request.page)
