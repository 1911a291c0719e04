"""Search Engine: the single entry point for catalog reads.

Runs the result, count and facet queries for one request inside one store
session and assembles a ``ResultBundle``. No caching: every call hits the
store. ``StoreUnavailable`` propagates unchanged.
"""

from __future__ import annotations

import logging

from catalog.schemas.product import FacetCount, ProductDetail, ResultBundle
from catalog.search import query_builder
from catalog.search.query_builder import Predicate, SearchRequest
from catalog.search.store import CatalogReader, CatalogStore

logger = logging.getLogger(__name__)


def _facets(rows: list[tuple[str, int]]) -> list[FacetCount]:
    return [FacetCount(name=value, count=count) for value, count in rows]


class SearchEngine:
    def __init__(self, store: CatalogStore):
        self._store = store

    async def search(self, request: SearchRequest) -> ResultBundle:
        """Results, total and facets for ``request``. Zero matches is not an error."""
        predicates = query_builder.build_predicates(request)
        limit, offset = query_builder.results_window(request)

        async with self._store.reader() as reader:
            total_count = await reader.count_active_products(predicates)

            items = []
            if offset < total_count:
                items = await reader.query_active_products(
                    predicates, query_builder.order_by_for(request), limit, offset
                )

            manufacturer_facets = await reader.group_count(
                query_builder.manufacturer_facet_predicates(request), "manufacturer"
            )
            category_facets = await self._category_facets(
                reader, query_builder.category_facet_predicates(request)
            )

        logger.debug(
            "Search text=%r manufacturer=%r category=%r page=%s -> %s results",
            request.text,
            request.manufacturer,
            request.category,
            request.page,
            total_count,
        )
        return ResultBundle(
            items=[ProductDetail.model_validate(p) for p in items],
            total_count=total_count,
            manufacturer_facets=_facets(manufacturer_facets),
            category_facets=category_facets,
        )

    async def get_product(self, sku: str) -> ProductDetail | None:
        """Active product with exactly this SKU, or None."""
        async with self._store.reader() as reader:
            product = await reader.get_active_by_sku(sku)
        if product is None:
            return None
        return ProductDetail.model_validate(product)

    async def categories_for_manufacturer(self, manufacturer: str) -> list[FacetCount]:
        request = SearchRequest(manufacturer=manufacturer)
        async with self._store.reader() as reader:
            return await self._category_facets(
                reader, query_builder.category_facet_predicates(request)
            )

    async def ping(self) -> None:
        async with self._store.reader() as reader:
            await reader.ping()

    @staticmethod
    async def _category_facets(
        reader: CatalogReader, predicates: list[Predicate] | None
    ) -> list[FacetCount]:
        if predicates is None:
            return []
        return _facets(await reader.group_count(predicates, "category"))
