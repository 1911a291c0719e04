from catalog.schemas.product import (
    ProductSummary, ProductDetail, FacetCount, ResultBundle,
    SearchFilters, SearchResponse, ProductDetailResponse,
)

__all__ = [
    "ProductSummary", "ProductDetail", "FacetCount", "ResultBundle",
    "SearchFilters", "SearchResponse", "ProductDetailResponse",
]
