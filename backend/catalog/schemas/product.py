from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from catalog.search.pagination import PaginationState


# ── Product ──
class ProductSummary(BaseModel):
    sku: str
    name: str
    variant_name: Optional[str] = None
    manufacturer: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    model_config = {"from_attributes": True}


class ProductDetail(ProductSummary):
    manufacturer_number: Optional[str] = None
    product_group: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ── Search ──
class FacetCount(BaseModel):
    name: str
    count: int


class ResultBundle(BaseModel):
    items: list[ProductDetail]
    total_count: int
    manufacturer_facets: list[FacetCount]
    category_facets: list[FacetCount]


class SearchFilters(BaseModel):
    query: str
    manufacturer: Optional[str] = None
    category: Optional[str] = None


class SearchResponse(ResultBundle):
    filters: SearchFilters
    pagination: PaginationState


class ProductDetailResponse(BaseModel):
    product: ProductDetail
    categories: list[FacetCount]
