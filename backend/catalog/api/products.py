from fastapi import APIRouter, Depends, HTTPException, Query

from catalog.core.deps import get_search_engine
from catalog.schemas.product import ProductDetailResponse, SearchFilters, SearchResponse
from catalog.search.engine import SearchEngine
from catalog.search.pagination import paginate
from catalog.search.query_builder import SearchRequest

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=SearchResponse)
async def list_products(
    q: str | None = Query(None, description="Full-text query"),
    manufacturer: str | None = Query(None),
    category: str | None = Query(None),
    # kept as text so that junk values fall back to page 1 instead of a 422
    page: str | None = Query(None, description="Page number (1-indexed)"),
    engine: SearchEngine = Depends(get_search_engine),
):
    request = SearchRequest.from_params(q=q, manufacturer=manufacturer, category=category, page=page)
    bundle = await engine.search(request)

    return SearchResponse(
        **bundle.model_dump(),
        filters=SearchFilters(
            query=request.text,
            manufacturer=request.manufacturer,
            category=request.category,
        ),
        pagination=paginate(bundle.total_count, request.page, request, path=router.prefix),
    )


@router.get("/{sku:path}", response_model=ProductDetailResponse)
async def get_product(sku: str, engine: SearchEngine = Depends(get_search_engine)):
    product = await engine.get_product(sku)
    if not product:
        raise HTTPException(404, "Product not found")

    # sidebar: the manufacturer's categories
    categories = await engine.categories_for_manufacturer(product.manufacturer)
    return ProductDetailResponse(product=product, categories=categories)
