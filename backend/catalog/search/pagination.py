"""Fixed-size pagination shared by the listing and the search."""

from __future__ import annotations

import math
import urllib.parse
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from catalog.search.query_builder import SearchRequest

PAGE_SIZE = 48


class PaginationState(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    page_size: int = PAGE_SIZE
    has_prev: bool
    has_next: bool
    prev_page: int | None = None
    next_page: int | None = None
    prev_link: str | None = None
    next_link: str | None = None


def clamp_page(page: int) -> int:
    return page if page >= 1 else 1


def page_window(page: int) -> tuple[int, int]:
    """(limit, offset) of a 1-indexed page."""
    return PAGE_SIZE, (clamp_page(page) - 1) * PAGE_SIZE


def total_pages_for(total_count: int) -> int:
    # 0 results means 0 pages, not one empty page
    if total_count <= 0:
        return 0
    return math.ceil(total_count / PAGE_SIZE)


def page_link(request: "SearchRequest", page: int, path: str = "/products") -> str:
    """Link to ``page`` keeping every active filter of ``request``."""
    params: list[tuple[str, str | int]] = []
    if request.text:
        params.append(("q", request.text))
    if request.manufacturer:
        params.append(("manufacturer", request.manufacturer))
    if request.category:
        params.append(("category", request.category))
    params.append(("page", page))
    return f"{path}?{urllib.parse.urlencode(params)}"


def paginate(
    total_count: int,
    page: int,
    request: "SearchRequest | None" = None,
    path: str = "/products",
) -> PaginationState:
    """Derive navigation state from the total count and current page.

    Links are only filled in when the originating ``request`` is given.
    """
    page = clamp_page(page)
    total_pages = total_pages_for(total_count)
    has_prev = page > 1
    has_next = page < total_pages
    # past the end, step back to the last real page
    prev_page = min(page - 1, max(total_pages, 1)) if has_prev else None
    next_page = page + 1 if has_next else None

    prev_link = next_link = None
    if request is not None:
        if prev_page is not None:
            prev_link = page_link(request, prev_page, path)
        if next_page is not None:
            next_link = page_link(request, next_page, path)

    return PaginationState(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        has_prev=has_prev,
        has_next=has_next,
        prev_page=prev_page,
        next_page=next_page,
        prev_link=prev_link,
        next_link=next_link,
    )
