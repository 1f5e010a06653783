"""
Page window computation for ordered collections.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageWindow:
    """A clamped page over ``total_count`` rows plus its navigation links."""

    page_number: int
    total_pages: int
    page_size: int
    total_count: int
    links: Dict[str, str] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


def parse_page(raw: Optional[str]) -> int:
    """
    Parse a ``?page=`` query value. Anything that is not an integer means page 1.
    """
    if raw is None:
        return 1
    try:
        return int(str(raw).strip())
    except ValueError:
        return 1


def paginate(
    requested_page: int,
    total_count: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    base_path: str = "/albums",
) -> PageWindow:
    """
    Compute the page window for ``requested_page``.

    Out-of-range requests are clamped into ``[1, last_page]`` rather than
    rejected. ``last_page`` is at least 1, so an empty collection has one
    empty page.

    Args:
        requested_page: Page the client asked for (any integer)
        total_count: Number of rows in the collection
        page_size: Rows per page
        base_path: Path used to build navigation links

    Returns:
        PageWindow with the clamped page number and links
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")

    last_page = max(math.ceil(total_count / page_size), 1)
    page = min(max(requested_page, 1), last_page)

    links = {}
    if page < last_page:
        links["nextPage"] = f"{base_path}?page={page + 1}"
        links["lastPage"] = f"{base_path}?page={last_page}"
    if page > 1:
        links["prevPage"] = f"{base_path}?page={page - 1}"
        links["firstPage"] = f"{base_path}?page=1"

    return PageWindow(
        page_number=page,
        total_pages=last_page,
        page_size=page_size,
        total_count=total_count,
        links=links,
    )
