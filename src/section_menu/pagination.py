"""Page arithmetic for item lists."""

from __future__ import annotations


class Paginator:
    """Splits an item count into fixed-size pages.

    An empty list still has one (empty) page.

    Args:
        page_size: Items per page.

    Raises:
        ValueError: If page_size is less than 1.
    """

    def __init__(self, page_size: int):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size

    def total_pages(self, item_count: int) -> int:
        return max(1, -(-item_count // self.page_size))

    def bounds(self, page: int, item_count: int) -> tuple[int, int]:
        """Return the half-open [start, end) item range of a page."""
        start = page * self.page_size
        end = min(start + self.page_size, item_count)
        return start, max(start, end)

    def contains(self, page: int, item_count: int) -> bool:
        return 0 <= page < self.total_pages(item_count)
