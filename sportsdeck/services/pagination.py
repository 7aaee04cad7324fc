"""Fixed-size pagination over an ordered list.

Pages are 1-based contiguous slices; concatenating them in order gives
back the backing list exactly. The page map is rebuilt whenever the
backing list changes.
"""

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

PAGE_SIZE = int(os.environ.get("SPORTSDECK_PAGE_SIZE", 6))


def page_count(total: int, page_size: int) -> int:
    """ceil(total / page_size)."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return -(-total // page_size)


def paginate(items: list, page_size: int = PAGE_SIZE) -> dict[int, list]:
    """Split items into {page_number: slice} with 1-based page numbers.

    The last page may be shorter; an empty list has no pages.
    """
    return {
        number: items[(number - 1) * page_size : number * page_size]
        for number in range(1, page_count(len(items), page_size) + 1)
    }


@dataclass
class PagedList:
    """A backing list and its materialized page map."""

    page_size: int = PAGE_SIZE
    items: list = field(default_factory=list)
    pages: dict[int, list] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.items and not self.pages:
            self.pages = paginate(self.items, self.page_size)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator:
        return iter(self.items)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def replace(self, items: list) -> None:
        """Swap the backing list and rebuild every page."""
        self.items = list(items)
        self.pages = paginate(self.items, self.page_size)

    def extend(self, items: list, key: Callable[[Any], str] = lambda item: item.id) -> int:
        """Append items not already present (by key) and repaginate.

        Returns:
            Number of items actually added
        """
        known = {key(item) for item in self.items}
        added = []
        for item in items:
            item_key = key(item)
            if item_key not in known:
                known.add(item_key)
                added.append(item)
        if added:
            self.replace(self.items + added)
        return len(added)

    def clear(self) -> None:
        self.items = []
        self.pages = {}

    def has_page(self, number: int) -> bool:
        return number in self.pages

    def page(self, number: int) -> list:
        return self.pages.get(number, [])

    def find(self, entity_id: str) -> Iterator:
        """Every item on every page whose id matches."""
        for page in self.pages.values():
            for item in page:
                if item.id == entity_id:
                    yield item
