"""Lazy, cursor-driven paginated sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field


@dataclass
class Page[T]:
    """One page of items and the cursor of the next page (None on the last page)."""

    items: list[T] = field(default_factory=list)
    continuation: str | None = None


class PagedData[T](ABC):
    """Lazy sequence of items, fetched page by page on demand.

    Items keep server order within and across pages and are never
    deduplicated. An instance must not be consumed concurrently by two
    callers; separate instances are independent. A failing producer
    propagates to the reader and nothing is cached for that page.
    """

    @staticmethod
    def single(producer: Callable[[], Awaitable[list[T]]]) -> PagedData[T]:
        """Create a source backed by a single, memoised producer call."""
        return SinglePagedData(producer)

    @staticmethod
    def continuous(producer: Callable[[str | None], Awaitable[Page[T]]]) -> PagedData[T]:
        """Create a source backed by a cursor-continued producer."""
        return ContinuousPagedData(producer)

    @abstractmethod
    async def load_page(self, continuation: str | None = None) -> Page[T]:
        """Load the page following ``continuation`` (the first page for None)."""

    @abstractmethod
    def clear(self) -> None:
        """Forget everything loaded so far."""

    async def load_first(self) -> Page[T]:
        """Load the first page only; its continuation resumes the sequence."""
        return await self.load_page(None)

    async def load_all(self) -> list[T]:
        """Load every page and return all items in order."""
        return [item async for item in self]

    async def __aiter__(self) -> AsyncIterator[T]:
        """Iterate over all items, requesting pages strictly one after another."""
        continuation: str | None = None
        while True:
            page = await self.load_page(continuation)
            for item in page.items:
                yield item
            if page.continuation is None:
                return
            continuation = page.continuation


class SinglePagedData[T](PagedData[T]):
    """Source whose producer is invoked at most once."""

    def __init__(self, producer: Callable[[], Awaitable[list[T]]]) -> None:
        """Initialize with a zero-argument producer."""
        self._producer = producer
        self._items: list[T] | None = None

    async def load_page(self, continuation: str | None = None) -> Page[T]:
        """Return the memoised items as one terminal page."""
        if self._items is None:
            self._items = list(await self._producer())
        return Page(list(self._items), None)

    def clear(self) -> None:
        """Forget the memoised result."""
        self._items = None


class ContinuousPagedData[T](PagedData[T]):
    """Source whose pages are chained by service-issued continuation tokens."""

    def __init__(self, producer: Callable[[str | None], Awaitable[Page[T]]]) -> None:
        """Initialize with a producer taking the previous page's token."""
        self._producer = producer
        self._pages: dict[str | None, Page[T]] = {}

    async def load_page(self, continuation: str | None = None) -> Page[T]:
        """Load (or replay) the page following ``continuation``."""
        if (page := self._pages.get(continuation)) is None:
            page = await self._producer(continuation)
            self._pages[continuation] = page
        return Page(list(page.items), page.continuation)

    def clear(self) -> None:
        """Forget all loaded pages."""
        self._pages.clear()
