"""Test the paginated sources."""

from unittest.mock import AsyncMock

import pytest

from ytmusic_bridge.helpers.paging import Page, PagedData

PAGES = {
    None: Page(["a", "b"], "t1"),
    "t1": Page(["c", "b"], "t2"),
    "t2": Page(["d"], None),
}


async def test_continuous_load_all() -> None:
    """Test all pages are concatenated in order, one producer call per page."""
    producer = AsyncMock(side_effect=lambda token: PAGES[token])
    source = PagedData.continuous(producer)

    assert await source.load_all() == ["a", "b", "c", "b", "d"]
    assert producer.await_count == 3
    assert [call.args[0] for call in producer.await_args_list] == [None, "t1", "t2"]


async def test_continuous_load_first() -> None:
    """Test load_first fetches one page and returns its cursor."""
    producer = AsyncMock(side_effect=lambda token: PAGES[token])
    source = PagedData.continuous(producer)

    page = await source.load_first()

    assert page.items == ["a", "b"]
    assert page.continuation == "t1"
    assert producer.await_count == 1
    assert (await source.load_page(page.continuation)).items == ["c", "b"]


async def test_continuous_failure_not_cached() -> None:
    """Test a failed page is requested again on the next read."""
    producer = AsyncMock(side_effect=[PAGES[None], RuntimeError("boom"), PAGES["t1"], PAGES["t2"]])
    source = PagedData.continuous(producer)

    with pytest.raises(RuntimeError):
        await source.load_all()

    assert await source.load_all() == ["a", "b", "c", "b", "d"]
    assert producer.await_count == 4


async def test_continuous_clear() -> None:
    """Test clearing forgets loaded pages."""
    producer = AsyncMock(side_effect=lambda token: PAGES[token])
    source = PagedData.continuous(producer)

    await source.load_all()
    await source.load_all()
    assert producer.await_count == 3

    source.clear()
    await source.load_first()
    assert producer.await_count == 4


async def test_single_memoized() -> None:
    """Test a single source invokes its producer once."""
    producer = AsyncMock(return_value=[1, 2, 3])
    source = PagedData.single(producer)

    assert await source.load_all() == [1, 2, 3]
    assert await source.load_all() == [1, 2, 3]
    producer.assert_awaited_once()


async def test_single_failure_retried() -> None:
    """Test a failing single producer is invoked again on the next read."""
    producer = AsyncMock(side_effect=[RuntimeError("boom"), [1]])
    source = PagedData.single(producer)

    with pytest.raises(RuntimeError):
        await source.load_all()

    assert await source.load_all() == [1]
    assert producer.await_count == 2


async def test_async_iteration() -> None:
    """Test sources can be iterated lazily."""
    producer = AsyncMock(side_effect=lambda token: PAGES[token])
    source = PagedData.continuous(producer)

    seen = []
    async for item in source:
        seen.append(item)
        if item == "b":
            break

    assert seen == ["a", "b"]
    assert producer.await_count == 1


async def test_instances_independent() -> None:
    """Test two sources over the same producer do not share state."""
    producer = AsyncMock(side_effect=lambda token: PAGES[token])
    first = PagedData.continuous(producer)
    second = PagedData.continuous(producer)

    await first.load_all()
    await second.load_all()

    assert producer.await_count == 6
