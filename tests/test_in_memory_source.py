import pytest

from kv_entity.sources.in_memory import CallableSource, MappingSource


@pytest.mark.asyncio
async def test_mapping_source_get() -> None:
    source = MappingSource({"customers_1_name": "jeswin"})
    assert await source.get("customers_1_name") == "jeswin"


@pytest.mark.asyncio
async def test_mapping_source_missing_returns_none() -> None:
    source = MappingSource()
    assert await source.get("missing") is None


@pytest.mark.asyncio
async def test_mapping_source_close_is_noop() -> None:
    source = MappingSource({"k": "v"})
    await source.close()
    assert await source.get("k") == "v"


@pytest.mark.asyncio
async def test_callable_source_awaits_async_getter() -> None:
    async def getter(key: str) -> str | None:
        return key.upper()

    source = CallableSource(getter)
    assert await source.get("name") == "NAME"


@pytest.mark.asyncio
async def test_callable_source_accepts_sync_getter() -> None:
    source = CallableSource({"name": "jeswin"}.get)
    assert await source.get("name") == "jeswin"
    assert await source.get("age") is None
