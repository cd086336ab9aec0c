from __future__ import annotations

import asyncio
import logging

from indavco_admin.domain.entities import Service
from indavco_admin.domain.errors import ListLoadError
from indavco_admin.viewmodels.resource_store_vm import ResourceStoreVM


def test_initial_state_loading_and_empty() -> None:
    async def load():
        return []

    store = ResourceStoreVM(load)
    assert store.items == []
    assert store.is_loading is True


def test_reload_replaces_items_and_notifies() -> None:
    notified = []

    async def load():
        return [Service(id="1"), Service(id="2")]

    store = ResourceStoreVM(load, on_changed=lambda: notified.append(True))

    assert asyncio.run(store.reload()) is True
    assert [item.id for item in store.items] == ["1", "2"]
    assert store.is_loading is False
    assert notified == [True]


def test_failed_reload_keeps_previous_items_and_logs(caplog) -> None:
    results = [[Service(id="1")], ListLoadError("LIST_LOAD_FAILED", "offline")]

    async def load():
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    store = ResourceStoreVM(load)
    asyncio.run(store.reload())

    with caplog.at_level(logging.WARNING):
        assert asyncio.run(store.reload()) is False

    assert [item.id for item in store.items] == ["1"]
    assert store.is_loading is False
    assert "offline" in caplog.text


def test_failed_first_load_leaves_empty_list() -> None:
    async def load():
        raise ListLoadError("LIST_LOAD_FAILED", "offline")

    store = ResourceStoreVM(load)
    asyncio.run(store.reload())

    assert store.items == []
    assert store.is_loading is False


def test_superseded_reload_result_is_discarded() -> None:
    async def scenario():
        loop = asyncio.get_running_loop()
        first, second = loop.create_future(), loop.create_future()
        pending = [first, second]

        async def load():
            return await pending.pop(0)

        store = ResourceStoreVM(load)
        older = asyncio.create_task(store.reload())
        await asyncio.sleep(0)
        newer = asyncio.create_task(store.reload())
        await asyncio.sleep(0)

        second.set_result([Service(id="new")])
        assert await newer is True
        first.set_result([Service(id="stale")])
        assert await older is False
        return store

    store = asyncio.run(scenario())

    assert [item.id for item in store.items] == ["new"]


def test_older_success_survives_when_newer_reload_fails() -> None:
    async def scenario():
        loop = asyncio.get_running_loop()
        first, second = loop.create_future(), loop.create_future()
        pending = [first, second]

        async def load():
            return await pending.pop(0)

        store = ResourceStoreVM(load)
        older = asyncio.create_task(store.reload())
        await asyncio.sleep(0)
        newer = asyncio.create_task(store.reload())
        await asyncio.sleep(0)

        first.set_result([Service(id="old")])
        assert await older is True
        second.set_exception(ListLoadError("LIST_LOAD_FAILED", "offline"))
        assert await newer is False
        return store

    store = asyncio.run(scenario())

    assert [item.id for item in store.items] == ["old"]
    assert store.is_loading is False


def test_failure_of_superseded_reload_is_ignored() -> None:
    async def scenario():
        loop = asyncio.get_running_loop()
        first, second = loop.create_future(), loop.create_future()
        pending = [first, second]
        notified = []

        async def load():
            return await pending.pop(0)

        store = ResourceStoreVM(load, on_changed=lambda: notified.append(True))
        older = asyncio.create_task(store.reload())
        await asyncio.sleep(0)
        newer = asyncio.create_task(store.reload())
        await asyncio.sleep(0)

        first.set_exception(ListLoadError("LIST_LOAD_FAILED", "offline"))
        assert await older is False
        assert store.is_loading is True and notified == []
        second.set_result([Service(id="new")])
        assert await newer is True
        return store

    store = asyncio.run(scenario())

    assert [item.id for item in store.items] == ["new"]
