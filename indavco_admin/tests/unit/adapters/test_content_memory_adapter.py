from __future__ import annotations

import asyncio

import pytest

from indavco_admin.adapters.content_memory import ContentMemoryAdapter
from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.entities import Client, Service
from indavco_admin.domain.resources import CLIENTS, SERVICES


def test_crud_roundtrip_keeps_insertion_order() -> None:
    adapter = ContentMemoryAdapter(SERVICES, seed=[Service(id="s1", title="First")])

    async def scenario():
        created = await adapter.create({"title": "Second", "features": ["a", "b"]})
        updated = await adapter.update("s1", {"title": "First!"})
        items = await adapter.get_all()
        return created, updated, items

    created, updated, items = asyncio.run(scenario())

    assert created.features == ("a", "b")
    assert created.icon == "code"
    assert updated.title == "First!"
    assert [item.title for item in items] == ["First!", "Second"]


def test_delete_and_unknown_ids() -> None:
    adapter = ContentMemoryAdapter(SERVICES, seed=[Service(id="s1")])

    asyncio.run(adapter.delete("s1"))

    assert asyncio.run(adapter.get_all()) == []
    with pytest.raises(KeyError):
        asyncio.run(adapter.delete("s1"))
    with pytest.raises(KeyError):
        asyncio.run(adapter.update("missing", {"title": "x"}))


def test_asset_is_stored_as_upload_path_and_kept_on_edit() -> None:
    adapter = ContentMemoryAdapter(CLIENTS)

    async def scenario():
        created = await adapter.create(
            {"name": "ACME", "logo": AssetFile.from_bytes("acme.png", b"png")}
        )
        edited = await adapter.update(created.id, {"name": "ACME Corp"})
        return created, edited

    created, edited = asyncio.run(scenario())

    assert isinstance(created, Client)
    assert created.logo == "/uploads/clients/acme.png"
    assert edited.logo == "/uploads/clients/acme.png"
    assert edited.name == "ACME Corp"
