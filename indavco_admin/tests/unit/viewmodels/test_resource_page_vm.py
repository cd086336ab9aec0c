from __future__ import annotations

import asyncio

from indavco_admin.adapters.api_errors import ApiClientError, ApiServerError
from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.entities import BlogPost, Client, Service
from indavco_admin.domain.resources import BLOG, CLIENTS, SERVICES
from indavco_admin.tests.unit.helpers import StubPort
from indavco_admin.viewmodels.resource_page_vm import ResourcePageVM

ORIGIN = "https://indavco-backend.onrender.com"


def test_mount_loads_list() -> None:
    port = StubPort([Service(id="s1")])
    page = ResourcePageVM(SERVICES, port)

    assert page.is_loading is True
    asyncio.run(page.mount())

    assert page.is_loading is False
    assert [item.id for item in page.items] == ["s1"]


def test_successful_create_closes_modal_and_reloads() -> None:
    port = StubPort([Service(id="s1")])
    page = ResourcePageVM(SERVICES, port)
    form = page.open_create()
    form.set_field("title", "Cloud")
    form.update_list_entry("features", 0, "  ")

    assert asyncio.run(page.submit()) is True

    assert page.modal.is_open is False
    assert page.form is None
    assert port.ops() == ["create", "get_all"]
    sent = port.calls[0][1]
    assert sent["title"] == "Cloud"
    assert sent["features"] == []


def test_failed_submit_keeps_modal_open_with_server_message() -> None:
    port = StubPort([Service(id="s1")])
    port.fail_with["update"] = ApiClientError("ctx", status=400, server_message="Título requerido")
    page = ResourcePageVM(SERVICES, port)
    form = page.open_edit(Service(id="s1", title="Old"))
    form.set_field("title", "")

    assert asyncio.run(page.submit()) is False

    assert page.modal.is_open
    assert page.form is form
    assert page.modal.error == "Título requerido"
    assert page.is_submitting is False
    assert port.ops() == ["update"]


def test_blog_edit_submits_recomputed_slug() -> None:
    port = StubPort([BlogPost(id="b1")])
    page = ResourcePageVM(BLOG, port)
    page.open_edit(BlogPost(id="b1", title="Nuevo Título", slug="viejo"))

    asyncio.run(page.submit())

    entity_id, payload = port.calls[0][1]
    assert entity_id == "b1"
    assert payload["slug"] == "nuevo-título"


def test_client_create_without_logo_stays_open() -> None:
    port = StubPort([Client(id="c1")])
    page = ResourcePageVM(CLIENTS, port)
    page.open_create().set_field("name", "ACME")

    assert asyncio.run(page.submit()) is False

    assert page.modal.error == "Logo is required."
    assert port.calls == []


def test_delete_only_after_confirmation_then_reloads() -> None:
    port = StubPort([Service(id="s1")])
    page = ResourcePageVM(SERVICES, port)

    assert asyncio.run(page.delete("s1")) is False
    assert port.calls == []

    assert asyncio.run(page.delete("s1", lambda _prompt: True)) is True
    assert port.ops() == ["delete", "get_all"]


def test_delete_failure_sets_notice_and_keeps_list() -> None:
    port = StubPort([Service(id="s1")])
    page = ResourcePageVM(SERVICES, port, confirm=lambda _prompt: True)
    asyncio.run(page.mount())
    port.fail_with["delete"] = ApiServerError("ctx", status=500)

    assert asyncio.run(page.delete("s1")) is False

    assert page.notice == "Could not delete the service."
    assert [item.id for item in page.items] == ["s1"]
    assert port.ops() == ["get_all", "delete"]

    page.dismiss_notice()
    assert page.notice is None


def test_new_asset_preview_reverts_when_edit_reopened() -> None:
    client = Client(id="c1", name="ACME", logo="/uploads/clients/acme.png")
    page = ResourcePageVM(CLIENTS, StubPort([client]), asset_origin=ORIGIN)

    form = page.open_edit(client)
    asyncio.run(form.select_asset(AssetFile.from_bytes("new.png", b"new")))
    assert form.asset_preview.startswith("data:")
    page.cancel()

    reopened = page.open_edit(client)

    assert reopened.asset_preview == f"{ORIGIN}/uploads/clients/acme.png"
    assert reopened.asset is None


def test_on_changed_fires_for_modal_and_store() -> None:
    events = []
    port = StubPort([Service(id="s1")])
    page = ResourcePageVM(SERVICES, port, on_changed=lambda: events.append(page.modal.mode.value))

    asyncio.run(page.mount())
    page.open_create()
    page.cancel()

    assert events == ["closed", "create", "closed"]
