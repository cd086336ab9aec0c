"""NiceGUI entrypoint for the content admin console."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Any, Callable, Dict

from nicegui import ui

from indavco_admin.adapters.storage_local import StorageLocal
from indavco_admin.app.controller import AppController
from indavco_admin.app.demo import demo_port_factory
from indavco_admin.domain.assets import AssetFile
from indavco_admin.domain.resources import RESOURCES, FieldSpec, ResourceDescriptor, descriptor_for
from indavco_admin.utils.logging import apply_console_preferences, configure_root
from indavco_admin.viewmodels.form_vm import FormVM
from indavco_admin.viewmodels.resource_page_vm import ResourcePageVM
from indavco_admin.viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)

TOKEN_ENV = "INDAVCO_ADMIN_API_TOKEN"
_MULTILINE_FIELDS = {"description", "content", "excerpt"}


def _install_theme() -> None:
    """Install global CSS tokens for the console."""
    ui.add_head_html(
        """
<style>
:root {
  --indavco-accent: #1d4ed8;
  --indavco-border: #d4dbe6;
}
.indavco-page { max-width: 1200px; margin: 0 auto; padding: 16px; }
.indavco-card { border: 1px solid var(--indavco-border); border-radius: 12px; }
.indavco-muted { color: #5b6b82; }
</style>
        """
    )


def _notify_error(exc: Exception) -> None:
    """Render exceptions as concise NiceGUI toasts."""
    message = getattr(exc, "message", None) or str(exc)
    ui.notify(message, color="negative", close_button="OK")


def _nav() -> None:
    with ui.row().classes("w-full items-center q-gutter-md q-mb-md"):
        ui.link("Dashboard", "/")
        for descriptor in RESOURCES:
            ui.link(descriptor.key.replace("-", " ").title(), f"/admin/{descriptor.key}")
        ui.link("Settings", "/settings")


async def confirm_dialog(prompt: str) -> bool:
    """Ask a yes/no question in a modal dialog."""
    with ui.dialog() as dialog, ui.card():
        ui.label(prompt)
        with ui.row().classes("q-gutter-sm"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False))
            ui.button("Delete", color="negative", on_click=lambda: dialog.submit(True))
    result = await dialog
    dialog.delete()
    return bool(result)


def _field_widget(form: FormVM, spec: FieldSpec, refresh_form: Callable[[], None]) -> None:
    """Render one editable field bound to ``form``."""
    label = spec.label or spec.name

    def on_change(value: Any) -> None:
        try:
            form.set_field(spec.name, value)
        except ValueError as exc:
            _notify_error(exc)

    value = form.values.get(spec.name)
    if spec.is_list:
        with ui.column().classes("w-full q-gutter-xs"):
            ui.label(label).classes("text-caption indavco-muted")
            for index, entry in enumerate(form.list_slots(spec.name)):
                with ui.row().classes("w-full items-center no-wrap"):
                    ui.input(
                        value=entry,
                        on_change=lambda e, i=index: form.update_list_entry(spec.name, i, str(e.value or "")),
                    ).props("dense outlined").classes("grow")

                    def remove(_, i=index) -> None:
                        if i < len(form.values.get(spec.name) or []):
                            form.remove_list_entry(spec.name, i)
                        refresh_form()

                    ui.button(icon="close", on_click=remove).props("flat dense")

            def add(_) -> None:
                form.add_list_entry(spec.name)
                refresh_form()

            ui.button(f"Add {label.lower()}", icon="add", on_click=add).props("flat dense")
    elif spec.kind == "bool":
        ui.checkbox(label, value=bool(value), on_change=lambda e: on_change(bool(e.value)))
    elif spec.kind in ("int", "float"):
        ui.number(label, value=value, min=spec.min_value, on_change=lambda e: on_change(e.value)).props(
            "dense outlined"
        )
    elif spec.kind == "choice":
        ui.select(list(spec.choices), value=value, label=label, on_change=lambda e: on_change(e.value))
    elif spec.kind == "date":
        ui.input(label, value=value or "", on_change=lambda e: on_change(e.value)).props("type=date dense outlined")
    elif spec.name in _MULTILINE_FIELDS:
        widget = ui.textarea(label, value=value or "", on_change=lambda e: on_change(e.value)).classes("w-full")
        if spec.max_length:
            widget.props(f"counter maxlength={spec.max_length}")
    else:
        ui.input(label, value=value or "", on_change=lambda e: on_change(e.value)).props("dense outlined").classes(
            "w-full"
        )


def _asset_widget(form: FormVM, descriptor: ResourceDescriptor, refresh_form: Callable[[], None]) -> None:
    spec = descriptor.asset
    if spec is None:
        return

    async def on_upload(event) -> None:
        try:
            asset = AssetFile.from_bytes(event.name, event.content.read(), getattr(event, "type", None))
            await form.select_asset(asset)
        except ValueError as exc:
            _notify_error(exc)
            return
        refresh_form()

    ui.label(spec.label or spec.name).classes("text-caption indavco-muted")
    if form.asset_preview:
        ui.image(form.asset_preview).classes("w-32")
    ui.upload(on_upload=on_upload, auto_upload=True, label=f"Choose {spec.label.lower() or 'file'}").props(
        "accept=image/*"
    )


def _build_resource_page(page_vm: ResourcePageVM) -> None:
    descriptor = page_vm.descriptor

    @ui.refreshable
    def render_list() -> None:
        if page_vm.notice:
            with ui.row().classes("items-center"):
                ui.label(page_vm.notice).classes("text-negative")
                ui.button(icon="close", on_click=page_vm.dismiss_notice).props("flat dense")
        if page_vm.is_loading:
            ui.spinner(size="lg")
            return
        if not page_vm.items:
            ui.label(f"No {descriptor.key.replace('-', ' ')} yet.").classes("indavco-muted")
            return
        for entity in page_vm.items:
            with ui.card().classes("w-full indavco-card q-pa-sm"):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label(descriptor.display_title(entity)).classes("text-subtitle1")
                    with ui.row().classes("q-gutter-xs"):
                        ui.button("Edit", on_click=lambda _, e=entity: open_edit(e)).props("flat")
                        ui.button(
                            "Delete",
                            color="negative",
                            on_click=lambda _, i=entity.id: delete(i),
                        ).props("flat")

    @ui.refreshable
    def render_form() -> None:
        form = page_vm.form
        if form is None:
            return
        ui.label(page_vm.modal.title).classes("text-h6")
        if page_vm.modal.error:
            ui.label(page_vm.modal.error).classes("text-negative")
        with ui.column().classes("w-full q-gutter-sm"):
            for spec in descriptor.fields:
                _field_widget(form, spec, render_form.refresh)
            _asset_widget(form, descriptor, render_form.refresh)
        with ui.row().classes("q-gutter-sm q-mt-md"):
            ui.button("Cancel", on_click=cancel)
            ui.button("Save", color="primary", on_click=submit).bind_enabled_from(
                page_vm, "is_submitting", backward=lambda busy: not busy
            )

    with ui.dialog().props("persistent") as dialog, ui.card().classes("w-full max-w-3xl"):
        render_form()

    def refresh_views() -> None:
        render_list.refresh()
        render_form.refresh()
        if page_vm.modal.is_open:
            dialog.open()
        else:
            dialog.close()

    def _invoke(action: Callable[[], Any]) -> None:
        try:
            action()
        except (RuntimeError, ValueError) as exc:
            _notify_error(exc)

    def open_create() -> None:
        _invoke(page_vm.open_create)

    def open_edit(entity) -> None:
        _invoke(lambda: page_vm.open_edit(entity))

    def cancel() -> None:
        _invoke(page_vm.cancel)

    async def submit() -> None:
        if await page_vm.submit():
            ui.notify(f"{descriptor.label.capitalize()} saved", color="positive")

    async def delete(entity_id: str) -> None:
        if await page_vm.delete(entity_id):
            ui.notify(f"{descriptor.label.capitalize()} deleted")

    page_vm.on_changed = refresh_views

    with ui.row().classes("w-full items-center justify-between"):
        ui.label(descriptor.key.replace("-", " ").title()).classes("text-h5")
        ui.button(f"New {descriptor.label}", icon="add", color="primary", on_click=open_create)
    render_list()


def _build_ui(controller: AppController, settings_vm: SettingsVM) -> None:
    """Register the NiceGUI pages."""

    @ui.page("/")
    async def index() -> None:
        with ui.column().classes("indavco-page w-full"):
            _nav()
            dashboard = controller.new_dashboard()

            @ui.refreshable
            def render_counts() -> None:
                with ui.row().classes("q-gutter-md"):
                    for descriptor in RESOURCES:
                        with ui.card().classes("indavco-card q-pa-md"):
                            ui.label(descriptor.key.replace("-", " ").title()).classes("indavco-muted")
                            text = "…" if dashboard.is_loading else str(dashboard.count(descriptor.key))
                            ui.label(text).classes("text-h4")

            dashboard.on_changed = render_counts.refresh
            render_counts()
        await dashboard.refresh()

    @ui.page("/admin/{key}")
    async def resource_page(key: str) -> None:
        try:
            descriptor_for(key)
        except KeyError:
            ui.label(f"Unknown resource '{key}'")
            return
        with ui.column().classes("indavco-page w-full"):
            _nav()
            page_vm = controller.new_page(key, confirm=confirm_dialog)
            _build_resource_page(page_vm)
        await page_vm.mount()

    @ui.page("/settings")
    def settings_page() -> None:
        inputs: Dict[str, Any] = {}

        def save() -> None:
            try:
                settings_vm.apply_dict(
                    {
                        "api_base_url": str(inputs["api_base_url"].value or ""),
                        "asset_origin": str(inputs["asset_origin"].value or ""),
                        "request_timeout_s": inputs["request_timeout_s"].value,
                        "retries": inputs["retries"].value,
                        "api_token": inputs["api_token"].value,
                        "debug_logging": bool(inputs["debug_logging"].value),
                    }
                )
                settings_vm.cmd_save()
            except (OSError, ValueError) as exc:
                _notify_error(exc)
                return
            controller.reset()
            apply_console_preferences(settings_vm.debug_logging)
            ui.notify("Settings saved", color="positive")

        with ui.column().classes("indavco-page w-full q-gutter-sm"):
            _nav()
            inputs["api_base_url"] = ui.input("API base URL", value=settings_vm.api_base_url).classes("w-96")
            inputs["asset_origin"] = ui.input("Asset origin", value=settings_vm.asset_origin).classes("w-96")
            inputs["request_timeout_s"] = ui.number("Request timeout (s)", value=settings_vm.request_timeout_s)
            inputs["retries"] = ui.number("Retries", value=settings_vm.retries)
            inputs["api_token"] = ui.input(
                "API token", value=settings_vm.api_token, password=True, password_toggle_button=True
            ).classes("w-96")
            inputs["debug_logging"] = ui.checkbox("Enable debug logging", value=settings_vm.debug_logging)
            ui.button("Save", color="primary", on_click=save)


def build_settings(settings_dir: str) -> tuple[SettingsVM, StorageLocal]:
    """Load persisted settings and apply the environment token override."""
    storage = StorageLocal(settings_dir)
    settings_vm = SettingsVM(on_save=storage.save_user_settings)
    settings_vm.apply_dict(storage.load_user_settings())
    token = os.environ.get(TOKEN_ENV, "").strip()
    if token:
        settings_vm.api_token = token
    return settings_vm, storage


async def _smoke(controller: AppController) -> Dict[str, int]:
    pages = [controller.page(descriptor.key) for descriptor in RESOURCES]
    await asyncio.gather(*(page.mount() for page in pages))
    return {page.descriptor.key: len(page.items) for page in pages}


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for the console startup."""
    parser = argparse.ArgumentParser(description="Run the Indavco content admin console.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--settings-dir", default=".")
    parser.add_argument("--demo", action="store_true", help="serve seeded in-memory content")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI console."""
    args = _parse_args()
    configure_root()
    settings_vm, _storage = build_settings(args.settings_dir)
    apply_console_preferences(settings_vm.debug_logging)
    factory = demo_port_factory(latency_s=0.0 if args.smoke_test else 0.2) if args.demo else None
    controller = AppController(settings_vm, port_factory=factory)
    if args.smoke_test:
        counts = asyncio.run(_smoke(controller))
        print("web-smoke-ok", sorted(counts.items()))
        return
    LOGGER.info("Starting console against %s", "demo data" if args.demo else settings_vm.api_base_url)
    _install_theme()
    _build_ui(controller, settings_vm)
    ui.run(
        host=args.host,
        port=args.port,
        title="Indavco Admin",
        reload=args.reload,
        show=False,
        storage_secret=os.environ.get("INDAVCO_ADMIN_STORAGE_SECRET", "indavco-admin-secret"),
    )


if __name__ == "__main__":
    main()
