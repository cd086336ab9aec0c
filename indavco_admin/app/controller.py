"""Adapter, use-case and page wiring for the console runtime.

This module owns lazy construction of the HTTP session, one content adapter
per resource and the page viewmodels that depend on values in
:class:`indavco_admin.viewmodels.settings_vm.SettingsVM`. The web shell asks
it for pages; tests inject a port factory instead of the REST adapter.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ..adapters.content_rest import ContentRestAdapter
from ..adapters.http_client import AuthSession, HttpConfig, RetryingSession
from ..domain.ports import ConfirmFn, ResourcePort
from ..domain.resources import RESOURCES, ResourceDescriptor, descriptor_for
from ..usecases.load_dashboard_stats import LoadDashboardStats
from ..viewmodels.dashboard_vm import DashboardVM
from ..viewmodels.resource_page_vm import ResourcePageVM
from ..viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)

PortFactory = Callable[[ResourceDescriptor], ResourcePort]


class AppController:
    """Create and cache runtime adapters and page viewmodels from settings.

    Call chain:
        ``indavco_admin.web_ui.main`` creates one instance per process and
        asks it for ``page(key)`` / ``new_dashboard()`` when rendering. Changing
        settings must be followed by :meth:`reset`.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        port_factory: Optional[PortFactory] = None,
        confirm: Optional[ConfirmFn] = None,
    ) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Console settings (API base URL, token, timeouts).
            port_factory: Builds the port for a descriptor; defaults to the
                REST adapter over a shared ``RetryingSession``.
            confirm: Default delete confirmation handed to every page.
        """
        self.settings_vm = settings_vm
        self.port_factory = port_factory
        self.confirm = confirm
        self._session: Optional[RetryingSession] = None
        self._ports: Dict[str, ResourcePort] = {}
        self._pages: Dict[str, ResourcePageVM] = {}

    def reset(self) -> None:
        """Drop cached session, adapters and pages so settings apply anew."""
        self._session = None
        self._ports.clear()
        self._pages.clear()

    def ensure_ready(self) -> bool:
        """Return ``False`` when no port can be built (no API base URL)."""
        if self.port_factory is not None:
            return True
        return bool(self.settings_vm.api_base_url)

    @property
    def session(self) -> RetryingSession:
        if self._session is None:
            self._session = RetryingSession(
                AuthSession(token=self.settings_vm.api_token or None),
                HttpConfig(
                    request_timeout_s=self.settings_vm.request_timeout_s,
                    retries=self.settings_vm.retries,
                ),
            )
        return self._session

    def port(self, key: str) -> ResourcePort:
        port = self._ports.get(key)
        if port is None:
            if not self.ensure_ready():
                raise RuntimeError("API base URL is not configured")
            descriptor = descriptor_for(key)
            if self.port_factory is not None:
                port = self.port_factory(descriptor)
            else:
                port = ContentRestAdapter(descriptor, self.session, base_url=self.settings_vm.api_base_url)
            LOGGER.debug("port for %s: %s", key, type(port).__name__)
            self._ports[key] = port
        return port

    def page(self, key: str, *, on_changed: Optional[Callable[[], None]] = None) -> ResourcePageVM:
        page = self._pages.get(key)
        if page is None:
            page = ResourcePageVM(
                descriptor_for(key),
                self.port(key),
                asset_origin=self.settings_vm.asset_origin,
                confirm=self.confirm,
            )
            self._pages[key] = page
        if on_changed is not None:
            page.on_changed = on_changed
        return page

    def new_page(self, key: str, *, confirm: Optional[ConfirmFn] = None) -> ResourcePageVM:
        """Fresh page state for one browser tab (ports stay shared)."""
        return ResourcePageVM(
            descriptor_for(key),
            self.port(key),
            asset_origin=self.settings_vm.asset_origin,
            confirm=confirm or self.confirm,
        )

    def new_dashboard(self, *, on_changed: Optional[Callable[[], None]] = None) -> DashboardVM:
        """Fresh dashboard state for one browser tab (ports stay shared)."""
        ports = {descriptor.key: self.port(descriptor.key) for descriptor in RESOURCES}
        return DashboardVM(LoadDashboardStats(ports), on_changed=on_changed)
