from __future__ import annotations

import asyncio
import logging

from indavco_admin.domain.entities import Client, Service
from indavco_admin.tests.unit.helpers import StubPort
from indavco_admin.usecases.load_dashboard_stats import LoadDashboardStats
from indavco_admin.viewmodels.dashboard_vm import DashboardVM


def test_counts_per_resource_and_failures_count_zero(caplog) -> None:
    broken = StubPort()
    broken.fail_with["get_all"] = RuntimeError("down")
    ports = {
        "services": StubPort([Service(id="1"), Service(id="2")]),
        "clients": StubPort([Client(id="c")]),
        "blog": broken,
    }

    with caplog.at_level(logging.WARNING):
        counts = asyncio.run(LoadDashboardStats(ports)())

    assert counts == {"services": 2, "clients": 1, "blog": 0}
    assert "blog" in caplog.text


def test_dashboard_vm_refresh_updates_state() -> None:
    notified = []
    vm = DashboardVM(LoadDashboardStats({"services": StubPort([Service(id="1")])}), on_changed=lambda: notified.append(1))

    assert vm.is_loading is True
    asyncio.run(vm.refresh())

    assert vm.is_loading is False
    assert vm.count("services") == 1
    assert vm.count("blog") == 0
    assert notified == [1]
