from __future__ import annotations

import pytest

from indavco_admin.domain.entities import Client, CorporatePlan, Service
from indavco_admin.domain.resources import (
    BLOG,
    CLIENTS,
    CORPORATE_PLANS,
    PROJECTS,
    RESOURCES,
    SERVICES,
    descriptor_for,
)


def test_five_resources_with_expected_endpoints() -> None:
    assert [d.endpoint for d in RESOURCES] == [
        "/services",
        "/blog",
        "/projects",
        "/corporate-plans",
        "/clients",
    ]


def test_list_fields_per_resource() -> None:
    assert SERVICES.list_fields == ("features",)
    assert BLOG.list_fields == ("tags",)
    assert PROJECTS.list_fields == ("images", "technologies")
    assert CORPORATE_PLANS.list_fields == ("features",)
    assert CLIENTS.list_fields == ()


def test_create_defaults_match_console() -> None:
    assert SERVICES.defaults() == {
        "title": "",
        "description": "",
        "icon": "code",
        "image": "",
        "features": [""],
        "is_active": True,
        "order": 0,
    }
    plan = CORPORATE_PLANS.defaults()
    assert plan["currency"] == "USD"
    assert plan["billing_period"] == "monthly"
    assert plan["support"] == "básico"
    assert plan["features"] == [""]
    assert BLOG.defaults()["category"] == "Tecnología"
    assert PROJECTS.defaults()["category"] == "Desarrollo Web"


def test_defaults_return_fresh_lists() -> None:
    first = SERVICES.defaults()
    first["features"].append("x")
    assert SERVICES.defaults()["features"] == [""]


def test_only_clients_are_multipart_and_only_blog_has_slug() -> None:
    assert [d.key for d in RESOURCES if d.multipart] == ["clients"]
    assert [d.key for d in RESOURCES if d.slug is not None] == ["blog"]
    assert CLIENTS.asset.required_on_create is True


def test_descriptor_lookup_and_display_title() -> None:
    assert descriptor_for("corporate-plans") is CORPORATE_PLANS
    with pytest.raises(KeyError):
        descriptor_for("users")
    assert CORPORATE_PLANS.display_title(CorporatePlan(id="p1", name="Pro")) == "Pro"
    assert CLIENTS.display_title(Client(id="c1", name="")) == "c1"
    assert SERVICES.display_title(Service(id="s1", title="Cloud")) == "Cloud"


def test_field_lookup_raises_for_unknown_name() -> None:
    assert SERVICES.field("order").kind == "int"
    with pytest.raises(KeyError):
        SERVICES.field("slug")
