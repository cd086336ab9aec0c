from __future__ import annotations

from indavco_admin.adapters.api_errors import describe_failure, server_message, validation_hint


def test_validation_hint_from_list_items() -> None:
    body = {
        "success": False,
        "errors": [
            {"msg": "is required", "path": "title"},
            {"message": "must be >= 0", "field": "price"},
            "plain text",
        ],
    }
    assert validation_hint(body) == "title: is required; price: must be >= 0; plain text"


def test_validation_hint_from_field_mapping() -> None:
    body = {"errors": {"slug": {"message": "already exists"}, "name": "too long"}}
    assert validation_hint(body) == "slug: already exists; name: too long"


def test_validation_hint_absent_for_plain_envelope() -> None:
    assert validation_hint({"success": False, "message": "nope"}) is None
    assert validation_hint("boom") is None


def test_describe_failure_prefers_backend_message() -> None:
    assert describe_failure("create services", 400, {"message": " bad "}) == "create services: bad (HTTP 400)"
    assert describe_failure("delete blog", 500, "boom") == "delete blog: boom (HTTP 500)"
    assert describe_failure("list plans", 502, None) == "list plans: HTTP 502"
    assert server_message(["not", "a", "dict"]) is None
