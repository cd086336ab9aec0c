"""URL slug derivation for titled content (blog posts)."""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """Return a URL slug for ``title``.

    ``\\w`` is Unicode-aware for ``str`` patterns, so accented letters survive
    untransliterated (``"Innovación"`` -> ``"innovación"``).
    """

    text = (title or "").lower()
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


__all__ = ["slugify"]
