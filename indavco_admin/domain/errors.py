"""Domain-level error types for use-case and adapter mapping.

Three failure families cross layer boundaries without leaking transport
details: list loads (logged only), mutations (shown in the open modal) and
deletions (shown as a notice, list untouched).
"""

from __future__ import annotations

from .ports import UseCaseError


class ListLoadError(UseCaseError):
    """Fetching a resource list failed; the previous list stays visible."""


class MutationError(UseCaseError):
    """Create/update failed; the modal stays open with its form state."""


class DeletionError(UseCaseError):
    """Delete failed; nothing changes in the displayed list."""


__all__ = ["DeletionError", "ListLoadError", "MutationError", "UseCaseError"]
