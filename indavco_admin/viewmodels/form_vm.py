"""Editable form state for one entity of any resource type.

``FormVM`` is a staging area: it is created when the modal opens, either with
defaults (Create) or hydrated from an entity (Edit), and is discarded when
the modal closes. Only the output of :meth:`FormVM.normalize` is ever sent to
the API.

List fields always offer at least one slot for typing. Empty and
whitespace-only entries are kept while the user edits and are dropped in
``normalize`` only.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..domain.assets import AssetFile, encode_data_url, stored_asset_url
from ..domain.entities import Entity
from ..domain.resources import FieldSpec, ResourceDescriptor
from ..domain.slug import slugify

LOGGER = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off", ""}


class FormVM:
    """Field values, list slots and asset selection for one modal session."""

    def __init__(self, descriptor: ResourceDescriptor, *, asset_origin: str = "") -> None:
        self.descriptor = descriptor
        self.asset_origin = asset_origin
        self.values: Dict[str, Any] = {}
        self.asset: Optional[AssetFile] = None
        self.asset_preview: Optional[str] = None
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Load Create defaults; every list field gets one empty slot."""
        self.values = self.descriptor.defaults()
        self.asset = None
        self.asset_preview = None

    def hydrate(self, entity: Entity) -> None:
        """Copy every editable field of ``entity`` into the form."""
        values: Dict[str, Any] = {}
        for spec in self.descriptor.fields:
            values[spec.name] = self._hydrated_value(spec, getattr(entity, spec.name, None))
        self.values = values
        self.asset = None
        self.asset_preview = None
        if self.descriptor.asset is not None:
            stored = getattr(entity, self.descriptor.asset.name, "")
            self.asset_preview = stored_asset_url(self.asset_origin, stored)

    @staticmethod
    def _hydrated_value(spec: FieldSpec, raw: Any) -> Any:
        if spec.is_list:
            entries = [str(item) for item in (raw or ())]
            return entries or [""]
        if spec.kind == "date":
            return str(raw or "").split("T")[0]
        if spec.kind in ("text", "choice"):
            return str(raw) if raw else spec.default
        return spec.default if raw is None else raw

    # ------------------------------------------------------------------
    # Scalar fields
    # ------------------------------------------------------------------
    def get(self, name: str) -> Any:
        self.descriptor.field(name)
        return self.values.get(name)

    def set_field(self, name: str, value: Any) -> None:
        """Store ``value`` after coercing it the way a form input would.

        Raises:
            KeyError: ``name`` is not an editable field.
            ValueError: The value is outside the field's domain.
        """
        spec = self.descriptor.field(name)
        self.values[name] = self._coerce(spec, value)

    def _coerce(self, spec: FieldSpec, value: Any) -> Any:
        if spec.is_list:
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ValueError(f"{spec.name} expects a sequence of entries.")
            return [str(item) for item in value] or [""]
        if spec.kind == "bool":
            return _as_bool(spec.name, value)
        if spec.kind in ("int", "float"):
            return self._coerce_number(spec, value)
        if spec.kind == "choice":
            text = str(value)
            if text not in spec.choices:
                raise ValueError(f"{spec.name} must be one of: {', '.join(spec.choices)}")
            return text
        text = "" if value is None else str(value)
        if spec.kind == "date" and text:
            try:
                date.fromisoformat(text)
            except ValueError as exc:
                raise ValueError(f"{spec.name} must be a YYYY-MM-DD date.") from exc
        if spec.max_length is not None and len(text) > spec.max_length:
            raise ValueError(f"{spec.name} must be at most {spec.max_length} characters.")
        return text

    @staticmethod
    def _coerce_number(spec: FieldSpec, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"{spec.name} must be a number.")
        if value is None or (isinstance(value, str) and not value.strip()):
            return spec.default
        try:
            number = int(str(value).strip()) if spec.kind == "int" else float(str(value).strip())
        except ValueError:
            if spec.kind == "int" and isinstance(value, float) and value.is_integer():
                number = int(value)
            else:
                raise ValueError(f"{spec.name} must be a number.") from None
        if spec.min_value is not None and number < spec.min_value:
            raise ValueError(f"{spec.name} must be >= {spec.min_value:g}.")
        return number

    # ------------------------------------------------------------------
    # Dynamic list fields
    # ------------------------------------------------------------------
    def _entries(self, name: str) -> List[str]:
        spec = self.descriptor.field(name)
        if not spec.is_list:
            raise KeyError(f"{name} is not a list field")
        entries = self.values.get(name)
        if not isinstance(entries, list):
            entries = []
            self.values[name] = entries
        return entries

    def list_slots(self, name: str) -> List[str]:
        """Entries as rendered: an emptied list shows one empty slot."""
        entries = self._entries(name)
        return list(entries) if entries else [""]

    def update_list_entry(self, name: str, index: int, value: str) -> None:
        """Replace slot ``index``; ``index == len`` fills the rendered empty slot."""
        entries = self._entries(name)
        if index == len(entries):
            entries.append(str(value))
            return
        if not 0 <= index < len(entries):
            raise IndexError(f"{name}[{index}] out of range")
        entries[index] = str(value)

    def add_list_entry(self, name: str) -> None:
        self._entries(name).append("")

    def remove_list_entry(self, name: str, index: int) -> None:
        entries = self._entries(name)
        if not 0 <= index < len(entries):
            raise IndexError(f"{name}[{index}] out of range")
        del entries[index]

    # ------------------------------------------------------------------
    # Asset
    # ------------------------------------------------------------------
    async def select_asset(self, asset: AssetFile) -> None:
        """Keep ``asset`` for upload and preview it as a data URL."""
        if self.descriptor.asset is None:
            raise KeyError(f"{self.descriptor.key} has no asset field")
        self.asset = asset
        self.asset_preview = await encode_data_url(asset)
        LOGGER.debug("asset selected for %s: %s", self.descriptor.key, asset.filename)

    # ------------------------------------------------------------------
    def normalize(self) -> Dict[str, Any]:
        """Build the submission payload.

        Blank list entries are dropped (order of the rest preserved), the slug
        is recomputed from its source field and a newly selected asset is
        attached. Required fields are not checked here.
        """
        payload: Dict[str, Any] = {}
        for spec in self.descriptor.fields:
            value = self.values.get(spec.name, spec.initial_value())
            if spec.is_list:
                value = [entry for entry in (value or []) if str(entry).strip()]
            payload[spec.name] = value
        slug = self.descriptor.slug
        if slug is not None:
            payload[slug.name] = slugify(str(payload.get(slug.source) or ""))
        if self.descriptor.asset is not None and self.asset is not None:
            payload[self.descriptor.asset.name] = self.asset
        return payload


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    raise ValueError(f"{name} must be a boolean.")
