"""Binary asset values and preview encoding (client logos).

The preview is a local ``data:`` URL built from the selected bytes; it never
touches the network. Uploads send the raw bytes as a multipart field, so the
preview encoding and the transport encoding are independent.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

_FALLBACK_MIME = "application/octet-stream"


@dataclass(frozen=True)
class AssetFile:
    """A user-selected file held in memory until submit."""

    filename: str
    content: bytes
    content_type: str = _FALLBACK_MIME

    def __post_init__(self) -> None:
        if not isinstance(self.filename, str) or not self.filename.strip():
            raise ValueError("AssetFile requires a filename.")
        if not isinstance(self.content, (bytes, bytearray)):
            raise ValueError("AssetFile content must be bytes.")

    @classmethod
    def from_bytes(
        cls, filename: str, content: bytes, content_type: str | None = None
    ) -> "AssetFile":
        mime = content_type or mimetypes.guess_type(filename)[0] or _FALLBACK_MIME
        return cls(filename=filename, content=bytes(content), content_type=mime)

    @classmethod
    def from_path(cls, path: str | Path) -> "AssetFile":
        """Read ``path`` from disk and guess its MIME type from the suffix."""
        file_path = Path(path).expanduser()
        return cls.from_bytes(file_path.name, file_path.read_bytes())

    def as_multipart(self) -> tuple[str, bytes, str]:
        """Return the ``(filename, bytes, mime)`` triple used by ``requests``."""
        return (self.filename, bytes(self.content), self.content_type)


def _to_data_url(asset: AssetFile) -> str:
    encoded = base64.b64encode(asset.content).decode("ascii")
    return f"data:{asset.content_type};base64,{encoded}"


async def encode_data_url(asset: AssetFile) -> str:
    """Encode ``asset`` as a data URL off the event loop."""
    return await asyncio.to_thread(_to_data_url, asset)


def stored_asset_url(origin: str, path: str | None) -> str | None:
    """Join the backend origin with an asset path stored on an entity."""
    if not path:
        return None
    return f"{origin}{path}"


__all__ = ["AssetFile", "encode_data_url", "stored_asset_url"]
