"""Stateless helpers that classify file references by URL host and extension."""

from __future__ import annotations

import posixpath
from typing import Dict, Optional
from urllib.parse import unquote, urlsplit

from .types import MimeType, Storage

AZURE_HOST_SUFFIXES = (".blob.core.windows.net", ".azureedge.net")
DROPBOX_CONTENT_HOST = "content.dropboxapi.com"

EXTENSION_MIME_TYPES: Dict[str, MimeType] = {
    ".dng": MimeType.DNG,
    ".jpg": MimeType.JPEG,
    ".jpeg": MimeType.JPEG,
    ".png": MimeType.PNG,
    ".psb": MimeType.PSD,
    ".psd": MimeType.PSD,
    ".tif": MimeType.TIFF,
    ".tiff": MimeType.TIFF,
}

DEFAULT_MIME_TYPE = MimeType.PNG


def is_web_url(href: Optional[str]) -> bool:
    """Return ``True`` for absolute ``http``/``https`` URLs with a host."""

    if not isinstance(href, str) or not href:
        return False
    try:
        parts = urlsplit(href)
        hostname = parts.hostname
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(hostname)


def infer_storage_from_url(url: str) -> Storage:
    """Determine the storage backend from the hostname of an absolute URL."""

    hostname = urlsplit(url).hostname or ""
    if hostname.endswith(AZURE_HOST_SUFFIXES):
        return Storage.AZURE
    if hostname == DROPBOX_CONTENT_HOST:
        return Storage.DROPBOX
    return Storage.EXTERNAL


def infer_mime_type_from_path(pathname: str) -> MimeType:
    """Map the extension of a path or URL to a mime type, defaulting to PNG.

    Query strings and fragments are ignored and percent-encoding is decoded
    before the extension is read. Matching is case-sensitive.
    """

    path = unquote(urlsplit(pathname or "").path)
    extension = posixpath.splitext(posixpath.basename(path))[1]
    return EXTENSION_MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
