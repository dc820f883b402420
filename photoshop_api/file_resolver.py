"""Resolve user supplied file references into fully qualified API payloads.

Storage is resolved for input and output files with the following heuristic:

* If ``storage`` is provided, the reference is used as-is.
* If ``href`` is an absolute URL, the hostname selects Azure, Dropbox or
  External (default).
* If ``href`` is a path, it is presigned through the file storage passed to
  the constructor, otherwise it is considered a Creative Cloud path. The
  ``default_adobe_cloud_paths`` option forces the latter.

Output mime types are detected from the extension of the path (or URL path),
falling back to ``image/png``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from .config import DEFAULT_PRESIGN_EXPIRY_SECONDS
from .contracts import FileReference
from .errors import MissingHrefError, NoFileProvidedError, serialize
from .file_storage import FileStorage
from .storage import infer_mime_type_from_path, infer_storage_from_url, is_web_url
from .types import Storage

logger = logging.getLogger(__name__)

READ_PERMISSIONS = "r"
WRITE_PERMISSIONS = "rwd"

FileLike = Union[str, Mapping[str, Any], FileReference]
T = TypeVar("T")
R = TypeVar("R")

_INPUT_LIST_OPTIONS = ("actions", "fonts", "patterns", "brushes", "additionalImages")


class FileResolver:
    """Resolves the storage and mime type of files referenced in API requests."""

    def __init__(
        self,
        files: Optional[FileStorage] = None,
        *,
        presign_expiry_seconds: Optional[int] = None,
        default_adobe_cloud_paths: bool = False,
        max_workers: int = 8,
    ) -> None:
        self._files = files
        self.presign_expiry_seconds = presign_expiry_seconds or DEFAULT_PRESIGN_EXPIRY_SECONDS
        self._max_workers = max(1, max_workers)

        # Bare paths go through the collaborator whenever one is injected.
        self._presign_paths = files is not None and not default_adobe_cloud_paths
        self.default_path_storage = Storage.AIO if self._presign_paths else Storage.ADOBE

    # ------------------------------------------------------------------
    # Single files
    # ------------------------------------------------------------------

    def resolve_input(self, input: FileLike) -> Dict[str, Any]:
        return self._resolve_file(input, READ_PERMISSIONS)

    def resolve_output(self, output: FileLike) -> Dict[str, Any]:
        return _with_mime_type(self._resolve_file(output, WRITE_PERMISSIONS))

    # ------------------------------------------------------------------
    # One or more files
    # ------------------------------------------------------------------

    def resolve_inputs(self, inputs: Union[FileLike, Sequence[FileLike]]) -> List[Dict[str, Any]]:
        return self._resolve_files(inputs, READ_PERMISSIONS)

    def resolve_outputs(self, outputs: Union[FileLike, Sequence[FileLike]]) -> List[Dict[str, Any]]:
        return [_with_mime_type(output) for output in self._resolve_files(outputs, WRITE_PERMISSIONS)]

    # ------------------------------------------------------------------
    # Nested options
    # ------------------------------------------------------------------

    def resolve_inputs_document_options(self, options: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """Resolve ``fonts`` and ``layers[].input`` of document create/modify/smart object options."""

        if options is None:
            return None
        resolved = dict(options)
        if resolved.get("fonts"):
            resolved["fonts"] = self.resolve_inputs(resolved["fonts"])
        if resolved.get("layers"):
            resolved["layers"] = self._map(self._resolve_layer, list(resolved["layers"]))
        return resolved

    def resolve_inputs_photoshop_actions_options(
        self, options: Optional[Mapping[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """Resolve the actions, fonts, patterns, brushes and additional images of Photoshop Actions options."""

        if options is None:
            return None
        resolved = dict(options)
        for key in _INPUT_LIST_OPTIONS:
            if resolved.get(key):
                resolved[key] = self.resolve_inputs(resolved[key])
        return resolved

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_layer(self, layer: Any) -> Any:
        if isinstance(layer, Mapping) and layer.get("input"):
            return {**layer, "input": self.resolve_input(layer["input"])}
        return layer

    def _resolve_files(
        self, files: Union[FileLike, Sequence[FileLike]], permissions: str
    ) -> List[Dict[str, Any]]:
        if isinstance(files, (list, tuple)):
            return self._map(lambda file: self._resolve_file(file, permissions), list(files))
        return [self._resolve_file(files, permissions)]

    def _resolve_file(self, file: Any, permissions: str) -> Dict[str, Any]:
        if file is None or (isinstance(file, str) and not file):
            raise NoFileProvidedError()
        if isinstance(file, str):
            return self._resolve_storage({"href": file}, permissions)
        if isinstance(file, FileReference):
            file = file.to_dict()
        if not isinstance(file, Mapping):
            raise TypeError(f"Unsupported file reference: {file!r}")
        if not file.get("href"):
            raise MissingHrefError(serialize(dict(file)))
        if file.get("storage"):
            return file
        return self._resolve_storage(file, permissions)

    def _resolve_storage(self, file: Mapping[str, Any], permissions: str) -> Dict[str, Any]:
        href = file["href"]
        if is_web_url(href):
            return {**file, "storage": infer_storage_from_url(href).value}

        if self._presign_paths:
            presigned = self._files.generate_presign_url(
                href,
                permissions=permissions,
                expiry_seconds=self.presign_expiry_seconds,
            )
            logger.debug("Presigned %s with permissions %s", href, permissions)
            return {**file, "href": presigned, "storage": infer_storage_from_url(presigned).value}

        return {**file, "storage": self.default_path_storage.value}

    def _map(self, func: Callable[[T], R], items: List[T]) -> List[R]:
        if len(items) <= 1:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(items))) as executor:
            return list(executor.map(func, items))


def _with_mime_type(output: Mapping[str, Any]) -> Dict[str, Any]:
    if output.get("type"):
        return output
    return {**output, "type": infer_mime_type_from_path(output["href"]).value}
