"""Client for the Photoshop, Lightroom and Sensei image processing APIs."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import requests

from .config import PhotoshopAPIOptions
from .errors import SDKInitializationError
from .file_resolver import FileLike, FileResolver
from .file_storage import FileStorage
from .http import build_session, error_from_response, response_body
from .job import Job

logger = logging.getLogger(__name__)

FileOrFiles = Union[FileLike, Sequence[FileLike]]


class PhotoshopAPI:
    """Submit image and document jobs and wait for them to complete.

    Every operation resolves its file references, initiates the job, and
    returns the :class:`~photoshop_api.job.Job` once all of its outputs have
    succeeded or failed. Pass ``cancel_event`` to stop waiting early.
    """

    def __init__(
        self,
        org_id: str,
        api_key: str,
        access_token: str,
        files: Optional[FileStorage] = None,
        options: Optional[PhotoshopAPIOptions] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        missing = [
            name
            for name, value in (("orgId", org_id), ("apiKey", api_key), ("accessToken", access_token))
            if not value
        ]
        if missing:
            raise SDKInitializationError(
                ", ".join(missing),
                sdk_details={"orgId": org_id, "apiKey": api_key, "accessToken": access_token},
            )

        self.org_id = org_id
        self.api_key = api_key
        self.access_token = access_token
        self._options = options or PhotoshopAPIOptions()
        if self._options.log_level:
            _apply_log_level(self._options.log_level)

        self._base_url = self._options.base_url.rstrip("/")
        self._session = session or build_session(
            api_key=api_key,
            access_token=access_token,
            org_id=org_id,
            options=self._options,
        )
        self.file_resolver = FileResolver(
            files,
            presign_expiry_seconds=self._options.presign_expiry_seconds,
            default_adobe_cloud_paths=self._options.default_adobe_cloud_paths,
            max_workers=self._options.max_resolve_workers,
        )

    # ------------------------------------------------------------------
    # Sensei
    # ------------------------------------------------------------------

    def create_cutout(
        self, input: FileLike, output: FileLike, *, cancel_event: Optional[threading.Event] = None
    ) -> Job:
        """Create a cutout mask and apply it to the input."""

        return self._run_job(
            "/sensei/cutout",
            {
                "input": self.file_resolver.resolve_input(input),
                "output": self.file_resolver.resolve_output(output),
            },
            cancel_event,
        )

    def create_mask(
        self, input: FileLike, output: FileLike, *, cancel_event: Optional[threading.Event] = None
    ) -> Job:
        """Create a cutout mask."""

        return self._run_job(
            "/sensei/mask",
            {
                "input": self.file_resolver.resolve_input(input),
                "output": self.file_resolver.resolve_output(output),
            },
            cancel_event,
        )

    # ------------------------------------------------------------------
    # Lightroom
    # ------------------------------------------------------------------

    def straighten(
        self, input: FileLike, outputs: FileOrFiles, *, cancel_event: Optional[threading.Event] = None
    ) -> Job:
        return self._run_job(
            "/lrService/autoStraighten",
            {
                "inputs": self.file_resolver.resolve_input(input),
                "outputs": self.file_resolver.resolve_outputs(outputs),
            },
            cancel_event,
        )

    def auto_tone(
        self, input: FileLike, output: FileOrFiles, *, cancel_event: Optional[threading.Event] = None
    ) -> Job:
        return self._run_job(
            "/lrService/autoTone",
            {
                "inputs": self.file_resolver.resolve_input(input),
                "outputs": self.file_resolver.resolve_outputs(output),
            },
            cancel_event,
        )

    def edit_photo(
        self,
        input: FileLike,
        output: FileOrFiles,
        options: Mapping[str, Any],
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Apply a set of edit parameters (``Exposure``, ``Contrast``, ``WhiteBalance``...) on an image."""

        return self._run_job(
            "/lrService/edit",
            {
                "inputs": {"source": self.file_resolver.resolve_input(input)},
                "outputs": self.file_resolver.resolve_outputs(output),
                "options": dict(options) if options is not None else None,
            },
            cancel_event,
        )

    def apply_preset(
        self,
        input: FileLike,
        preset: FileOrFiles,
        output: FileOrFiles,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Apply one or more Lightroom preset XMP files on an image."""

        return self._run_job(
            "/lrService/presets",
            {
                "inputs": {
                    "source": self.file_resolver.resolve_input(input),
                    "presets": self.file_resolver.resolve_inputs(preset),
                },
                "outputs": self.file_resolver.resolve_outputs(output),
            },
            cancel_event,
        )

    def apply_preset_xmp(
        self,
        input: FileLike,
        output: FileOrFiles,
        xmp: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Apply a preset given as XMP file contents."""

        return self._run_job(
            "/lrService/xmp",
            {
                "inputs": {"source": self.file_resolver.resolve_input(input)},
                "outputs": self.file_resolver.resolve_outputs(output),
                "options": {"xmp": xmp},
            },
            cancel_event,
        )

    # ------------------------------------------------------------------
    # Photoshop
    # ------------------------------------------------------------------

    def create_document(
        self,
        outputs: FileOrFiles,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Create a new PSD, optionally with layers, and generate renditions and/or save it."""

        return self._run_job(
            "/pie/psdService/documentCreate",
            {
                "outputs": self.file_resolver.resolve_outputs(outputs),
                "options": self.file_resolver.resolve_inputs_document_options(options),
            },
            cancel_event,
        )

    def get_document_manifest(
        self,
        input: FileOrFiles,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Extract the layer information of a PSD file."""

        return self._run_job(
            "/pie/psdService/documentManifest",
            {
                "inputs": self.file_resolver.resolve_inputs(input),
                "options": dict(options) if options is not None else None,
            },
            cancel_event,
        )

    def modify_document(
        self,
        input: FileOrFiles,
        outputs: FileOrFiles,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Apply PSD edits and generate renditions and/or save a new PSD."""

        return self._run_job(
            "/pie/psdService/documentOperations",
            {
                "inputs": self.file_resolver.resolve_inputs(input),
                "outputs": self.file_resolver.resolve_outputs(outputs),
                "options": self.file_resolver.resolve_inputs_document_options(options),
            },
            cancel_event,
        )

    def create_rendition(
        self, input: FileOrFiles, outputs: FileOrFiles, *, cancel_event: Optional[threading.Event] = None
    ) -> Job:
        return self._run_job(
            "/pie/psdService/renditionCreate",
            {
                "inputs": self.file_resolver.resolve_inputs(input),
                "outputs": self.file_resolver.resolve_outputs(outputs),
            },
            cancel_event,
        )

    def replace_smart_object(
        self,
        input: FileOrFiles,
        outputs: FileOrFiles,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        return self._run_job(
            "/pie/psdService/smartObject",
            {
                "inputs": self.file_resolver.resolve_inputs(input),
                "outputs": self.file_resolver.resolve_outputs(outputs),
                "options": self.file_resolver.resolve_inputs_document_options(options),
            },
            cancel_event,
        )

    def photoshop_actions(
        self,
        input: FileOrFiles,
        outputs: FileOrFiles,
        options: Optional[Mapping[str, Any]] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Job:
        """Play Photoshop Actions and generate renditions and/or save a new PSD."""

        return self._run_job(
            "/pie/psdService/photoshopActions",
            {
                "inputs": self.file_resolver.resolve_inputs(input),
                "outputs": self.file_resolver.resolve_outputs(outputs),
                "options": self.file_resolver.resolve_inputs_photoshop_actions_options(options),
            },
            cancel_event,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def get_job_status(self, url: str) -> Any:
        """Fetch the raw status payload behind a job status URL."""

        response = self._session.get(url, timeout=self._options.timeout_seconds)
        _raise_for_status(response)
        return response_body(response)

    def _run_job(
        self,
        path: str,
        body: Dict[str, Any],
        cancel_event: Optional[threading.Event],
    ) -> Job:
        payload = {key: value for key, value in body.items() if value is not None}
        logger.info("Initiating job %s", path)
        response = self._session.post(self._url(path), json=payload, timeout=self._options.timeout_seconds)
        _raise_for_status(response)

        job = Job(response_body(response), self.get_job_status)
        logger.info("Job for %s accepted, polling %s", path, job.url)
        return job.poll_until_done(self._options.poll_interval_seconds, cancel_event)

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"


def _apply_log_level(log_level: str) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        logger.warning("Ignoring unknown log level %s", log_level)
        return
    logging.getLogger("photoshop_api").setLevel(level)


def _raise_for_status(response: requests.Response) -> None:
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        error = error_from_response(response)
        logger.warning("Request to %s failed: %s", response.url, error.message)
        raise error from exc


def init(
    org_id: str,
    api_key: str,
    access_token: str,
    files: Optional[FileStorage] = None,
    options: Optional[PhotoshopAPIOptions] = None,
) -> PhotoshopAPI:
    """Create a :class:`PhotoshopAPI` client."""

    try:
        client = PhotoshopAPI(org_id, api_key, access_token, files, options)
    except SDKInitializationError:
        logger.debug("sdk init error", exc_info=True)
        raise
    logger.debug("sdk initialized successfully")
    return client


__all__ = ["PhotoshopAPI", "init"]
