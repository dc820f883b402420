"""Polling abstraction around asynchronous Photoshop, Lightroom and Sensei jobs.

Each API family answers status requests with a different shape:

* Photoshop and Lightroom return an ``outputs`` array, Lightroom additionally
  reporting ``created``/``modified`` at the root instead of per output.
* Sensei (cutout and mask) describes its single output at the root through
  ``input``, ``status``, ``output`` and ``errors``.

Responses are decoded at the boundary into :class:`MultiOutputResponse` or
:class:`SingleOutputResponse` and normalised into a :class:`JobSnapshot`, so
the completion logic below never has to know which family it is talking to.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional, Tuple

from .contracts import (
    JobOutput,
    JobSnapshot,
    MultiOutputResponse,
    SingleOutputResponse,
    StatusResponse,
)
from .errors import JobCancelledError, StatusUrlMissingError, serialize

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0

StatusFetcher = Callable[[str], Any]


def get_status_url(response: Any) -> Optional[str]:
    """Return ``_links.self.href``, or the response itself for legacy string replies."""

    if isinstance(response, str):
        return response or None
    if not isinstance(response, Mapping):
        return None
    links = response.get("_links")
    if not isinstance(links, Mapping):
        return None
    target = links.get("self")
    if not isinstance(target, Mapping):
        return None
    return target.get("href") or None


def read_job_id(response: Mapping[str, Any]) -> Optional[str]:
    # Upstream spells the identifier ``jobId`` (Photoshop, Lightroom) or ``jobID`` (Sensei).
    for key in ("jobId", "jobID"):
        value = response.get(key)
        if value is not None:
            return str(value)
    return None


def decode_status_response(response: Any) -> StatusResponse:
    """Decode a raw status payload into one of the two known response shapes."""

    if response is None:
        response = {}
    if not isinstance(response, Mapping):
        raise TypeError(f"Unexpected job status payload: {serialize(response)}")

    payload = dict(response)
    payload["job_id"] = read_job_id(response)
    if "outputs" in response:
        if payload["outputs"] is None:
            payload["outputs"] = []
        return MultiOutputResponse.model_validate(payload)
    return SingleOutputResponse.model_validate(payload)


def normalize_outputs(decoded: StatusResponse) -> Tuple[JobOutput, ...]:
    """Build the canonical output list, back-filling root level timestamps."""

    outputs = decoded.job_outputs()
    timestamps = {}
    if decoded.created:
        timestamps["created"] = decoded.created
    if decoded.modified:
        timestamps["modified"] = decoded.modified
    if timestamps:
        outputs = [output.model_copy(update=timestamps) for output in outputs]
    return tuple(outputs)


def next_snapshot(previous: JobSnapshot, response: Any) -> JobSnapshot:
    """Compute the state that follows ``previous`` after observing ``response``.

    Outputs are replaced wholesale. The status URL follows the self link of the
    new response and only falls back to the previous URL when none is given.
    """

    decoded = decode_status_response(response)
    return JobSnapshot(
        url=get_status_url(response) or previous.url,
        job_id=decoded.job_id,
        outputs=normalize_outputs(decoded),
        links=decoded.links,
    )


class Job:
    """Asynchronous job that can be polled until every output is terminal."""

    def __init__(self, response: Any, get_job_status: Optional[StatusFetcher] = None) -> None:
        url = get_status_url(response)
        if not url:
            raise StatusUrlMissingError(serialize(response))
        self._get_job_status = get_job_status
        self._snapshot = JobSnapshot(url=url)

    @property
    def snapshot(self) -> JobSnapshot:
        return self._snapshot

    @property
    def url(self) -> str:
        """URL used for the next status request."""

        return self._snapshot.url

    @property
    def job_id(self) -> Optional[str]:
        return self._snapshot.job_id

    @property
    def outputs(self) -> Tuple[JobOutput, ...]:
        return self._snapshot.outputs

    @property
    def links(self) -> Optional[dict]:
        return self._snapshot.links

    def is_done(self) -> bool:
        """``True`` once at least one output is known and all of them succeeded or failed."""

        return self._snapshot.is_done

    def poll(self) -> "Job":
        """Fetch the current status once and replace the observed state.

        The status URL is taken from the self link of every response. A
        response without a self link keeps the URL that was just polled.
        """

        if self._get_job_status is None:
            raise RuntimeError("Job was created without a status fetcher")

        response = self._get_job_status(self._snapshot.url)
        snapshot = next_snapshot(self._snapshot, response)
        if snapshot.url != self._snapshot.url:
            logger.debug("Job status URL moved from %s to %s", self._snapshot.url, snapshot.url)
        self._snapshot = snapshot
        logger.debug(
            "Polled job %s: %s",
            snapshot.job_id,
            [output.status for output in snapshot.outputs],
        )
        return self

    def poll_until_done(
        self,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        cancel_event: Optional[threading.Event] = None,
    ) -> "Job":
        """Block until the job reaches a terminal state.

        There is no overall timeout. Errors raised by the status fetcher
        propagate unchanged. Setting ``cancel_event`` aborts the loop with
        :class:`JobCancelledError` at the next wait or poll.
        """

        while not self.is_done():
            self._raise_if_cancelled(cancel_event)
            if cancel_event is not None:
                if cancel_event.wait(poll_interval):
                    self._raise_if_cancelled(cancel_event)
            elif poll_interval > 0:
                time.sleep(poll_interval)
            self.poll()
        return self

    def _raise_if_cancelled(self, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Stopped polling job %s", self._snapshot.job_id or self._snapshot.url)
            raise JobCancelledError(self._snapshot.url)

    def __repr__(self) -> str:
        return f"Job(url={self.url!r}, job_id={self.job_id!r}, outputs={len(self.outputs)})"
