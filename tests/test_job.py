import itertools
import sys
import threading
from pathlib import Path

import pytest

# Allow tests to import the project packages without installation.
sys.path.append(str(Path(__file__).resolve().parents[1]))

from photoshop_api.contracts import JobSnapshot  # noqa: E402
from photoshop_api.errors import JobCancelledError, StatusUrlMissingError  # noqa: E402
from photoshop_api.job import Job, decode_status_response, next_snapshot  # noqa: E402
from photoshop_api.contracts import MultiOutputResponse, SingleOutputResponse  # noqa: E402

STATUS_URL = "http://host/status"
SENSEI_STATUS_URL = "https://image.adobe.io/sensei/status/c900e70c-03b2-43dc-b6f0-b0db16333b4b"


class _RecordingStatusFetcher:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if not self._responses:
            raise AssertionError("No responses remaining")
        return self._responses.pop(0)


def _initiate(href=STATUS_URL):
    return {"_links": {"self": {"href": href}}}


def _job_with_statuses(*statuses):
    fetcher = _RecordingStatusFetcher(
        [{"outputs": [{"status": status} if status else {} for status in statuses]}]
    )
    return Job(_initiate(), fetcher).poll()


@pytest.mark.parametrize(
    "response, serialized",
    [
        (None, "null"),
        ({}, "{}"),
        ({"_links": {}}, '{"_links":{}}'),
        ({"_links": {"self": {}}}, '{"_links":{"self":{}}}'),
    ],
)
def test_missing_status_url(response, serialized):
    with pytest.raises(StatusUrlMissingError) as excinfo:
        Job(response)
    assert str(excinfo.value) == (
        f"[PhotoshopSDK:ERROR_STATUS_URL_MISSING] Status URL is missing in the response: {serialized}"
    )


def test_valid_status_url():
    job = Job(_initiate())

    assert job.url == STATUS_URL
    assert job.job_id is None
    assert job.outputs == ()


def test_legacy_string_response():
    assert Job(STATUS_URL).url == STATUS_URL


def test_not_done_before_first_poll():
    assert Job(_initiate()).is_done() is False


def test_poll_without_fetcher():
    with pytest.raises(RuntimeError):
        Job(_initiate()).poll()


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ((None,), False),
        (("pending",), False),
        (("running",), False),
        (("uploading",), False),
        (("succeeded",), True),
        (("failed",), True),
        (("failed", "running"), False),
        (("running", "failed"), False),
        (("failed", "succeeded"), True),
        (("succeeded", "failed"), True),
    ],
)
def test_is_done(statuses, expected):
    assert _job_with_statuses(*statuses).is_done() is expected


def test_is_done_for_every_permutation():
    for statuses in itertools.product(["pending", "running", "succeeded", "failed"], repeat=3):
        expected = all(status in ("succeeded", "failed") for status in statuses)
        assert _job_with_statuses(*statuses).is_done() is expected


def test_poll_response_without_outputs():
    fetcher = _RecordingStatusFetcher([{}])
    job = Job(_initiate(), fetcher).poll()

    assert fetcher.calls == [STATUS_URL]
    assert job.outputs == ()
    assert job.job_id is None
    assert job.url == STATUS_URL
    assert job.is_done() is False


def test_poll_cutout_pending():
    fetcher = _RecordingStatusFetcher(
        [
            {
                "jobID": "c900e70c-03b2-43dc-b6f0-b0db16333b4b",
                "status": "pending",
                "_links": {"self": {"href": SENSEI_STATUS_URL}},
            }
        ]
    )
    job = Job(_initiate(), fetcher).poll()

    assert job.job_id == "c900e70c-03b2-43dc-b6f0-b0db16333b4b"
    assert job.outputs == ()
    assert job.url == SENSEI_STATUS_URL
    assert job.links == {"self": {"href": SENSEI_STATUS_URL}}


def test_poll_cutout_succeeded():
    output = {
        "storage": "adobe",
        "href": "/files/cutout/output/mask.png",
        "mask": {"format": "binary"},
        "color": {"space": "rgb"},
    }
    fetcher = _RecordingStatusFetcher(
        [
            {
                "jobID": "c900e70c-03b2-43dc-b6f0-b0db16333b4b",
                "status": "succeeded",
                "input": "/files/images/input.jpg",
                "output": output,
                "_links": {"self": {"href": SENSEI_STATUS_URL}},
            }
        ]
    )
    job = Job(_initiate(), fetcher).poll()

    assert [item.to_dict() for item in job.outputs] == [
        {
            "input": "/files/images/input.jpg",
            "status": "succeeded",
            "_links": {"self": output},
        }
    ]
    assert job.outputs[0].href == "/files/cutout/output/mask.png"
    assert job.is_done() is True


def test_poll_cutout_failed():
    errors = {"type": "500", "title": "request parameters didn't validate"}
    fetcher = _RecordingStatusFetcher(
        [
            {
                "jobID": "c900e70c-03b2-43dc-b6f0-b0db16333b4b",
                "status": "failed",
                "input": "/files/images/input.jpg",
                "errors": errors,
                "_links": {"self": {"href": SENSEI_STATUS_URL}},
            }
        ]
    )
    job = Job(_initiate(), fetcher).poll()

    assert len(job.outputs) == 1
    assert job.outputs[0].errors == errors
    assert job.outputs[0].links is None
    assert job.outputs[0].status == "failed"
    assert job.is_done() is True


def test_poll_lightroom_backfills_root_timestamps():
    fetcher = _RecordingStatusFetcher(
        [
            {
                "jobId": "f54e0fcb-260b-47c3-b520-de0d17dc2b67",
                "created": "2018-01-04T12:57:15.12345:Z",
                "modified": "2018-01-04T12:58:36.12345:Z",
                "outputs": [
                    {
                        "input": "/some_project/photo.jpg",
                        "status": "succeeded",
                        "created": "ignored",
                        "_links": {"self": {"href": "/some_project/OUTPUT/photo.jpg", "storage": "adobe"}},
                    },
                    {"input": "/some_project/photo.jpg", "status": "running"},
                ],
                "_links": {"self": {"href": "https://image.adobe.io/lrService/status/f54e0fcb"}},
            }
        ]
    )
    job = Job(_initiate(), fetcher).poll()

    assert job.job_id == "f54e0fcb-260b-47c3-b520-de0d17dc2b67"
    assert [output.created for output in job.outputs] == ["2018-01-04T12:57:15.12345:Z"] * 2
    assert [output.modified for output in job.outputs] == ["2018-01-04T12:58:36.12345:Z"] * 2
    assert job.outputs[0].href == "/some_project/OUTPUT/photo.jpg"
    assert job.outputs[1].status == "running"
    assert job.is_done() is False


def test_poll_copies_numeric_root_timestamps():
    fetcher = _RecordingStatusFetcher(
        [{"created": 1700000000, "modified": 1700000060, "outputs": [{"status": "succeeded"}]}]
    )
    job = Job(_initiate(), fetcher).poll()

    assert job.outputs[0].created == 1700000000
    assert job.outputs[0].modified == 1700000060
    assert job.is_done() is True


def test_poll_photoshop_outputs_keep_extra_fields():
    layers = [{"id": 1, "name": "Background"}]
    fetcher = _RecordingStatusFetcher(
        [
            {
                "jobId": "psd-job",
                "outputs": [
                    {
                        "input": "/files/input.psd",
                        "status": "succeeded",
                        "created": "2018-08-30T21:36:53.454Z",
                        "modified": "2018-08-30T21:36:53.454Z",
                        "layers": layers,
                    }
                ],
                "_links": {"self": {"href": "https://image.adobe.io/pie/psdService/status/psd-job"}},
            }
        ]
    )
    job = Job(_initiate(), fetcher).poll()

    assert job.outputs[0].to_dict()["layers"] == layers
    assert job.outputs[0].created == "2018-08-30T21:36:53.454Z"


def test_poll_replaces_outputs():
    fetcher = _RecordingStatusFetcher(
        [
            {"outputs": [{"status": "running"}, {"status": "running"}]},
            {"outputs": [{"status": "succeeded"}]},
        ]
    )
    job = Job(_initiate(), fetcher)

    job.poll()
    assert len(job.outputs) == 2
    job.poll()
    assert [output.status for output in job.outputs] == ["succeeded"]


def test_poll_is_idempotent_for_identical_responses():
    response = {"jobId": "abc", "outputs": [{"status": "running"}]}
    fetcher = _RecordingStatusFetcher([response, response])
    job = Job(_initiate(), fetcher)

    first = job.poll().snapshot
    second = job.poll().snapshot

    assert first == second


def test_poll_follows_status_url_changes():
    fetcher = _RecordingStatusFetcher(
        [
            {"status": "pending", "_links": {"self": {"href": "http://host/status/2"}}},
            {"status": "pending", "_links": {"self": {"href": "http://host/status/3"}}},
        ]
    )
    job = Job(_initiate(), fetcher)

    job.poll()
    job.poll()

    assert fetcher.calls == [STATUS_URL, "http://host/status/2"]
    assert job.url == "http://host/status/3"


def test_poll_propagates_fetch_errors():
    def failing_fetcher(url):
        raise ConnectionError("boom")

    job = Job(_initiate(), failing_fetcher)

    with pytest.raises(ConnectionError):
        job.poll()
    assert job.outputs == ()


def test_poll_until_done_pending_then_succeeded():
    fetcher = _RecordingStatusFetcher(
        [
            {"jobID": "abc", "status": "pending", "_links": {"self": {"href": SENSEI_STATUS_URL}}},
            {
                "jobID": "abc",
                "status": "succeeded",
                "input": "in.png",
                "output": {"href": "out.png", "storage": "adobe"},
                "_links": {"self": {"href": SENSEI_STATUS_URL}},
            },
        ]
    )
    job = Job(_initiate(), fetcher)

    result = job.poll_until_done(poll_interval=0)

    assert result is job
    assert len(fetcher.calls) == 2
    assert job.is_done() is True


def test_poll_until_done_waits_between_polls(monkeypatch):
    sleeps = []
    monkeypatch.setattr("photoshop_api.job.time.sleep", sleeps.append)
    fetcher = _RecordingStatusFetcher(
        [{"outputs": [{"status": "running"}]}, {"outputs": [{"status": "failed"}]}]
    )

    Job(_initiate(), fetcher).poll_until_done()

    assert sleeps == [2.0, 2.0]


def test_poll_until_done_honours_cancel_event():
    cancel = threading.Event()

    def fetcher(url):
        cancel.set()
        return {"outputs": [{"status": "running"}]}

    job = Job(_initiate(), fetcher)

    with pytest.raises(JobCancelledError) as excinfo:
        job.poll_until_done(poll_interval=0, cancel_event=cancel)
    assert STATUS_URL in str(excinfo.value)
    assert [output.status for output in job.outputs] == ["running"]


def test_poll_until_done_cancelled_before_first_poll():
    cancel = threading.Event()
    cancel.set()
    fetcher = _RecordingStatusFetcher([])

    with pytest.raises(JobCancelledError):
        Job(_initiate(), fetcher).poll_until_done(poll_interval=0, cancel_event=cancel)
    assert fetcher.calls == []


def test_decode_status_response_shapes():
    assert isinstance(decode_status_response({"outputs": []}), MultiOutputResponse)
    assert isinstance(decode_status_response({"status": "pending"}), SingleOutputResponse)
    assert decode_status_response(None).job_outputs() == []


def test_next_snapshot_keeps_url_without_self_link():
    previous = JobSnapshot(url=STATUS_URL)

    snapshot = next_snapshot(previous, {"jobId": "abc", "outputs": [{"status": "succeeded"}]})

    assert snapshot.url == STATUS_URL
    assert snapshot.job_id == "abc"
    assert snapshot.is_done is True
    assert previous.outputs == ()
