"""Typed contracts for file references and job status payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .types import TERMINAL_STATUSES, MimeType, Storage


class FileReference(BaseModel):
    """A reference to an input or output file.

    Only ``href`` is required by the service; ``storage`` and ``type`` are
    detected by :class:`~photoshop_api.file_resolver.FileResolver` when
    omitted. Operation specific settings (``mask``, ``width``, ``quality``,
    ``overwrite``...) are accepted as extra fields and sent as-is.
    """

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    href: Optional[str] = None
    storage: Optional[Storage] = None
    type: Optional[MimeType] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ContractModel(BaseModel):
    """Base model for immutable status payloads."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)


class JobOutput(ContractModel):
    """Status of a single output produced by a job."""

    input: Optional[Any] = None
    status: Optional[str] = None
    created: Optional[Any] = None
    modified: Optional[Any] = None
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")
    errors: Optional[Any] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def href(self) -> Optional[str]:
        """Convenience accessor for ``_links.self.href`` when present."""

        target = (self.links or {}).get("self")
        if isinstance(target, Mapping):
            return target.get("href")
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class StatusEnvelope(ContractModel):
    """Fields shared by every status response family."""

    job_id: Optional[str] = None
    created: Optional[Any] = None
    modified: Optional[Any] = None
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")


class MultiOutputResponse(StatusEnvelope):
    """Photoshop and Lightroom style status: an explicit ``outputs`` array."""

    outputs: List[JobOutput] = Field(default_factory=list)

    def job_outputs(self) -> List[JobOutput]:
        return list(self.outputs)


class SingleOutputResponse(StatusEnvelope):
    """Sensei (cutout/mask) style status: one output described at the root."""

    input: Optional[Any] = None
    status: Optional[str] = None
    output: Optional[Any] = None
    errors: Optional[Any] = None

    def job_outputs(self) -> List[JobOutput]:
        if self.output is None and self.errors is None:
            return []
        fields: Dict[str, Any] = {"input": self.input, "status": self.status}
        if self.output is not None:
            fields["_links"] = {"self": self.output}
        if self.errors is not None:
            fields["errors"] = self.errors
        return [JobOutput.model_validate(fields)]


StatusResponse = Union[MultiOutputResponse, SingleOutputResponse]


class JobSnapshot(ContractModel):
    """Observable state of a job after a given status observation."""

    url: str
    job_id: Optional[str] = None
    outputs: Tuple[JobOutput, ...] = ()
    links: Optional[Dict[str, Any]] = Field(default=None, alias="_links")

    @property
    def is_done(self) -> bool:
        return bool(self.outputs) and all(output.is_terminal for output in self.outputs)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "url": self.url,
            "outputs": [output.to_dict() for output in self.outputs],
        }
        if self.job_id is not None:
            payload["jobId"] = self.job_id
        if self.links is not None:
            payload["_links"] = self.links
        return payload
