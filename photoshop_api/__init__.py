"""Python client for the Adobe Photoshop, Lightroom and Sensei image APIs."""

from .client import PhotoshopAPI, init
from .config import PhotoshopAPIOptions
from .contracts import FileReference, JobOutput, JobSnapshot
from .errors import (
    ErrorCode,
    JobCancelledError,
    MissingHrefError,
    NoFileProvidedError,
    PhotoshopSDKError,
    SDKInitializationError,
    StatusUrlMissingError,
)
from .file_resolver import FileResolver
from .file_storage import FileStorage, S3FileStorage
from .job import Job
from .storage import infer_mime_type_from_path, infer_storage_from_url
from .types import (
    BackgroundFill,
    BlendMode,
    Colorspace,
    HorizontalAlignment,
    JobOutputStatus,
    LayerType,
    ManageMissingFonts,
    MimeType,
    ParagraphAlignment,
    PngCompression,
    StandardIccProfileNames,
    Storage,
    TextOrientation,
    VerticalAlignment,
    WhiteBalance,
)

__all__ = [
    "BackgroundFill",
    "BlendMode",
    "Colorspace",
    "ErrorCode",
    "FileReference",
    "FileResolver",
    "FileStorage",
    "HorizontalAlignment",
    "Job",
    "JobCancelledError",
    "JobOutput",
    "JobOutputStatus",
    "JobSnapshot",
    "LayerType",
    "ManageMissingFonts",
    "MimeType",
    "MissingHrefError",
    "NoFileProvidedError",
    "ParagraphAlignment",
    "PhotoshopAPI",
    "PhotoshopAPIOptions",
    "PhotoshopSDKError",
    "PngCompression",
    "S3FileStorage",
    "SDKInitializationError",
    "StandardIccProfileNames",
    "StatusUrlMissingError",
    "Storage",
    "TextOrientation",
    "VerticalAlignment",
    "WhiteBalance",
    "infer_mime_type_from_path",
    "infer_storage_from_url",
    "init",
]
