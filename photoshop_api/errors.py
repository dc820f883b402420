"""Error taxonomy raised by the Photoshop API client."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional, Type


class ErrorCode(str, Enum):
    """Closed set of error kinds surfaced by the client."""

    SDK_INITIALIZATION = "ERROR_SDK_INITIALIZATION"
    STATUS_URL_MISSING = "ERROR_STATUS_URL_MISSING"
    NO_FILE_PROVIDED = "ERROR_NO_FILE_PROVIDED"
    MISSING_HREF = "ERROR_MISSING_HREF"
    JOB_CANCELLED = "ERROR_JOB_CANCELLED"
    INPUT_VALIDATION = "ERROR_INPUT_VALIDATION"
    PAYLOAD_VALIDATION = "ERROR_PAYLOAD_VALIDATION"
    REQUEST_BODY = "ERROR_REQUEST_BODY"
    BAD_REQUEST = "ERROR_BAD_REQUEST"
    UNAUTHORIZED = "ERROR_UNAUTHORIZED"
    AUTH_FORBIDDEN = "ERROR_AUTH_FORBIDDEN"
    FILE_EXISTS = "ERROR_FILE_EXISTS"
    INPUT_FILE_EXISTS = "ERROR_INPUT_FILE_EXISTS"
    RESOURCE_NOT_FOUND = "ERROR_RESOURCE_NOT_FOUND"
    INVALID_CONTENT_TYPE = "ERROR_INVALID_CONTENT_TYPE"
    UNDEFINED = "ERROR_UNDEFINED"
    UNKNOWN = "ERROR_UNKNOWN"


_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.SDK_INITIALIZATION: "SDK initialization error(s). Missing arguments: {}",
    ErrorCode.STATUS_URL_MISSING: "Status URL is missing in the response: {}",
    ErrorCode.NO_FILE_PROVIDED: "No file provided",
    ErrorCode.MISSING_HREF: "Missing href: {}",
    ErrorCode.JOB_CANCELLED: "Polling was cancelled for job status URL: {}",
    ErrorCode.UNKNOWN: "Unknown Error: {}",
}

SDK_NAME = "PhotoshopSDK"


def format_message(code: ErrorCode, *message_values: Any) -> str:
    """Render the message for ``code`` with its positional values."""

    template = _MESSAGES.get(code, "{}")
    expected = template.count("{}")
    values = [str(value) for value in message_values[:expected]]
    values.extend([""] * (expected - len(values)))
    return f"[{SDK_NAME}:{code.value}] {template.format(*values)}"


def serialize(value: Any) -> str:
    """Compact JSON rendering used when embedding payloads in messages."""

    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return repr(value)


class PhotoshopSDKError(Exception):
    """Base class for every error raised by the client."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, *message_values: Any, sdk_details: Optional[Dict[str, Any]] = None) -> None:
        self.message_values = message_values
        self.sdk_details = sdk_details or {}
        self.message = format_message(self.code, *message_values)
        super().__init__(self.message)


class SDKInitializationError(PhotoshopSDKError, ValueError):
    code = ErrorCode.SDK_INITIALIZATION


class StatusUrlMissingError(PhotoshopSDKError, ValueError):
    """The initiate response did not expose a status URL."""

    code = ErrorCode.STATUS_URL_MISSING


class NoFileProvidedError(PhotoshopSDKError, ValueError):
    code = ErrorCode.NO_FILE_PROVIDED


class MissingHrefError(PhotoshopSDKError, ValueError):
    code = ErrorCode.MISSING_HREF


class JobCancelledError(PhotoshopSDKError):
    """Raised by ``Job.poll_until_done`` when its cancel event is set."""

    code = ErrorCode.JOB_CANCELLED


class InputValidationError(PhotoshopSDKError):
    code = ErrorCode.INPUT_VALIDATION


class PayloadValidationError(PhotoshopSDKError):
    code = ErrorCode.PAYLOAD_VALIDATION


class RequestBodyError(PhotoshopSDKError):
    code = ErrorCode.REQUEST_BODY


class BadRequestError(PhotoshopSDKError):
    code = ErrorCode.BAD_REQUEST


class UnauthorizedError(PhotoshopSDKError):
    code = ErrorCode.UNAUTHORIZED


class AuthForbiddenError(PhotoshopSDKError):
    code = ErrorCode.AUTH_FORBIDDEN


class OutputFileExistsError(PhotoshopSDKError):
    code = ErrorCode.FILE_EXISTS


class InputFileExistsError(PhotoshopSDKError):
    code = ErrorCode.INPUT_FILE_EXISTS


class ResourceNotFoundError(PhotoshopSDKError):
    code = ErrorCode.RESOURCE_NOT_FOUND


class InvalidContentTypeError(PhotoshopSDKError):
    code = ErrorCode.INVALID_CONTENT_TYPE


class ServiceError(PhotoshopSDKError):
    code = ErrorCode.UNDEFINED


class UnknownError(PhotoshopSDKError):
    code = ErrorCode.UNKNOWN


_BAD_REQUEST_TYPES: Dict[str, Type[PhotoshopSDKError]] = {
    "InputValidationError": InputValidationError,
    "PayloadValidationError": PayloadValidationError,
    "RequestBodyError": RequestBodyError,
}

_NOT_FOUND_TYPES: Dict[str, Type[PhotoshopSDKError]] = {
    "FileExistsErrors": OutputFileExistsError,
    "InputFileExistsErrors": InputFileExistsError,
}


def error_class_for(status_code: Optional[int], error_type: Optional[str] = None) -> Type[PhotoshopSDKError]:
    """Select the error class for an HTTP status and the ``type`` field of its body."""

    if status_code == 400:
        return _BAD_REQUEST_TYPES.get(error_type or "", BadRequestError)
    if status_code == 401:
        return UnauthorizedError
    if status_code == 403:
        return AuthForbiddenError
    if status_code == 404:
        return _NOT_FOUND_TYPES.get(error_type or "", ResourceNotFoundError)
    if status_code == 415:
        return InvalidContentTypeError
    if status_code == 500:
        return ServiceError
    return UnknownError
