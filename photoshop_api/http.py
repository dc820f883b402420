"""HTTP session construction and error translation for the remote API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import PhotoshopAPIOptions
from .errors import PhotoshopSDKError, error_class_for

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = frozenset([429, *range(500, 600)])


def build_session(
    *,
    api_key: str,
    access_token: str,
    org_id: str,
    options: PhotoshopAPIOptions,
) -> requests.Session:
    """Return a session carrying auth headers, retries and debug logging."""

    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {access_token}",
            "x-api-key": api_key,
            "x-gw-ims-org-id": org_id,
            "Content-Type": "application/json",
        }
    )
    retry = Retry(
        total=options.max_retries,
        backoff_factor=options.retry_backoff_seconds,
        status_forcelist=sorted(RETRY_STATUS_CODES),
        allowed_methods=None,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.hooks["response"].append(log_response)
    return session


def log_response(response: requests.Response, *args: Any, **kwargs: Any) -> requests.Response:
    if logger.isEnabledFor(logging.DEBUG):
        request = response.request
        logger.debug("REQUEST: %s %s %s", request.method, request.url, _body_text(request.body))
        logger.debug("RESPONSE: %s %s", response.status_code, response.text)
    return response


def _body_text(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return str(body)


def response_body(response: requests.Response) -> Any:
    """Return the JSON body of ``response`` or its text when it is not JSON."""

    try:
        return response.json()
    except ValueError:
        return response.text


def reduce_error(response: requests.Response) -> str:
    """Format an HTTP failure as ``<status> - <reason> (<body>)``."""

    body = response_body(response)
    return f"{response.status_code} - {response.reason} ({json.dumps(body)})"


def error_from_response(response: requests.Response) -> PhotoshopSDKError:
    """Translate an unsuccessful response into the matching SDK error."""

    body = response_body(response)
    error_type = body.get("type") if isinstance(body, dict) else None
    error_cls = error_class_for(response.status_code, error_type)
    details: Dict[str, Any] = {"status": response.status_code, "url": response.url}
    return error_cls(reduce_error(response), sdk_details=details)
