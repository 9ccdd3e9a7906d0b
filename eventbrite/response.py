"""
Reduce transport responses to NormalizedResponse values
"""

import json
from collections.abc import Mapping
from typing import Any

from urllib3 import HTTPHeaderDict

from .models import NormalizedResponse


def is_valid_json(value: Any) -> bool:
    """
    Check a payload to see if it's JSON

    Only text and bytes can be JSON; anything else (including None) is not.
    """
    if not isinstance(value, str | bytes | bytearray):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def decode_body(text: Any) -> Any:
    """Return the decoded JSON value, or the payload unchanged if it isn't JSON"""
    if is_valid_json(text):
        return json.loads(text)
    return text


def header_multimap(headers: Mapping[str, Any] | None) -> dict[str, list[str]]:
    """
    Turn response headers into a name -> list of values mapping

    urllib3's HTTPHeaderDict keeps repeated headers (e.g. several Set-Cookie
    lines) apart, so those are read with getlist(). Other mappings carry a
    single value per name, or already a list.
    """
    if headers is None:
        return {}
    if isinstance(headers, HTTPHeaderDict):
        return {name: headers.getlist(name) for name in headers}

    multimap: dict[str, list[str]] = {}
    for name, value in headers.items():
        if isinstance(value, list | tuple):
            multimap[name] = [str(v) for v in value]
        else:
            multimap[name] = [str(value)]
    return multimap


def _response_headers(response: Any) -> Mapping[str, Any] | None:
    # requests folds repeated headers into one comma-joined value, the raw
    # urllib3 response still has them separately
    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    if isinstance(raw_headers, HTTPHeaderDict):
        return raw_headers
    return getattr(response, "headers", None)


def normalize_response(response: Any) -> NormalizedResponse:
    """
    Build the {code, headers, body} view of a transport response

    Args:
        response: Object exposing status_code, headers and text
                  (a requests.Response or anything shaped like one)

    Returns:
        NormalizedResponse whose body is the decoded JSON value when the
        payload is valid JSON, otherwise the raw text
    """
    return NormalizedResponse(
        code=int(response.status_code),
        headers=header_multimap(_response_headers(response)),
        body=decode_body(response.text),
    )
