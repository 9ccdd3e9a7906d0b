"""
Value types passed between the client, the transport and callers
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from requests.structures import CaseInsensitiveDict

if TYPE_CHECKING:
    from .http_client import Transport

HTTP_VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE")

DEFAULT_BASE_URL = "https://www.eventbriteapi.com/v3/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PROTOCOL_VERSION = "1.1"


@dataclass(frozen=True)
class ClientConfig:
    """Settings fixed at client construction"""

    token: str
    base_url: str = DEFAULT_BASE_URL
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    transport: "Transport | None" = None


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call options for EventbriteClient.call()

    query and headers are merged into what the client already has, body
    replaces. With raw_response set, call() hands back the transport's
    response object untouched.
    """

    query: dict[str, str] = field(default_factory=dict)
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    raw_response: bool = False

    @classmethod
    def from_value(cls, options: "RequestOptions | Mapping[str, Any] | None") -> "RequestOptions":
        """
        Coerce None, a RequestOptions or a plain options dict

        Dict keys mirror the field names. ``parse_response=False`` is accepted
        as an alias for ``raw_response=True``.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options

        raw_response = bool(options.get("raw_response", False))
        if options.get("parse_response") is False:
            raw_response = True

        return cls(
            query=dict(options.get("query") or {}),
            body=options.get("body"),
            headers=dict(options.get("headers") or {}),
            protocol_version=options.get("protocol_version") or DEFAULT_PROTOCOL_VERSION,
            raw_response=raw_response,
        )


def merge_options(
    options: RequestOptions | Mapping[str, Any] | None,
    params: Mapping[str, str] | None = None,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
) -> RequestOptions:
    """
    Merge explicit call arguments over an options bag

    Query parameters and headers are unioned, explicit values winning on key
    collision. A non-None body always replaces the one in options. The input
    is never mutated.

    Args:
        options: Pre-existing options (RequestOptions, dict or None)
        params: Query parameters to merge
        body: Request body to set
        headers: Headers to merge

    Returns:
        New RequestOptions
    """
    merged = RequestOptions.from_value(options)
    changes: dict[str, Any] = {}

    if params is not None:
        changes["query"] = {**merged.query, **params}
    if body is not None:
        changes["body"] = body
    if headers is not None:
        changes["headers"] = merge_headers(merged.headers, headers)

    return replace(merged, **changes) if changes else merged


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header mappings, later layers winning

    Header names are case-insensitive: a later "x-a" replaces an earlier
    "X-A" and takes its spelling.
    """
    merged: CaseInsensitiveDict = CaseInsensitiveDict()
    for layer in layers:
        for name, value in (layer or {}).items():
            # delete first so the later spelling is the one kept
            merged.pop(name, None)
            merged[name] = value
    return dict(merged.items())


@dataclass(frozen=True)
class ApiRequest:
    """A fully built request, as handed to the transport"""

    verb: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    protocol_version: str = DEFAULT_PROTOCOL_VERSION


@dataclass(frozen=True, eq=False)
class NormalizedResponse(Mapping):
    """
    Uniform {code, headers, body} view of a transport response

    Behaves as a read-only mapping with exactly those three keys, so
    ``response["body"]`` works and it compares equal to the equivalent dict.
    """

    code: int
    headers: dict[str, list[str]]
    body: Any

    _KEYS = ("code", "headers", "body")

    def __getitem__(self, key: str) -> Any:
        if key not in self._KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._KEYS)

    def __len__(self) -> int:
        return len(self._KEYS)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "headers": self.headers, "body": self.body}
