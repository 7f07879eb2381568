"""
One-shot HTTP request forwarding for the desktop client.

The GUI cannot reach arbitrary hosts itself, so it hands the request here: one
outbound call through `requests`, and the response comes back as a
ProxyResponse with the raw header values and the body as text whatever its
content type. Timeouts, redirects and TLS are whatever the transport does by
default; nothing is retried or cached.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from http.cookiejar import DefaultCookiePolicy
from typing import Any

import requests

from api_desk.domains.models import HTTP_METHODS, ProxyResponse
from api_desk.errors import TransportError, UnsupportedMethodError
from api_desk.utils.logger import get_logger

logger = get_logger()

SUPPORTED_METHODS = HTTP_METHODS
BODYLESS_METHODS = frozenset({"GET", "HEAD"})

_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([^\"';\s]+)", re.IGNORECASE)


def normalize_method(method: str) -> str:
    """
    Upper-case `method` and check it is forwardable.

    Raises:
        UnsupportedMethodError: For anything outside SUPPORTED_METHODS.
    """
    upper = (method or "").upper()
    if upper not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(method)
    return upper


def _decode_header_value(value: str | bytes) -> str | None:
    # http.client hands values over as latin-1 text; undo that to get the wire
    # bytes back, then insist on UTF-8. None means "not valid text".
    try:
        raw = value if isinstance(value, bytes) else value.encode("latin-1")
        return raw.decode("utf-8")
    except UnicodeError:
        return None


def _collect_headers(raw_headers: Mapping[str, Any]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in raw_headers.items():
        decoded = _decode_header_value(value)
        if decoded is None:
            logger.warning("Failed to decode response header %r as UTF-8; skipping this header", key)
            continue
        out[str(key).lower()] = decoded
    return out


def _body_text(content: bytes | None, headers: Mapping[str, str]) -> str:
    if not content:
        return ""
    encoding = "utf-8"
    match = _CHARSET_RE.search(headers.get("content-type", ""))
    if match:
        encoding = match.group(1)
    try:
        return content.decode(encoding, errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


class RequestForwarder:
    """
    Forward a single HTTP request and normalise the response.

    Stateless apart from the transport session, so one instance can serve
    concurrent calls. Pass a session to share connection pooling or to inject a
    fake transport in tests. The session never keeps cookies: each call sends
    only the headers it was given.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session or requests.Session()
        self._session.cookies.clear()
        self._session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def forward(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> ProxyResponse:
        """
        Issue one outbound request and return its status, headers and body.

        Args:
            url: Target URL, used as given.
            method: HTTP method in any letter case.
            headers: Sent verbatim, in mapping order.
            body: Raw payload, sent as UTF-8 bytes. Dropped for GET and HEAD.

        Returns:
            ProxyResponse with lower-cased header names. Header values that are
            not valid UTF-8 are left out (and logged); the body is decoded with
            the response charset, else UTF-8, replacing undecodable bytes.

        Raises:
            UnsupportedMethodError: Before any I/O, for an unknown method.
            TransportError: On DNS, connection, TLS or timeout failure.
        """
        verb = normalize_method(method)

        data: bytes | None = None
        if body is not None and verb not in BODYLESS_METHODS:
            data = body.encode("utf-8")

        try:
            response = self._session.request(
                verb,
                url,
                headers=dict(headers) if headers else None,
                data=data,
            )
        except requests.RequestException as e:
            logger.exception("Forwarded %s %s failed: %s", verb, url, e)
            raise TransportError(f"Request failed: {e}", e) from e

        response_headers = _collect_headers(response.headers)
        result = ProxyResponse(
            status=int(response.status_code),
            headers=response_headers,
            body=_body_text(response.content, response_headers),
        )
        logger.info("Forwarded %s %s -> %d", verb, url, result.status)
        return result


def forward_request(
    url: str,
    method: str,
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
) -> ProxyResponse:
    """Forward with a throwaway RequestForwarder (fresh session per call)."""
    with requests.Session() as session:
        return RequestForwarder(session).forward(url, method, headers=headers, body=body)
