"""Decoding HTTP response bodies.

Bridges the transport layer and the parsers: :func:`decode_json` turns an
:class:`httpx.Response` into the JSON value that :mod:`prismic.parser` and
:class:`~prismic.models.ApiData` consume, and :func:`error_message` pulls a
human-readable message out of an error response.
"""

from __future__ import annotations

from typing import Any

import httpx

from prismic.exceptions import ParseError


def decode_json(response: httpx.Response) -> Any:
    """Decode the JSON body of *response*.

    Args:
        response: A successful :class:`httpx.Response`.

    Returns:
        The decoded JSON value.

    Raises:
        ParseError: If the body is empty or is not valid JSON.
    """
    if not response.content:
        raise ParseError(f"Empty response body from {response.request.url}")
    try:
        return response.json()
    except ValueError as exc:
        snippet = response.text[:200]
        raise ParseError(
            f"Response from {response.request.url} is not JSON: {snippet!r}"
        ) from exc


def error_message(response: httpx.Response) -> str:
    """Build an ``HTTP <status>: <message>`` string from an error response.

    The API reports errors as ``{"error": ...}`` or ``{"message": ...}``;
    anything else falls back to the first 200 characters of the body.
    """
    try:
        detail = response.json()
        if isinstance(detail, dict):
            msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
        else:
            msg = str(detail)
    except ValueError:
        msg = response.text[:200] if response.text else ""

    prefix = f"HTTP {response.status_code}"
    return f"{prefix}: {msg}" if msg else prefix
