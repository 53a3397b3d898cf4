"""Decoding of raw JSON:API request payloads."""

from __future__ import annotations

import json
from typing import Any

from jsonapi_render.core.errors import MalformedInput


def decode_request_body(raw: bytes | str | None) -> dict[str, Any]:
    """Parse a request body into a ``dict``; an empty or absent body decodes to ``{}``.

    Raises ``MalformedInput`` for invalid JSON and for any top-level value
    that is not an object.
    """
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedInput() from exc
    if not isinstance(payload, dict):
        raise MalformedInput()
    return payload
