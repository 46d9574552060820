"""Opaque cursor tokens for paginated listing."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping

from ..domain.errors import ValidationError


def encode_cursor(last_key: Mapping[str, Any] | None) -> str | None:
    if not last_key:
        return None
    payload = json.dumps(last_key, sort_keys=True, separators=(",", ":"))
    token = base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")
    return token.rstrip("=")


def decode_cursor(cursor: str | None) -> dict[str, Any] | None:
    if not cursor:
        return None
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        payload = base64.urlsafe_b64decode(padded.encode("ascii"))
        last_key = json.loads(payload.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise ValidationError("An invalid cursor was provided") from exc
    if not isinstance(last_key, dict) or not last_key:
        raise ValidationError("An invalid cursor was provided")
    return last_key
