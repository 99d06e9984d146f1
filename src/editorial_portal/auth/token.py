"""Identity decoder: reads the payload segment of a bearer credential.

The signature is never verified here. The backend checks it on every
authenticated request; the portal decodes purely to know whom to greet and
which controls to offer.
"""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import ValidationError as PydanticValidationError

from editorial_portal.models.identity import Identity, TokenPayload

_SEGMENT_COUNT = 3


class DecodeError(ValueError):
    """The credential could not be decoded into a payload."""


def _b64url_decode(segment: str) -> bytes:
    standard = segment.replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    return base64.b64decode(standard, validate=True)


def decode_token(credential: str) -> TokenPayload:
    """Decode the middle segment of ``header.payload.signature``."""
    if not isinstance(credential, str):
        msg = "credential must be a string"
        raise DecodeError(msg)
    parts = credential.split(".")
    if len(parts) != _SEGMENT_COUNT or not parts[1]:
        msg = "credential must have three segments and a non-empty payload"
        raise DecodeError(msg)

    try:
        raw = _b64url_decode(parts[1])
        text = raw.decode("utf-8")
        data = json.loads(text)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"invalid credential payload: {exc}"
        raise DecodeError(msg) from exc

    if not isinstance(data, dict):
        msg = "credential payload is not an object"
        raise DecodeError(msg)

    try:
        return TokenPayload.model_validate(data)
    except PydanticValidationError as exc:
        msg = f"credential payload is missing required claims: {exc.error_count()} error(s)"
        raise DecodeError(msg) from exc


def identity_from_token(credential: str) -> Identity:
    """Decode a credential straight into an Identity."""
    return Identity.from_payload(decode_token(credential))
