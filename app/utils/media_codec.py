"""
Inline media decoding.

Clients send media as base64 strings, optionally wrapped in a data URI
such as ``data:image/png;base64,...``. This module turns them into raw bytes.
Pure functions, no I/O.
"""

import base64
import binascii
import re
from typing import NamedTuple, Optional

from app.core.exceptions import DecodeError

DATA_URI_PREFIX = re.compile(r"^data:(image/\w+);base64,")
BASE64_BODY = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")
URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


class DecodedMedia(NamedTuple):
    content: bytes
    content_type: Optional[str]  # declared by the data URI, None when absent


def decode_inline_media(payload) -> DecodedMedia:
    """
    Decode one inline media payload.

    Args:
        payload: base64 string with an optional ``data:image/<type>;base64,`` prefix

    Returns:
        DecodedMedia with the raw bytes and the declared content type (if any)

    Raises:
        DecodeError: payload is not a string, is empty, or is not valid base64
    """
    if not isinstance(payload, str):
        raise DecodeError(f"Media payload must be a string, got {type(payload).__name__}")

    content_type = None
    match = DATA_URI_PREFIX.match(payload)
    if match:
        content_type = match.group(1)
        payload = payload[match.end():]

    # Line-wrapped base64 is common from mobile clients
    encoded = "".join(payload.split())
    if not encoded:
        raise DecodeError("Media payload is empty")

    # Accept the URL-safe alphabet and missing padding, as browsers and Node do
    encoded = encoded.translate(URLSAFE_TO_STANDARD)
    if not BASE64_BODY.match(encoded) or len(encoded.rstrip("=")) % 4 == 1:
        raise DecodeError("Media payload is not valid base64")
    encoded = encoded.rstrip("=")
    encoded += "=" * (-len(encoded) % 4)

    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Media payload is not valid base64: {e}") from e

    if not content:
        raise DecodeError("Media payload decoded to zero bytes")

    return DecodedMedia(content=content, content_type=content_type)
