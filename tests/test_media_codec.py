import base64

import pytest

from app.core.exceptions import DecodeError
from app.utils.media_codec import decode_inline_media


def test_decodes_data_uri_and_keeps_declared_type():
    payload = "data:image/png;base64," + base64.b64encode(b"png-bytes").decode()

    decoded = decode_inline_media(payload)

    assert decoded.content == b"png-bytes"
    assert decoded.content_type == "image/png"


def test_decodes_bare_base64_without_content_type():
    decoded = decode_inline_media(base64.b64encode(b"raw").decode())

    assert decoded.content == b"raw"
    assert decoded.content_type is None


def test_tolerates_line_wrapped_base64():
    encoded = base64.encodebytes(b"x" * 120).decode()  # wraps at 76 chars
    assert "\n" in encoded

    assert decode_inline_media(encoded).content == b"x" * 120


@pytest.mark.parametrize(
    "payload",
    [
        "not base64!",
        "a",  # one leftover character cannot encode a byte
        "abcde",
        "ab=c",
        "data:image/jpeg;base64,",
        "",
        "   ",
        "data:image/png;base64,@@@@",
        "ñandú",
    ],
)
def test_malformed_payloads_raise_decode_error(payload):
    with pytest.raises(DecodeError):
        decode_inline_media(payload)


@pytest.mark.parametrize("payload", [None, 42, {"data": "abc"}, ["abc"]])
def test_non_string_payloads_raise_decode_error(payload):
    with pytest.raises(DecodeError):
        decode_inline_media(payload)


def test_non_image_data_uri_is_not_stripped():
    # Only image/<type> prefixes are recognised; the rest is not valid base64
    with pytest.raises(DecodeError):
        decode_inline_media("data:text/plain;base64,aGVsbG8=")


def test_unpadded_base64_is_accepted():
    decoded = decode_inline_media("data:image/png;base64,aGVsbG8")

    assert decoded.content == b"hello"
    assert decoded.content_type == "image/png"


def test_urlsafe_alphabet_is_accepted():
    raw = b"\xfb\xff\xbf" * 4
    encoded = base64.urlsafe_b64encode(raw).decode()
    assert "-" in encoded or "_" in encoded

    assert decode_inline_media(encoded).content == raw
