"""Base64 transport codec — tolerates a data-URI prefix on input, never emits one."""
import base64
import binascii

from photocritic.constants import DATA_URL_PREFIX, DATA_URL_SEPARATOR, IMAGE_MEDIA_TYPE
from photocritic.errors import DecodeError


def strip_prefix(encoded: str) -> str:
    """Drop everything up to and including the first separator, if any."""
    match encoded.partition(DATA_URL_SEPARATOR):
        case (_, "", _):
            return encoded
        case (_, _, payload):
            return payload


def decode_image(encoded: str) -> bytes:
    # Line-wrapped base64 (MIME style) is accepted; CR/LF carry no data.
    payload = strip_prefix(encoded).replace("\r", "").replace("\n", "").strip()
    if not payload:
        raise DecodeError("empty image payload")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise DecodeError("payload is not valid base64") from exc


def encode_image(data: bytes) -> str:
    return base64.standard_b64encode(data).decode("ascii")


def to_data_url(data: bytes, media_type: str = IMAGE_MEDIA_TYPE) -> str:
    return (DATA_URL_PREFIX % media_type) + encode_image(data)
