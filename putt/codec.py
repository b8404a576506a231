"""
Text compression codec used by backtick literals and the cmp/dmp operations.

Payloads are DEFLATE streams carried as base64 text, so a compressed string
can be pasted between backticks in a source file.
"""

import base64
import binascii
import zlib

from .errors import DecodeError


def compress(data: bytes) -> bytes:
    """Compress raw bytes."""
    return zlib.compress(data, 9)


def decompress(data: bytes, operation: str = "Decompress") -> bytes:
    """Decompress raw bytes, raising DecodeError on a malformed stream."""
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise DecodeError(operation, str(e)) from e


def compress_text(text: str) -> str:
    """Compress a string into its printable payload form."""
    return base64.b64encode(compress(text.encode('utf-8'))).decode('ascii')


def decompress_text(payload: str, operation: str = "Decompress") -> str:
    """Recover the original string from a payload made by compress_text()."""
    try:
        raw = base64.b64decode(payload.strip().encode('ascii'), validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise DecodeError(operation, "payload is not base64") from e

    data = decompress(raw, operation)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(operation, "payload is not UTF-8 text") from e
