import base64
import io
import lzma
import struct
import zlib

import pytest
from PIL import Image

from paybysquare.models import PaymentRequest

SK_IBAN = "SK9611000000002918599669"


@pytest.fixture
def payment() -> PaymentRequest:
    return PaymentRequest(
        amount=100.5,
        iban=SK_IBAN,
        beneficiary_name="John Doe",
        variable_symbol="1234567890",
        note="Payment for invoice",
    )


def decode_code(code: str) -> tuple[bytes, str]:
    """Undo the encoding of a code, returning the header and the field string."""
    blob = base64.b32hexdecode(code + "=" * (-len(code) % 8))
    header, compressed = blob[:4], blob[4:]
    payload = lzma.decompress(compressed)
    (crc,) = struct.unpack("<I", payload[:4])
    data = payload[4:]
    assert crc == zlib.crc32(data)
    return header, data.decode("utf-8")


def png_image(data: bytes) -> Image.Image:
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    return Image.open(io.BytesIO(data))


def solid_png(width: int, height: int, color=(255, 0, 0, 255)) -> bytes:
    dst = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(dst, format="png")
    return dst.getvalue()
