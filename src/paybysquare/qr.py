import io
import logging

import numpy as np
import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError

from paybysquare.errors import ImageDecodingFailed, ImageEncodingFailed, QrGenerationFailed

logger = logging.getLogger(__name__)

# Share of the frame's shorter side covered by the QR code
FRAME_FILL_PERCENT = 85

DEFAULT_FRAME_BORDER = 10
DEFAULT_FRAME_BACKGROUND = (255, 255, 255, 255)
DEFAULT_FRAME_COLOR = (0, 102, 204, 255)


def generate_qr_image(code: str, size: int) -> bytes:
    """Render ``code`` as a ``size`` x ``size`` RGBA PNG."""
    qr = qrcode.QRCode(
        version=None,  # smallest version that fits
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=4,
    )
    qr.add_data(code)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise QrGenerationFailed(str(e)) from e

    # One pixel per module, dark modules black
    modules = np.asarray(qr.get_matrix(), dtype=bool)
    img = Image.fromarray(np.where(modules, 0, 255).astype(np.uint8))
    img = img.resize((size, size), resample=Image.Resampling.NEAREST)
    logger.debug("QR version %d scaled from %d to %d px", qr.version, modules.shape[0], size)
    return _to_png(img.convert("RGBA"))


def add_frame(qr_data: bytes, frame_data: bytes | None) -> bytes:
    """Center the QR code on ``frame_data``, scaled to 85% of its shorter side.

    Without a frame the QR code is returned untouched.
    """
    if frame_data is None:
        return qr_data

    qr_img = _load(qr_data, "source")
    frame_img = _load(frame_data, "frame")

    target_size = min(frame_img.width, frame_img.height) * FRAME_FILL_PERCENT // 100
    if target_size == 0:
        # Frame too small to hold anything
        return _to_png(frame_img)
    qr_resized = qr_img.resize((target_size, target_size), resample=Image.Resampling.NEAREST)
    x_offset = (frame_img.width - target_size) // 2
    y_offset = (frame_img.height - target_size) // 2

    frame_img.alpha_composite(qr_resized, dest=(x_offset, y_offset))
    return _to_png(frame_img)


def generate_default_frame(size: int) -> bytes:
    """Plain white square with a blue border."""
    border = DEFAULT_FRAME_BORDER
    pixels = np.empty((size, size, 4), dtype=np.uint8)
    pixels[:, :] = DEFAULT_FRAME_COLOR
    pixels[border:size - border, border:size - border] = DEFAULT_FRAME_BACKGROUND
    return _to_png(Image.fromarray(pixels))


def _load(data: bytes, which: str) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        return img.convert("RGBA")
    except OSError as e:
        raise ImageDecodingFailed(which, str(e)) from e


def _to_png(img: Image.Image) -> bytes:
    dst = io.BytesIO()
    try:
        img.save(dst, format="png")
    except (OSError, ValueError) as e:
        raise ImageEncodingFailed(str(e)) from e
    return dst.getvalue()
