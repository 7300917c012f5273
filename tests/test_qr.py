"""
QR rendering and frame compositing.
"""
import pytest
from PIL import Image

from paybysquare.errors import ImageDecodingFailed, ImageEncodingFailed, QrGenerationFailed
from paybysquare.qr import add_frame, generate_default_frame, generate_qr_image

from conftest import png_image, solid_png

CODE = "0004G00DRD6PTHHSBTPN84M9L5HH0I8NUH7V3G3CQ3GEVC3C9GM8BIV01JTG00"

RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


# ---------------------------------------------------------------------------
# QrRenderer
# ---------------------------------------------------------------------------

def test_qr_image_size():
    img = png_image(generate_qr_image(CODE, 300))
    assert img.size == (300, 300)
    assert img.mode == "RGBA"


def test_qr_image_is_black_and_white():
    img = png_image(generate_qr_image(CODE, 300))
    assert {color for _, color in img.getcolors()} == {BLACK, WHITE}
    # Quiet zone
    assert img.getpixel((0, 0)) == WHITE


@pytest.mark.parametrize("size", [21, 150, 1000])
def test_qr_image_other_sizes(size):
    assert png_image(generate_qr_image(CODE, size)).size == (size, size)


def test_qr_data_too_large():
    with pytest.raises(QrGenerationFailed):
        generate_qr_image("0" * 8000, 300)


def test_png_encoding_failure(monkeypatch):
    def broken_save(self, *args, **kwargs):
        raise OSError("disk on fire")

    monkeypatch.setattr(Image.Image, "save", broken_save)
    with pytest.raises(ImageEncodingFailed):
        generate_qr_image(CODE, 300)


# ---------------------------------------------------------------------------
# FrameCompositor
# ---------------------------------------------------------------------------

def test_no_frame_is_pass_through():
    qr = generate_qr_image(CODE, 300)
    assert add_frame(qr, None) is qr


def test_square_frame_placement():
    result = png_image(add_frame(generate_qr_image(CODE, 300), solid_png(500, 500)))
    assert result.size == (500, 500)
    assert result.mode == "RGBA"
    # floor(500 * 0.85) = 425 pixels placed at (37, 37)
    assert result.getpixel((36, 36)) == RED
    assert result.getpixel((37, 37)) == WHITE
    assert result.getpixel((37 + 424, 37 + 424)) == WHITE
    assert result.getpixel((37 + 425, 37 + 425)) == RED


def test_rectangular_frame_placement():
    result = png_image(add_frame(generate_qr_image(CODE, 300), solid_png(600, 400)))
    assert result.size == (600, 400)
    # inner = 340, offsets (130, 30)
    assert result.getpixel((129, 30)) == RED
    assert result.getpixel((130, 29)) == RED
    assert result.getpixel((130, 30)) == WHITE
    assert result.getpixel((469, 369)) == WHITE
    assert result.getpixel((470, 369)) == RED


def test_frame_decoding_failure():
    with pytest.raises(ImageDecodingFailed) as info:
        add_frame(generate_qr_image(CODE, 300), b"not a png")
    assert info.value.image == "frame"


def test_source_decoding_failure():
    with pytest.raises(ImageDecodingFailed) as info:
        add_frame(b"not a png", solid_png(100, 100))
    assert info.value.image == "source"


def test_default_frame():
    frame = png_image(generate_default_frame(400))
    assert frame.size == (400, 400)
    blue = (0, 102, 204, 255)
    assert frame.getpixel((0, 0)) == blue
    assert frame.getpixel((9, 9)) == blue
    assert frame.getpixel((10, 10)) == WHITE
    assert frame.getpixel((389, 389)) == WHITE
    assert frame.getpixel((390, 200)) == blue


def test_qr_on_default_frame():
    result = png_image(add_frame(generate_qr_image(CODE, 300), generate_default_frame(400)))
    assert result.size == (400, 400)
    assert result.getpixel((0, 0)) == (0, 102, 204, 255)


def test_frame_too_small_for_qr():
    result = png_image(add_frame(generate_qr_image(CODE, 300), solid_png(1, 1)))
    assert result.size == (1, 1)
    assert result.getpixel((0, 0)) == RED


def test_qr_size_is_capped():
    from pydantic import ValidationError

    from paybysquare.models import MAX_QR_SIZE, QrOptions

    QrOptions(qr_size=MAX_QR_SIZE)
    with pytest.raises(ValidationError):
        QrOptions(qr_size=MAX_QR_SIZE + 1)
