import io

from PIL import Image

from idcards.services.images import preview_content_type, sniff_image_type


def _png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def test_declared_type_is_trusted():
    assert preview_content_type(b"anything", "image/webp") == "image/webp"


def test_generic_type_is_sniffed():
    assert preview_content_type(_png(), "application/octet-stream") == "image/png"
    assert preview_content_type(_png(), None) == "image/png"


def test_non_image_stays_generic():
    assert sniff_image_type(b"not an image") is None
    assert preview_content_type(b"not an image", "") == "application/octet-stream"
