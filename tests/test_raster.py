from __future__ import annotations

import builtins
import io
import shutil

import pytest

from pdf_assembler import Document, PypdfCodec, RasterError, document_to_images, images_to_document
from pdf_assembler.raster import image_to_pdf_bytes

from conftest import build_pdf_bytes


def _jpeg(size: tuple[int, int], mode: str = "RGB") -> bytes:
    Image = pytest.importorskip("PIL.Image")
    buffer = io.BytesIO()
    image = Image.new(mode, size)
    image.save(buffer, format="PNG" if mode == "RGBA" else "JPEG")
    return buffer.getvalue()


def test_images_to_document_one_page_per_image() -> None:
    document = images_to_document([_jpeg((30, 20)), _jpeg((10, 40), mode="RGBA"), _jpeg((5, 5), mode="L")])

    assert document.page_count == 3
    reader_pages = [page.payload for page in document]
    assert float(reader_pages[0].mediabox.width) > float(reader_pages[0].mediabox.height)
    assert len(PypdfCodec().encode(document)) > 0


def test_image_to_pdf_bytes_rejects_garbage() -> None:
    pytest.importorskip("PIL")
    with pytest.raises(RasterError):
        image_to_pdf_bytes(b"not an image")


def test_images_to_document_requires_images() -> None:
    pytest.importorskip("PIL")
    with pytest.raises(RasterError):
        images_to_document([])


def test_missing_pillow_raises_raster_error(monkeypatch: pytest.MonkeyPatch) -> None:
    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "PIL" or name.startswith("PIL."):
            raise ImportError("no PIL")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(RasterError, match="raster"):
        image_to_pdf_bytes(b"anything")


def test_document_to_images_empty_document() -> None:
    assert document_to_images(Document()) == []


def test_document_to_images_renders_jpegs() -> None:
    pytest.importorskip("pdf2image")
    if shutil.which("pdftoppm") is None:
        pytest.skip("poppler is not installed")

    document = PypdfCodec().decode(build_pdf_bytes(2))
    images = document_to_images(document, dpi=36)

    assert len(images) == 2
    assert all(image[:2] == b"\xff\xd8" for image in images)
