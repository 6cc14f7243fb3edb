"""Conversion between document pages and raster images.

Requires the ``raster`` extra (Pillow and pdf2image). Rasterising pages also
needs the poppler utilities that pdf2image drives.
"""

from __future__ import annotations

import io
import logging
from typing import Iterable, List, Optional

from .assembler import merge_documents
from .backends import DocumentCodec, resolve_codec
from .exceptions import CodecError, RasterError
from .types import Document

LOGGER = logging.getLogger("pdf_assembler.raster")

_EXTRA_HINT = "Install it with: pip install 'pdf-assembler-cli[raster]'"


def _load_pillow():
    try:
        from PIL import Image, UnidentifiedImageError
    except ImportError as exc:
        raise RasterError(f"Pillow is required for image conversion. {_EXTRA_HINT}") from exc
    return Image, UnidentifiedImageError


def image_to_pdf_bytes(image_data: bytes, *, quality: int = 90) -> bytes:
    """Return a single-page PDF containing ``image_data``."""

    Image, UnidentifiedImageError = _load_pillow()
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            page = img.convert("RGB") if img.mode not in {"RGB", "L"} else img.copy()
    except (UnidentifiedImageError, OSError) as exc:
        raise RasterError(f"Unable to read image. Error: {exc}") from exc

    output = io.BytesIO()
    try:
        page.save(output, format="PDF", quality=quality)
    except (OSError, ValueError) as exc:
        raise RasterError(f"Unable to convert image to PDF. Error: {exc}") from exc
    finally:
        page.close()
    return output.getvalue()


def images_to_document(
    images: Iterable[bytes],
    *,
    codec: Optional[DocumentCodec] = None,
    quality: int = 90,
) -> Document:
    """Build a document with one page per image, in order."""

    codec = resolve_codec(codec)
    pages: List[Document] = []
    for index, image_data in enumerate(images, start=1):
        LOGGER.debug("Converting image %d to a PDF page", index)
        pdf_bytes = image_to_pdf_bytes(image_data, quality=quality)
        try:
            pages.append(codec.decode(pdf_bytes))
        except CodecError as exc:
            raise RasterError(f"Converted image {index} is not a readable PDF. Error: {exc}") from exc

    if not pages:
        raise RasterError("No images provided")

    document = merge_documents(pages)
    LOGGER.info("Converted %d image(s) into a PDF", document.page_count)
    return document


def document_to_images(
    document: Document,
    *,
    codec: Optional[DocumentCodec] = None,
    dpi: int = 150,
    quality: int = 90,
) -> List[bytes]:
    """Rasterise every page of ``document`` to JPEG bytes."""

    if document.page_count == 0:
        return []

    _load_pillow()
    try:
        from pdf2image import convert_from_bytes
        from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError
    except ImportError as exc:
        raise RasterError(f"pdf2image is required to rasterise pages. {_EXTRA_HINT}") from exc

    pdf_bytes = resolve_codec(codec).encode(document)
    try:
        rendered = convert_from_bytes(pdf_bytes, dpi=dpi)
    except PDFInfoNotInstalledError as exc:
        raise RasterError("poppler is not installed or not on PATH.") from exc
    except (PDFPageCountError, PDFSyntaxError) as exc:
        raise RasterError(f"Unable to rasterise PDF. Error: {exc}") from exc

    images: List[bytes] = []
    for index, image in enumerate(rendered, start=1):
        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, format="JPEG", quality=quality)
        images.append(buffer.getvalue())
        LOGGER.debug("Rasterised page %d (%d bytes)", index, len(images[-1]))

    LOGGER.info("Rasterised %d page(s) at %d dpi", len(images), dpi)
    return images


__all__ = ["image_to_pdf_bytes", "images_to_document", "document_to_images"]
