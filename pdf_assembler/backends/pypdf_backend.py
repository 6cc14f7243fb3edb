"""pypdf codec implementation for PDF Assembler."""

from __future__ import annotations

import io
import logging
from typing import Dict, Optional

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.errors import PdfReadError, PyPdfError

from ..exceptions import CodecError, EncryptedPDFError, InvalidPDFError
from ..types import Document, PageUnit
from .base import DocumentCodec

LOGGER = logging.getLogger("pdf_assembler.codec")


def _read_metadata(reader: PdfReader) -> Dict[str, str]:
    metadata = reader.metadata
    if not metadata:
        return {}
    values: Dict[str, str] = {}
    for key in metadata.keys():
        try:
            value = metadata[key]
        except Exception as exc:  # pragma: no cover - broken info dictionaries vary
            LOGGER.debug("Skipping unreadable metadata entry %s: %s", key, exc)
            continue
        if isinstance(key, str) and value is not None:
            values[key] = str(value)
    return values


class PypdfCodec(DocumentCodec):
    """Codec that uses `pypdf` under the hood.

    Pages are kept as the reader's ``PageObject`` instances. ``PdfWriter``
    clones each page into the output, so encoding never mutates a page.
    """

    def __init__(self, password: Optional[str] = None) -> None:
        self.password = password

    def decode(self, data: bytes) -> Document:
        if not data:
            raise InvalidPDFError("PDF data is empty.")

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF data. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF. Error: {exc}") from exc

        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF")
            try:
                decrypted = reader.decrypt(self.password or "")
            except Exception as exc:
                raise EncryptedPDFError(f"Unable to decrypt PDF. Error: {exc}") from exc
            if decrypted == 0:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        try:
            pages = [
                PageUnit(origin=index, payload=page)
                for index, page in enumerate(reader.pages, start=1)
            ]
        except Exception as exc:
            raise InvalidPDFError(f"Unable to read PDF page tree. Error: {exc}") from exc

        document = Document(pages=pages, metadata=_read_metadata(reader))
        LOGGER.debug("Decoded PDF with %d pages (%d bytes)", document.page_count, len(data))
        return document

    def encode(self, document: Document) -> bytes:
        writer = PdfWriter()
        for position, page in enumerate(document.pages, start=1):
            if not isinstance(page.payload, PageObject):
                raise CodecError(
                    f"Page {position} (origin {page.origin}) is not a pypdf page: "
                    f"{type(page.payload).__name__}"
                )
            try:
                writer.add_page(page.payload)
            except (PyPdfError, ValueError, KeyError, TypeError) as exc:
                raise CodecError(f"Unable to add page {position} to PDF. Error: {exc}") from exc

        if document.metadata:
            writer.add_metadata(document.metadata)

        buffer = io.BytesIO()
        try:
            writer.write(buffer)
        except Exception as exc:
            raise CodecError(f"Unable to serialise PDF. Error: {exc}") from exc
        return buffer.getvalue()


__all__ = ["PypdfCodec"]
