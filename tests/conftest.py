from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, NameObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_assembler.exceptions import CodecError, InvalidPDFError  # noqa: E402
from pdf_assembler.types import Document, PageUnit  # noqa: E402


class FakeCodec:
    """In-memory codec with exact byte accounting.

    A document encodes to ``HEADER`` followed by its page payloads joined by
    ``SEPARATOR``, so sizes can be computed by hand in tests.
    """

    HEADER = b"%FAKE\n"
    SEPARATOR = b"\n"

    def __init__(self, fail_on: bytes | None = None) -> None:
        self.fail_on = fail_on
        self.encode_calls = 0

    def decode(self, data: bytes) -> Document:
        if not data.startswith(self.HEADER):
            raise InvalidPDFError("not a fake document")
        body = data[len(self.HEADER):]
        payloads = body.split(self.SEPARATOR) if body else []
        return Document(
            pages=[PageUnit(origin=index, payload=payload) for index, payload in enumerate(payloads, start=1)]
        )

    def encode(self, document: Document) -> bytes:
        self.encode_calls += 1
        payloads = []
        for page in document.pages:
            if not isinstance(page.payload, bytes):
                raise CodecError(f"unsupported payload {page.payload!r}")
            if self.fail_on is not None and page.payload == self.fail_on:
                raise CodecError("refusing to encode page")
            payloads.append(page.payload)
        return self.HEADER + self.SEPARATOR.join(payloads)

    @classmethod
    def size_of(cls, *payload_sizes: int) -> int:
        if not payload_sizes:
            return len(cls.HEADER)
        return len(cls.HEADER) + sum(payload_sizes) + len(cls.SEPARATOR) * (len(payload_sizes) - 1)


def make_document(count: int, tag: str = "p", size: int | None = None, title: str | None = None) -> Document:
    """Build a document of ``count`` byte pages named ``<tag><n>``."""

    pages = []
    for index in range(1, count + 1):
        payload = f"{tag}{index}".encode()
        if size is not None:
            payload = payload.ljust(size, b"x")
        pages.append(PageUnit(origin=index, payload=payload))
    metadata = {"/Title": title} if title else {}
    return Document(pages=pages, metadata=metadata)


def payloads(document: Document) -> list[bytes]:
    return [page.payload for page in document.pages]


def build_pdf_bytes(
    pages: int,
    *,
    title: str | None = None,
    content_lines: int = 0,
    password: str | None = None,
    width: int = 200,
) -> bytes:
    writer = PdfWriter()
    for index in range(pages):
        page = writer.add_blank_page(width=width + index, height=200)
        if content_lines:
            stream = DecodedStreamObject()
            stream.set_data(f"q 1 0 0 1 {index} {index} cm Q\n".encode() * content_lines)
            page[NameObject("/Contents")] = writer._add_object(stream)
    if title is not None:
        writer.add_metadata({"/Title": title})
    if password is not None:
        writer.encrypt(password, algorithm="RC4-128")
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def fake_codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1, title: str | None = None, content_lines: int = 0) -> Path:
        path = tmp_path / filename
        path.write_bytes(build_pdf_bytes(pages, title=title, content_lines=content_lines))
        return path

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("sample.pdf", pages=5, title="Sample")


@pytest.fixture()
def empty_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("empty.pdf", pages=0)


@pytest.fixture()
def heavy_pdf_bytes() -> bytes:
    """Six pages with about 4 KB of content each."""

    return build_pdf_bytes(6, title="Heavy", content_lines=200)
