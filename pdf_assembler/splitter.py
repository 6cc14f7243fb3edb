"""Size-bounded splitting of documents into chunks."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .backends import DocumentCodec, resolve_codec
from .types import Document, PageUnit
from .utils import validate_max_bytes

LOGGER = logging.getLogger("pdf_assembler.split")


def split_by_size(
    document: Document,
    max_bytes: int,
    *,
    codec: Optional[DocumentCodec] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[Document]:
    """Split ``document`` into chunks that each encode to at most ``max_bytes``.

    Pages are packed greedily from left to right. A page is appended to the
    current chunk unless the chunk already holds pages and the grown chunk
    would encode to more than ``max_bytes``; in that case the chunk is closed
    and the page starts the next one. A single page that is larger than the
    budget therefore becomes a chunk of its own.

    Every candidate chunk is re-encoded to measure it, so the cost grows
    quadratically with the page count.

    Args:
        document: Document to split.
        max_bytes: Size budget per chunk in bytes.
        codec: Codec used to measure chunks. Defaults to :class:`PypdfCodec`.
        progress_callback: Called with ``(pages done, total pages)``.

    Returns:
        The chunks in order. An empty document yields an empty list.

    Raises:
        InvalidSizeBudgetError: If ``max_bytes`` is not a positive integer.
        CodecError: If any candidate fails to encode. No chunks are returned.
    """

    max_bytes = validate_max_bytes(max_bytes)
    if document.page_count == 0:
        LOGGER.info("Document has no pages; nothing to split")
        return []

    codec = resolve_codec(codec)
    total = document.page_count
    chunks: List[Document] = []
    current: List[PageUnit] = []

    for page_number, page in enumerate(document.pages, start=1):
        candidate = current + [page]
        size = len(codec.encode(document.with_pages(candidate)))
        LOGGER.debug(
            "Page %d: candidate chunk of %d page(s) is %d bytes", page_number, len(candidate), size
        )

        if current and size > max_bytes:
            chunks.append(document.with_pages(current))
            current = [page]
        else:
            current = candidate

        if progress_callback:
            progress_callback(page_number, total)

    if current:
        chunks.append(document.with_pages(current))

    LOGGER.info(
        "Split %d pages into %d chunk(s) of at most %d bytes",
        total,
        len(chunks),
        max_bytes,
    )
    return chunks


__all__ = ["split_by_size"]
