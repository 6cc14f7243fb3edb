"""Page-level assembly operations: remove, insert and merge.

Every function returns a new :class:`~pdf_assembler.types.Document` and
leaves its inputs untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Union

from .exceptions import InvalidPositionError
from .types import Document, InsertPosition, PageUnit
from .utils import coerce_page_numbers

LOGGER = logging.getLogger("pdf_assembler.assemble")


def remove_pages(document: Document, page_numbers: Union[str, Iterable[int]]) -> Document:
    """Return a copy of ``document`` without the pages in ``page_numbers``.

    Args:
        document: Source document.
        page_numbers: 1-based page numbers, or a spec string such as
            ``"1,3-4"``. Out-of-range and duplicate numbers are ignored.

    Raises:
        InvalidPageSelectionError: If the selection is malformed.
    """

    selection = coerce_page_numbers(page_numbers)
    kept: List[PageUnit] = []
    for page_number, page in enumerate(document.pages, start=1):
        if page_number in selection:
            LOGGER.debug("Removing page %s", page_number)
            continue
        kept.append(page)

    result = document.with_pages(kept)
    LOGGER.info(
        "Removed %d page(s): %d -> %d pages",
        document.page_count - result.page_count,
        document.page_count,
        result.page_count,
    )
    return result


def insert_pages(
    document: Document,
    other: Document,
    position: Union[InsertPosition, str] = "end",
) -> Document:
    """Insert all pages of ``other`` into ``document`` at ``position``.

    ``position`` may be an :class:`InsertPosition` or one of the tokens
    ``"beginning"`` and ``"end"``. Use :meth:`InsertPosition.at` for a
    specific page. The result keeps the metadata of ``document``.
    """

    if isinstance(position, str):
        position = InsertPosition.parse(position)
    if not isinstance(position, InsertPosition):
        raise InvalidPositionError(f"Unsupported insert position: {position!r}")

    index = position.split_index(document.page_count)
    pages = document.pages[:index] + other.pages + document.pages[index:]

    LOGGER.info(
        "Inserted %d page(s) %s: %d -> %d pages",
        other.page_count,
        position,
        document.page_count,
        len(pages),
    )
    return document.with_pages(pages)


def merge_documents(documents: Iterable[Document]) -> Document:
    """Concatenate ``documents`` in order.

    Metadata is taken from the first document. An empty iterable yields an
    empty document.
    """

    sources = list(documents)
    if not sources:
        LOGGER.info("No documents to merge; returning an empty document")
        return Document()

    pages: List[PageUnit] = []
    for index, source in enumerate(sources, start=1):
        LOGGER.debug("Adding %d page(s) from document %d", source.page_count, index)
        pages.extend(source.pages)

    merged = sources[0].with_pages(pages)
    LOGGER.info("Merged %d documents into %d pages", len(sources), merged.page_count)
    return merged


__all__ = ["remove_pages", "insert_pages", "merge_documents"]
