"""
Type definitions and dataclasses for PDF Assembler.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .exceptions import InvalidPositionError


@dataclass(frozen=True)
class PageUnit:
    """
    One page of a document as produced by a codec.

    Attributes:
        origin: 1-based page number in the document the page was decoded from
        payload: Codec-specific page handle (e.g. a ``pypdf`` page object)
    """
    origin: int
    payload: Any = field(repr=False)


@dataclass
class Document:
    """
    An ordered collection of pages plus document-level metadata.

    Page numbers are 1-based and derived from position. Operations in
    :mod:`pdf_assembler.assembler` and :mod:`pdf_assembler.splitter` return
    new instances instead of mutating this one.
    """
    pages: List[PageUnit] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[PageUnit]:
        return iter(self.pages)

    def with_pages(self, pages: Iterable[PageUnit]) -> "Document":
        """Return a new document holding ``pages`` and a copy of this metadata."""
        return Document(pages=list(pages), metadata=dict(self.metadata))


_POSITION_KINDS = ("beginning", "end", "at")


@dataclass(frozen=True)
class InsertPosition:
    """
    Where :func:`~pdf_assembler.assembler.insert_pages` places new pages.

    Use the :meth:`beginning`, :meth:`end` and :meth:`at` constructors, or
    :meth:`parse` for user supplied tokens.
    """
    kind: str
    page_number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind not in _POSITION_KINDS:
            raise InvalidPositionError(
                f"Unknown insert position '{self.kind}'. Expected one of: {', '.join(_POSITION_KINDS)}."
            )
        if self.kind == "at":
            if isinstance(self.page_number, bool) or not isinstance(self.page_number, int):
                raise InvalidPositionError(
                    f"Insert position 'at' needs an integer page number, got {self.page_number!r}."
                )
            if self.page_number < 1:
                raise InvalidPositionError(
                    f"Invalid insert page number: {self.page_number}. Page numbers must be >= 1."
                )
        elif self.page_number is not None:
            raise InvalidPositionError(
                f"Insert position '{self.kind}' does not take a page number."
            )

    @classmethod
    def beginning(cls) -> "InsertPosition":
        return cls("beginning")

    @classmethod
    def end(cls) -> "InsertPosition":
        return cls("end")

    @classmethod
    def at(cls, page_number: int) -> "InsertPosition":
        return cls("at", page_number)

    @classmethod
    def parse(cls, token: str, page_number: Optional[int] = None) -> "InsertPosition":
        """Build a position from a token such as ``"beginning"`` or ``"at"``.

        ``"specific"`` is accepted as an alias of ``"at"``.
        """
        normalized = (token or "").strip().lower()
        if normalized == "specific":
            normalized = "at"
        if normalized == "at":
            return cls.at(page_number)  # type: ignore[arg-type]
        return cls(normalized)

    def split_index(self, page_count: int) -> int:
        """Return the 0-based index at which pages are inserted."""
        if self.kind == "beginning":
            return 0
        if self.kind == "end":
            return page_count
        return min(self.page_number - 1, page_count)  # type: ignore[operator]

    def __str__(self) -> str:
        if self.kind == "at":
            return f"at page {self.page_number}"
        return self.kind


@dataclass
class EditResult:
    """
    Result of an in-place workspace edit.

    Attributes:
        doc_id: Identifier of the edited document
        original_pages: Page count before the edit
        new_pages: Page count after the edit
        operation: Name of the operation performed
    """
    doc_id: str
    original_pages: int
    new_pages: int
    operation: str

    def __str__(self) -> str:
        return (
            f"EditResult(operation='{self.operation}', "
            f"pages={self.original_pages}->{self.new_pages})"
        )


@dataclass
class SplitResult:
    """
    Result of a size-bounded split.

    Attributes:
        max_bytes: Size budget used for the split
        files_created: Paths of the chunk files written
        chunk_pages: Page count of every chunk, in order
        chunk_sizes: Encoded size of every chunk in bytes
        archive: Zip archive containing all chunks, if any were written
    """
    max_bytes: int
    files_created: List[Path] = field(default_factory=list)
    chunk_pages: List[int] = field(default_factory=list)
    chunk_sizes: List[int] = field(default_factory=list)
    archive: Optional[Path] = None

    @property
    def total_chunks(self) -> int:
        return len(self.files_created)

    @property
    def oversized_chunks(self) -> List[Tuple[int, int]]:
        """Return ``(chunk number, size)`` for single-page chunks over budget."""
        return [
            (index, size)
            for index, (pages, size) in enumerate(zip(self.chunk_pages, self.chunk_sizes), start=1)
            if pages == 1 and size > self.max_bytes
        ]

    def __str__(self) -> str:
        return f"SplitResult(chunks={self.total_chunks}, max_bytes={self.max_bytes})"
