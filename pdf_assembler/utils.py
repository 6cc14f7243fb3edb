"""Utility functions for page selections and size budgets."""

from __future__ import annotations

import math
import re
from typing import Iterable, List, Optional, Union

from .backends import DocumentCodec, resolve_codec
from .exceptions import InvalidPageSelectionError, InvalidSizeBudgetError
from .types import Document

BYTES_PER_MEGABYTE = 1024 * 1024

_RANGE_PATTERN = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def parse_page_selection(page_spec: str) -> List[int]:
    """Parse a page specification string into sorted unique page numbers.

    Accepts comma separated page numbers and inclusive ranges, for example
    ``"1,3,5-7"``. Numbers beyond the end of a document are not rejected here.
    """

    if not page_spec or not page_spec.strip():
        raise InvalidPageSelectionError("Page specification cannot be empty")

    pages: set[int] = set()
    for token in page_spec.split(","):
        token = token.strip()
        if not token:
            raise InvalidPageSelectionError(
                f"Empty entry in page specification: '{page_spec}'."
            )
        if "-" in token:
            match = _RANGE_PATTERN.match(token)
            if not match:
                raise InvalidPageSelectionError(
                    f"Invalid page range format: '{token}'. Expected 'start-end'."
                )

            start = int(match.group(1))
            end = int(match.group(2))
            if start > end:
                raise InvalidPageSelectionError(
                    f"Invalid range '{token}': start page ({start}) must be <= end page ({end})."
                )
            if start < 1:
                raise InvalidPageSelectionError(
                    f"Invalid range '{token}': page numbers must be >= 1."
                )

            pages.update(range(start, end + 1))
        else:
            if not token.isdigit():
                raise InvalidPageSelectionError(
                    f"Invalid page number: '{token}'. Expected a positive integer."
                )

            page_num = int(token)
            if page_num < 1:
                raise InvalidPageSelectionError(
                    f"Invalid page number: {page_num}. Page numbers must be >= 1."
                )

            pages.add(page_num)

    return sorted(pages)


def coerce_page_numbers(pages: Union[str, Iterable[int]]) -> set[int]:
    """Return a set of page numbers from a spec string or an iterable of ints."""

    if isinstance(pages, str):
        return set(parse_page_selection(pages))

    selection: set[int] = set()
    for page in pages:
        if isinstance(page, bool) or not isinstance(page, int):
            raise InvalidPageSelectionError(
                f"Page numbers must be integers, got {page!r}."
            )
        selection.add(page)
    return selection


def megabytes_to_bytes(size_mb: Union[float, int, str]) -> int:
    """Convert a megabyte budget into bytes, truncating toward zero.

    ``1.5`` becomes ``1572864``. Non-positive, non-finite and non-numeric
    values raise :class:`InvalidSizeBudgetError`, as do budgets that
    truncate to zero bytes.
    """

    if isinstance(size_mb, bool):
        raise InvalidSizeBudgetError(f"Invalid size in megabytes: {size_mb!r}")
    try:
        value = float(size_mb)
    except (TypeError, ValueError) as exc:
        raise InvalidSizeBudgetError(f"Invalid size in megabytes: {size_mb!r}") from exc

    if not math.isfinite(value) or value <= 0:
        raise InvalidSizeBudgetError(
            f"Maximum size must be greater than 0 MB, got {size_mb!r}."
        )

    max_bytes = int(value * BYTES_PER_MEGABYTE)
    if max_bytes < 1:
        raise InvalidSizeBudgetError(
            f"Maximum size {size_mb!r} MB is smaller than one byte."
        )
    return max_bytes


def validate_max_bytes(max_bytes: object) -> int:
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int):
        raise InvalidSizeBudgetError(
            f"Maximum chunk size must be an integer number of bytes, got {max_bytes!r}."
        )
    if max_bytes <= 0:
        raise InvalidSizeBudgetError(
            f"Maximum chunk size must be > 0 bytes, got {max_bytes}."
        )
    return max_bytes


def encoded_size(document: Document, codec: Optional[DocumentCodec] = None) -> int:
    """Return the serialised size of ``document`` in bytes."""

    return len(resolve_codec(codec).encode(document))


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = [
    "BYTES_PER_MEGABYTE",
    "parse_page_selection",
    "coerce_page_numbers",
    "megabytes_to_bytes",
    "validate_max_bytes",
    "encoded_size",
    "format_file_size",
]
