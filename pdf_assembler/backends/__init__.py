"""Codec backends for PDF Assembler."""

from __future__ import annotations

from typing import Optional

from .base import DocumentCodec
from .pypdf_backend import PypdfCodec


def resolve_codec(codec: Optional[DocumentCodec] = None) -> DocumentCodec:
    """Return ``codec`` or the default :class:`PypdfCodec`."""

    return codec if codec is not None else PypdfCodec()


__all__ = [
    "DocumentCodec",
    "PypdfCodec",
    "resolve_codec",
]
