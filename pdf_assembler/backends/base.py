"""Codec protocol for turning raw bytes into documents and back."""

from __future__ import annotations

from typing import Protocol

from ..types import Document


class DocumentCodec(Protocol):
    """Protocol defining the byte boundary of the assembly engine."""

    def decode(self, data: bytes) -> Document:
        """Parse ``data`` into a :class:`Document`, raising ``CodecError`` when malformed."""

    def encode(self, document: Document) -> bytes:
        """Serialise ``document`` to bytes, raising ``CodecError`` on invalid pages."""
