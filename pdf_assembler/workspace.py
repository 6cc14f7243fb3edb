"""Directory backed storage for documents edited across several requests.

Uploaded documents live in ``<root>/uploads/<doc_id>.pdf``. Split chunks and
rasterised pages are written under ``<root>/processed`` together with a zip
archive for download. Edits replace the stored file atomically, but there is
no versioning: two writers editing the same ``doc_id`` at the same time can
overwrite each other.
"""

from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable, Optional, Union

from .assembler import insert_pages, remove_pages
from .backends import DocumentCodec, resolve_codec
from .config import Settings
from .exceptions import UnknownDocumentError
from .raster import document_to_images, images_to_document
from .splitter import split_by_size
from .storage import PathLike, read_document, write_atomic, write_chunks, write_document, zip_files
from .types import Document, EditResult, InsertPosition, SplitResult
from .utils import megabytes_to_bytes

LOGGER = logging.getLogger("pdf_assembler.workspace")

_DOC_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class DocumentWorkspace:
    """Store documents by id and apply assembly operations to them."""

    def __init__(self, root: PathLike, *, codec: Optional[DocumentCodec] = None) -> None:
        self.root = Path(root).expanduser()
        self.codec = resolve_codec(codec)
        self.uploads_dir = self.root / "uploads"
        self.processed_dir = self.root / "processed"
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.processed_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, *, codec: Optional[DocumentCodec] = None
    ) -> "DocumentWorkspace":
        """Create a workspace rooted at the configured ``PDF_ASSEMBLER_HOME``."""
        settings = settings or Settings.from_env()
        return cls(settings.home, codec=codec)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    def path_for(self, doc_id: str) -> Path:
        """Return the stored file for ``doc_id``, which must exist."""
        if not isinstance(doc_id, str) or not _DOC_ID_PATTERN.match(doc_id):
            raise UnknownDocumentError(f"Malformed document id: {doc_id!r}")
        path = self.uploads_dir / f"{doc_id}.pdf"
        if not path.is_file():
            raise UnknownDocumentError(f"Document not found: {doc_id}")
        return path

    def upload(self, data: bytes) -> str:
        """Validate and store ``data``, returning the new document id."""
        document = self.codec.decode(data)
        doc_id = uuid.uuid4().hex
        write_atomic(self.uploads_dir / f"{doc_id}.pdf", data)
        LOGGER.info("Stored upload %s with %d page(s)", doc_id, document.page_count)
        return doc_id

    def load(self, doc_id: str) -> Document:
        return read_document(self.path_for(doc_id), self.codec)

    def page_count(self, doc_id: str) -> int:
        return self.load(doc_id).page_count

    def _store(self, document: Document, doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex
        write_document(document, self.uploads_dir / f"{doc_id}.pdf", self.codec)
        return doc_id

    def _new_processed_dir(self) -> Path:
        directory = self.processed_dir / uuid.uuid4().hex
        directory.mkdir(parents=True)
        return directory

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def remove_pages(self, doc_id: str, pages: Union[str, Iterable[int]]) -> EditResult:
        """Remove ``pages`` from the stored document in place."""
        document = self.load(doc_id)
        result = remove_pages(document, pages)
        self._store(result, doc_id)
        return EditResult(
            doc_id=doc_id,
            original_pages=document.page_count,
            new_pages=result.page_count,
            operation="remove",
        )

    def add_pages(
        self,
        doc_id: str,
        data: bytes,
        position: Union[InsertPosition, str] = "end",
    ) -> EditResult:
        """Insert the pages of the PDF ``data`` into the stored document."""
        document = self.load(doc_id)
        other = self.codec.decode(data)
        result = insert_pages(document, other, position)
        self._store(result, doc_id)
        return EditResult(
            doc_id=doc_id,
            original_pages=document.page_count,
            new_pages=result.page_count,
            operation="insert",
        )

    def images_to_pdf(self, images: Iterable[bytes]) -> str:
        """Convert ``images`` into a new stored document and return its id."""
        document = images_to_document(images, codec=self.codec)
        doc_id = self._store(document)
        LOGGER.info("Created document %s from %d image(s)", doc_id, document.page_count)
        return doc_id

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------
    def export_images(self, doc_id: str, *, dpi: int = 150, quality: int = 90) -> Path:
        """Rasterise every page to ``page_<n>.jpg`` and return a zip of them."""
        images = document_to_images(self.load(doc_id), codec=self.codec, dpi=dpi, quality=quality)
        directory = self._new_processed_dir()
        files = [
            write_atomic(directory / f"page_{index}.jpg", image)
            for index, image in enumerate(images, start=1)
        ]
        archive = zip_files(files, directory.with_suffix(".zip"))
        LOGGER.info("Exported %d page image(s) of %s to %s", len(files), doc_id, archive)
        return archive

    def split(self, doc_id: str, max_bytes: int) -> SplitResult:
        """Split the stored document into chunks of at most ``max_bytes``.

        Chunk files and their zip archive are written only after every chunk
        has been encoded. An empty document produces a result with no chunks
        and no archive.
        """
        chunks = split_by_size(self.load(doc_id), max_bytes, codec=self.codec)
        result = SplitResult(max_bytes=max_bytes)
        if not chunks:
            LOGGER.info("Document %s has no pages to split", doc_id)
            return result

        directory = self.processed_dir / uuid.uuid4().hex
        files, sizes = write_chunks(chunks, directory, codec=self.codec)
        result.files_created = files
        result.chunk_pages = [chunk.page_count for chunk in chunks]
        result.chunk_sizes = sizes
        result.archive = zip_files(files, directory.with_suffix(".zip"))
        LOGGER.info("Split %s into %d chunk(s): %s", doc_id, len(files), result.archive)
        return result

    def split_megabytes(self, doc_id: str, max_size_mb: Union[float, str]) -> SplitResult:
        return self.split(doc_id, megabytes_to_bytes(max_size_mb))


__all__ = ["DocumentWorkspace"]
