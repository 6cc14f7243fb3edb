"""File helpers shared by the CLI and the workspace."""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from zipfile import ZIP_DEFLATED, ZipFile

from .backends import DocumentCodec, resolve_codec
from .exceptions import InvalidPDFError, WorkspaceError
from .types import Document

LOGGER = logging.getLogger("pdf_assembler.storage")

PathLike = Union[str, Path]


def write_atomic(destination: PathLike, data: bytes) -> Path:
    """Write ``data`` to a temporary sibling of ``destination`` and rename it into place."""

    path = Path(destination)
    temp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile("wb", delete=False, dir=path.parent, suffix=".tmp") as handle:
            temp_path = Path(handle.name)
            handle.write(data)
        temp_path.replace(path)
    except OSError as exc:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise WorkspaceError(f"Unable to write {path}. Error: {exc}") from exc
    return path


def read_document(source: PathLike, codec: Optional[DocumentCodec] = None) -> Document:
    """Read and decode the PDF at ``source``."""

    path = Path(source)
    if not path.is_file():
        raise InvalidPDFError(f"PDF file not found: {source}")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InvalidPDFError(f"Unable to read PDF file: {source}. Error: {exc}") from exc
    return resolve_codec(codec).decode(data)


def write_document(
    document: Document,
    destination: PathLike,
    codec: Optional[DocumentCodec] = None,
) -> Path:
    """Encode ``document`` and atomically write it to ``destination``."""

    data = resolve_codec(codec).encode(document)
    path = write_atomic(destination, data)
    LOGGER.info("Wrote %d page(s) to %s (%d bytes)", document.page_count, path, len(data))
    return path


def write_chunks(
    chunks: Sequence[Document],
    directory: PathLike,
    *,
    codec: Optional[DocumentCodec] = None,
    prefix: str = "chunk",
) -> Tuple[List[Path], List[int]]:
    """Write ``chunks`` as ``<prefix>_<n>.pdf`` files in ``directory``.

    All chunks are encoded before the first file is written, so a codec
    failure leaves the directory untouched. Chunk files left in
    ``directory`` by an earlier split with the same prefix are removed.

    Returns:
        The written paths and the size of each file in bytes.
    """

    codec = resolve_codec(codec)
    payloads = [codec.encode(chunk) for chunk in chunks]

    output_dir = Path(directory)
    _remove_stale_chunks(output_dir, prefix)
    paths: List[Path] = []
    for index, payload in enumerate(payloads, start=1):
        destination = output_dir / f"{prefix}_{index}.pdf"
        write_atomic(destination, payload)
        paths.append(destination)
        LOGGER.debug("Wrote chunk %d to %s (%d bytes)", index, destination, len(payload))

    return paths, [len(payload) for payload in payloads]


def _remove_stale_chunks(directory: Path, prefix: str) -> None:
    if not directory.is_dir():
        return
    pattern = re.compile(rf"{re.escape(prefix)}_\d+\.pdf")
    for stale in directory.iterdir():
        if stale.is_file() and pattern.fullmatch(stale.name):
            try:
                stale.unlink()
            except OSError as exc:
                raise WorkspaceError(f"Unable to remove {stale}. Error: {exc}") from exc
            LOGGER.debug("Removed stale chunk %s", stale)


def zip_files(files: Iterable[Path], destination: PathLike) -> Path:
    """Create a zip archive containing ``files`` at ``destination``."""

    archive_path = Path(destination)
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with ZipFile(archive_path, "w", compression=ZIP_DEFLATED) as archive:
            for file_path in files:
                archive.write(file_path, arcname=file_path.name)
    except OSError as exc:
        raise WorkspaceError(f"Unable to create archive {archive_path}. Error: {exc}") from exc
    return archive_path


__all__ = [
    "PathLike",
    "write_atomic",
    "read_document",
    "write_document",
    "write_chunks",
    "zip_files",
]
