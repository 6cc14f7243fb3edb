"""
PDF Assembler - Page-level PDF assembly and size-bounded splitting.

Documents are decoded into ordered sequences of immutable pages. Pages can
be removed, inserted or merged, and a document can be split into chunks
that each stay under a byte budget when serialised.

Quick Start:
    >>> from pdf_assembler import PypdfCodec, remove_pages, split_by_size
    >>> codec = PypdfCodec()
    >>> document = codec.decode(open('input.pdf', 'rb').read())
    >>> trimmed = remove_pages(document, {2, 3})
    >>> chunks = split_by_size(trimmed, 5 * 1024 * 1024, codec=codec)

Main Functions:
    - remove_pages, insert_pages, merge_documents: page assembly
    - split_by_size: greedy size-bounded chunking
    - images_to_document, document_to_images: raster conversion

Main Classes:
    - Document, PageUnit, InsertPosition: data model
    - PypdfCodec: default codec
    - DocumentWorkspace: stored documents edited by id

For CLI usage, use the 'pdf-assembler' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF Assembler CLI Contributors"
__license__ = "MIT"

# Data types
from pdf_assembler.types import Document, EditResult, InsertPosition, PageUnit, SplitResult

# Codec
from pdf_assembler.backends import DocumentCodec, PypdfCodec

# Core operations
from pdf_assembler.assembler import insert_pages, merge_documents, remove_pages
from pdf_assembler.splitter import split_by_size
from pdf_assembler.raster import document_to_images, images_to_document

# Workflow
from pdf_assembler.workspace import DocumentWorkspace

# Exceptions
from pdf_assembler.exceptions import (
    PDFAssemblerException,
    InvalidInputError,
    InvalidPageSelectionError,
    InvalidPositionError,
    InvalidSizeBudgetError,
    UnknownDocumentError,
    CodecError,
    InvalidPDFError,
    EncryptedPDFError,
    RasterError,
    WorkspaceError,
)

# Utility functions
from pdf_assembler.utils import encoded_size, format_file_size, megabytes_to_bytes, parse_page_selection

__all__ = [
    # Data types
    "Document",
    "PageUnit",
    "InsertPosition",
    "EditResult",
    "SplitResult",
    # Codec
    "DocumentCodec",
    "PypdfCodec",
    # Operations
    "remove_pages",
    "insert_pages",
    "merge_documents",
    "split_by_size",
    "images_to_document",
    "document_to_images",
    "DocumentWorkspace",
    # Exceptions
    "PDFAssemblerException",
    "InvalidInputError",
    "InvalidPageSelectionError",
    "InvalidPositionError",
    "InvalidSizeBudgetError",
    "UnknownDocumentError",
    "CodecError",
    "InvalidPDFError",
    "EncryptedPDFError",
    "RasterError",
    "WorkspaceError",
    # Utility functions
    "encoded_size",
    "format_file_size",
    "megabytes_to_bytes",
    "parse_page_selection",
    # Version info
    "__version__",
]
