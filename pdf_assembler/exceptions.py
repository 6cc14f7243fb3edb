"""
Custom exceptions for PDF Assembler.

This module defines all custom exceptions used throughout the library.
"""


class PDFAssemblerException(Exception):
    """Base exception for all PDF Assembler errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF assembler error occurred."


class InvalidInputError(PDFAssemblerException):
    """Raised when an operation receives arguments it cannot act on."""

    @property
    def default_message(self) -> str:
        return "Invalid input supplied to PDF operation."


class InvalidPageSelectionError(InvalidInputError):
    """Raised when a page selection is malformed."""

    @property
    def default_message(self) -> str:
        return "Invalid page selection."


class InvalidPositionError(InvalidInputError):
    """Raised when an insert position is not recognised."""

    @property
    def default_message(self) -> str:
        return "Invalid insert position."


class InvalidSizeBudgetError(InvalidInputError):
    """Raised when a split size budget is not a positive number of bytes."""

    @property
    def default_message(self) -> str:
        return "Maximum chunk size must be a positive number of bytes."


class UnknownDocumentError(InvalidInputError):
    """Raised when a workspace document id is malformed or missing."""

    @property
    def default_message(self) -> str:
        return "Unknown document."


class CodecError(PDFAssemblerException):
    """Raised when a document cannot be decoded or encoded."""

    @property
    def default_message(self) -> str:
        return "PDF codec failure."


class InvalidPDFError(CodecError):
    """Raised when PDF data is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(CodecError):
    """Raised when PDF is encrypted and cannot be processed."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class RasterError(PDFAssemblerException):
    """Raised when converting between pages and images fails."""

    @property
    def default_message(self) -> str:
        return "Image conversion failed."


class WorkspaceError(PDFAssemblerException):
    """Raised when the workspace cannot read or persist a file."""

    @property
    def default_message(self) -> str:
        return "Workspace storage failure."
