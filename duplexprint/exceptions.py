"""
Custom exceptions for duplexprint.

This module defines all custom exceptions used throughout the library.
"""

from __future__ import annotations

from typing import Optional


class DuplexPrintError(Exception):
    """Base exception for all duplexprint errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown duplex printing error occurred."


class InvalidDocumentError(DuplexPrintError):
    """Raised when a buffer cannot be parsed as a PDF document.

    ``source_index`` is the zero-based position of the offending buffer in
    the input sequence when the failure happened during a merge.
    """

    def __init__(
        self,
        reason: str = "",
        *,
        source_index: Optional[int] = None,
        file_name: Optional[str] = None,
    ) -> None:
        self.reason = reason or self.default_message
        self.source_index = source_index
        self.file_name = file_name

        message = self.reason
        if file_name:
            message = f"{file_name}: {message}"
        if source_index is not None:
            message = f"Document #{source_index + 1} - {message}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF document."


class EmptyInputError(DuplexPrintError):
    """Raised when no documents were supplied to the merge step."""

    @property
    def default_message(self) -> str:
        return "No PDF documents were provided."


class ConfigurationError(DuplexPrintError):
    """Raised when environment configuration cannot be parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid duplexprint configuration."


__all__ = [
    "DuplexPrintError",
    "InvalidDocumentError",
    "EmptyInputError",
    "ConfigurationError",
]
