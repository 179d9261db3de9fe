"""
Type definitions and dataclasses for duplexprint.

This module defines data structures shared across the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .exceptions import InvalidDocumentError
from .utils import pluralize_pages

MERGED_FILE_NAME = "merged_document.pdf"


@dataclass(frozen=True)
class SourceFile:
    """
    An uploaded file as handed over by the caller.

    Attributes:
        name: Display name of the file; never consumed by the engine
        data: Raw bytes purporting to be a PDF document
    """
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class PageCountReport:
    """
    Outcome of counting the pages of a single file.

    Exactly one of ``page_count`` and ``error`` is set.
    """
    name: str
    page_count: Optional[int] = None
    error: Optional[InvalidDocumentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.ok:
            return f"{self.name}: {pluralize_pages(self.page_count)}"
        return f"{self.name}: {self.error.reason}"


@dataclass
class SplitResult:
    """
    Result of a merge-and-split operation.

    Attributes:
        odd_pages: Serialized PDF holding merged positions 0, 2, 4, ...
        even_pages: Serialized PDF holding merged positions 1, 3, 5, ...
        odd_page_count: Number of pages in ``odd_pages``
        even_page_count: Number of pages in ``even_pages``
        padding_pages: Blank pages inserted after odd-length documents
        source_page_counts: Page count of every input, in input order
        file_name: Name of the merged document the outputs derive from
        merged_pages: The padded merged document, when it was requested
    """
    odd_pages: bytes
    even_pages: bytes
    odd_page_count: int
    even_page_count: int
    padding_pages: int
    source_page_counts: List[int] = field(default_factory=list)
    file_name: str = MERGED_FILE_NAME
    merged_pages: Optional[bytes] = None

    @property
    def merged_page_count(self) -> int:
        return self.odd_page_count + self.even_page_count

    def __iter__(self) -> Iterator[bytes]:
        return iter((self.odd_pages, self.even_pages))

    def __str__(self) -> str:
        return (
            "SplitResult(sources={sources}, merged={merged}, odd={odd}, "
            "even={even}, padding={padding})"
        ).format(
            sources=len(self.source_page_counts),
            merged=self.merged_page_count,
            odd=self.odd_page_count,
            even=self.even_page_count,
            padding=self.padding_pages,
        )


__all__ = ["MERGED_FILE_NAME", "SourceFile", "PageCountReport", "SplitResult"]
