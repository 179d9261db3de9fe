"""
duplexprint - Prepare PDF files for manual double-sided printing.

The library merges PDF documents in order, pads every document with an odd
page count with a blank page, and splits the merged pages into a front-side
(odd) and a back-side (even) document.

Quick Start:
    >>> from duplexprint import merge_and_split
    >>> result = merge_and_split([first_pdf_bytes, second_pdf_bytes])
    >>> odd_pdf, even_pdf = result

Main API:
    - page_count: Count the pages of a single PDF buffer
    - inspect_files: Count the pages of many files, isolating failures
    - merge_and_split: Merge buffers and split them by page parity
    - DuplexWorkspace: Working set of uploaded files with page counts

For CLI usage, use the 'duplex-print' command after installation.
"""

from duplexprint.config import DuplexSettings
from duplexprint.document import (
    ParseOutcome,
    SourceDocument,
    inspect_files,
    load_document,
    page_count,
    parse_document,
)
from duplexprint.engine import merge_and_split, merge_documents
from duplexprint.exceptions import (
    ConfigurationError,
    DuplexPrintError,
    EmptyInputError,
    InvalidDocumentError,
)
from duplexprint.types import PageCountReport, SourceFile, SplitResult
from duplexprint.workspace import DuplexWorkspace

__version__ = "1.0.0"

__all__ = [
    "page_count",
    "parse_document",
    "load_document",
    "inspect_files",
    "merge_and_split",
    "merge_documents",
    "DuplexWorkspace",
    "DuplexSettings",
    "SourceDocument",
    "ParseOutcome",
    "SourceFile",
    "PageCountReport",
    "SplitResult",
    "DuplexPrintError",
    "InvalidDocumentError",
    "EmptyInputError",
    "ConfigurationError",
    "__version__",
]
