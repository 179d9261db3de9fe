"""Loading PDF buffers and counting their pages."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pypdf import PageObject, PasswordType, PdfReader
from pypdf.errors import PdfReadError

from .exceptions import InvalidDocumentError
from .types import PageCountReport, SourceFile

LOGGER = logging.getLogger("duplexprint.document")

Buffer = Union[bytes, bytearray, memoryview]
FileLike = Union[SourceFile, Tuple[str, Buffer]]


@dataclass(frozen=True, eq=False)
class SourceDocument:
    """A parsed PDF buffer. Only ever read from, never modified."""

    reader: PdfReader
    num_pages: int
    source_index: Optional[int] = None
    file_name: Optional[str] = None

    def iter_pages(self) -> Iterator[PageObject]:
        return iter(self.reader.pages)

    @property
    def metadata(self) -> dict[str, str]:
        info = self.reader.metadata
        if not info:
            return {}
        return {
            key: str(value)
            for key, value in info.items()
            if isinstance(key, str) and value is not None
        }


@dataclass(frozen=True)
class ParseOutcome:
    """Tagged result of :func:`parse_document`.

    Exactly one of ``document`` and ``error`` is set.
    """

    document: Optional[SourceDocument] = None
    error: Optional[InvalidDocumentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> SourceDocument:
        """Return the document or raise the recorded error."""

        if self.error is not None:
            raise self.error
        if self.document is None:
            raise InvalidDocumentError("No document was parsed")
        return self.document


def _failure(reason: str, index: Optional[int], file_name: Optional[str]) -> ParseOutcome:
    return ParseOutcome(
        error=InvalidDocumentError(reason, source_index=index, file_name=file_name)
    )


def parse_document(
    buffer: Buffer,
    index: Optional[int] = None,
    *,
    file_name: Optional[str] = None,
) -> ParseOutcome:
    """Parse *buffer* into a :class:`SourceDocument` without raising.

    Encrypted documents are accepted only when they open with an empty
    user password.
    """

    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        return _failure(
            f"Expected a bytes buffer, got {type(buffer).__name__}", index, file_name
        )

    try:
        reader = PdfReader(io.BytesIO(bytes(buffer)))
    except PdfReadError as exc:
        return _failure(f"Corrupted or invalid PDF: {exc}", index, file_name)
    except Exception as exc:  # pragma: no cover - dependency exceptions vary
        return _failure(f"Unexpected error reading PDF: {exc}", index, file_name)

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF %s", file_name or index)
        try:
            decrypted = reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            return _failure(f"Unable to decrypt encrypted PDF: {exc}", index, file_name)
        if decrypted == PasswordType.NOT_DECRYPTED:
            return _failure("PDF is encrypted and requires a password", index, file_name)

    try:
        num_pages = len(reader.pages)
    except Exception as exc:
        return _failure(f"Unable to read page tree: {exc}", index, file_name)

    return ParseOutcome(
        document=SourceDocument(
            reader=reader, num_pages=num_pages, source_index=index, file_name=file_name
        )
    )


def load_document(
    buffer: Buffer,
    index: Optional[int] = None,
    *,
    file_name: Optional[str] = None,
) -> SourceDocument:
    """Parse *buffer*, raising :class:`InvalidDocumentError` on failure."""

    return parse_document(buffer, index, file_name=file_name).unwrap()


def page_count(buffer: Buffer) -> int:
    """Return the number of pages in the PDF held by *buffer*.

    Raises:
        InvalidDocumentError: If the buffer is not a readable PDF.
    """

    return load_document(buffer).num_pages


def as_source_file(item: FileLike) -> SourceFile:
    if isinstance(item, SourceFile):
        return item
    name, data = item
    return SourceFile(name=name, data=bytes(data))


def inspect_files(files: Iterable[FileLike]) -> List[PageCountReport]:
    """Count the pages of every file independently.

    A file that cannot be parsed gets a report carrying its error; the
    remaining files are still counted.
    """

    reports: List[PageCountReport] = []
    for item in files:
        source = as_source_file(item)
        outcome = parse_document(source.data, file_name=source.name)
        if outcome.ok:
            count = outcome.unwrap().num_pages
            LOGGER.debug("Counted %s pages in %s", count, source.name)
            reports.append(PageCountReport(name=source.name, page_count=count))
        else:
            LOGGER.warning("Unable to count pages of %s: %s", source.name, outcome.error)
            reports.append(PageCountReport(name=source.name, error=outcome.error))
    return reports


__all__ = [
    "SourceDocument",
    "ParseOutcome",
    "parse_document",
    "load_document",
    "page_count",
    "inspect_files",
    "as_source_file",
]
