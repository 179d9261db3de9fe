"""Merge PDF buffers and split the result into odd and even page sets."""

from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pypdf import PdfReader, PdfWriter

from .document import Buffer, ParseOutcome, SourceDocument, parse_document
from .exceptions import EmptyInputError, InvalidDocumentError
from .types import SourceFile, SplitResult

LOGGER = logging.getLogger("duplexprint.engine")

EngineInput = Union[Buffer, SourceFile]


def _parse(item: Tuple[int, EngineInput]) -> ParseOutcome:
    index, source = item
    if isinstance(source, SourceFile):
        return parse_document(source.data, index, file_name=source.name)
    return parse_document(source, index)


def _iter_outcomes(
    inputs: Sequence[EngineInput], max_workers: Optional[int]
) -> Iterator[ParseOutcome]:
    indexed = list(enumerate(inputs))
    if max_workers is not None and max_workers > 1 and len(indexed) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(_parse, indexed))
        yield from outcomes
    else:
        for item in indexed:
            yield _parse(item)


def _append_document(merged: PdfWriter, document: SourceDocument) -> int:
    """Copy every page of *document* into *merged*, then pad to an even length.

    Returns the number of padding pages added (0 or 1).
    """

    try:
        for page_index, page in enumerate(document.iter_pages()):
            LOGGER.debug(
                "Adding page %s from document %s", page_index, document.source_index
            )
            merged.add_page(page)
    except Exception as exc:
        LOGGER.error("Failed to copy pages of document %s: %s", document.source_index, exc)
        raise InvalidDocumentError(
            f"Unable to copy pages: {exc}",
            source_index=document.source_index,
            file_name=document.file_name,
        ) from exc

    if document.num_pages % 2 == 0:
        return 0

    # sized like the preceding page, which always exists here
    merged.add_blank_page()
    LOGGER.debug("Padded document %s with a blank page", document.source_index)
    return 1


def _serialize(writer: PdfWriter, metadata: Optional[dict[str, str]] = None) -> bytes:
    if metadata:
        writer.add_metadata(metadata)
    stream = io.BytesIO()
    writer.write(stream)
    return stream.getvalue()


def _output_metadata(base: dict[str, str], label: str) -> dict[str, str]:
    metadata = dict(base)
    title = metadata.get("/Title")
    if title:
        metadata["/Title"] = f"{title} ({label})"
    return metadata


def _build_merged(
    inputs: Sequence[EngineInput], max_workers: Optional[int]
) -> Tuple[PdfWriter, List[int], int, dict[str, str]]:
    if not inputs:
        raise EmptyInputError("No PDF documents were provided to merge.")

    merged = PdfWriter()
    page_counts: List[int] = []
    padding = 0
    first_metadata: dict[str, str] = {}

    for outcome in _iter_outcomes(inputs, max_workers):
        if not outcome.ok:
            LOGGER.error("Aborting merge: %s", outcome.error)
            raise outcome.error
        document = outcome.unwrap()
        padding += _append_document(merged, document)
        page_counts.append(document.num_pages)
        if not first_metadata:
            first_metadata = document.metadata

    LOGGER.info(
        "Merged %d document(s) into %d page(s) with %d padding page(s)",
        len(page_counts),
        len(merged.pages),
        padding,
    )
    return merged, page_counts, padding, first_metadata


def merge_documents(
    inputs: Sequence[EngineInput],
    *,
    max_workers: Optional[int] = None,
) -> bytes:
    """Merge *inputs* in order, padding odd-length documents, and return the PDF.

    Raises:
        EmptyInputError: If *inputs* is empty.
        InvalidDocumentError: If any input cannot be parsed; the error carries
            the zero-based index of the offending input.
    """

    merged, _, _, _ = _build_merged(list(inputs), max_workers)
    return _serialize(merged)


def _partition(pages: Iterable[object]) -> Tuple[PdfWriter, PdfWriter]:
    odd_writer = PdfWriter()
    even_writer = PdfWriter()
    for position, page in enumerate(pages):
        target = odd_writer if position % 2 == 0 else even_writer
        target.add_page(page)
    return odd_writer, even_writer


def merge_and_split(
    inputs: Sequence[EngineInput],
    *,
    max_workers: Optional[int] = None,
    copy_metadata: bool = False,
    keep_merged: bool = False,
) -> SplitResult:
    """Merge *inputs* and split the merged document by page parity.

    Args:
        inputs: PDF byte buffers (or :class:`SourceFile` objects) in the order
            they should be printed.
        max_workers: When greater than one, inputs are parsed on a thread
            pool. Pages are still appended strictly in input order.
        copy_metadata: Copy the metadata of the first input into both
            outputs, suffixing the title with the page set.
        keep_merged: Also return the padded merged document on the result.

    Returns:
        A :class:`SplitResult` whose ``odd_pages`` hold merged positions
        0, 2, 4, ... and whose ``even_pages`` hold positions 1, 3, 5, ...

    Raises:
        EmptyInputError: If *inputs* is empty.
        InvalidDocumentError: If any input cannot be parsed. No output is
            produced in that case.
    """

    merged, page_counts, padding, first_metadata = _build_merged(
        list(inputs), max_workers
    )

    merged_bytes = _serialize(merged)
    snapshot = PdfReader(io.BytesIO(merged_bytes))
    odd_writer, even_writer = _partition(snapshot.pages)

    odd_metadata: Optional[dict[str, str]] = None
    even_metadata: Optional[dict[str, str]] = None
    if copy_metadata and first_metadata:
        odd_metadata = _output_metadata(first_metadata, "odd pages")
        even_metadata = _output_metadata(first_metadata, "even pages")

    result = SplitResult(
        odd_pages=_serialize(odd_writer, odd_metadata),
        even_pages=_serialize(even_writer, even_metadata),
        odd_page_count=len(odd_writer.pages),
        even_page_count=len(even_writer.pages),
        padding_pages=padding,
        source_page_counts=page_counts,
        merged_pages=merged_bytes if keep_merged else None,
    )
    LOGGER.info("Split merged document: %s", result)
    return result


__all__ = ["merge_documents", "merge_and_split"]
