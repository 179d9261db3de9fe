from __future__ import annotations

import io

import pytest
from pypdf import PdfReader

from duplexprint import (
    EmptyInputError,
    InvalidDocumentError,
    SourceFile,
    SplitResult,
    merge_and_split,
    merge_documents,
    page_count,
)


def test_single_odd_document_gets_trailing_blank(make_pdf, page_labels) -> None:
    result = merge_and_split([make_pdf([101, 102, 103])])

    assert page_labels(result.odd_pages) == [101, 103]
    assert page_labels(result.even_pages) == [102, "blank"]
    assert result.padding_pages == 1
    assert result.merged_page_count == 4


def test_padding_is_per_document(make_pdf, page_labels) -> None:
    result = merge_and_split([make_pdf([101, 102]), make_pdf([201, 202, 203])])

    assert page_labels(result.odd_pages) == [101, 201, 203]
    assert page_labels(result.even_pages) == [102, 202, "blank"]
    assert result.source_page_counts == [2, 3]
    assert result.padding_pages == 1
    assert result.merged_page_count == 6


def test_odd_document_first_keeps_next_document_on_front_side(make_pdf, page_labels) -> None:
    result = merge_and_split(
        [make_pdf([101]), make_pdf([201, 202, 203]), make_pdf([301, 302])]
    )

    assert page_labels(result.odd_pages) == [101, 201, 203, 301]
    assert page_labels(result.even_pages) == ["blank", 202, "blank", 302]
    assert result.padding_pages == 2


def test_empty_input_raises() -> None:
    with pytest.raises(EmptyInputError):
        merge_and_split([])


def test_zero_page_document_produces_empty_outputs(make_pdf) -> None:
    result = merge_and_split([make_pdf([])])

    assert result.padding_pages == 0
    assert result.merged_page_count == 0
    assert page_count(result.odd_pages) == 0
    assert page_count(result.even_pages) == 0


def test_zero_page_document_contributes_nothing(make_pdf, page_labels) -> None:
    result = merge_and_split([make_pdf([101]), make_pdf([]), make_pdf([301, 302])])

    assert page_labels(result.odd_pages) == [101, 301]
    assert page_labels(result.even_pages) == ["blank", 302]
    assert result.source_page_counts == [1, 0, 2]


@pytest.mark.parametrize(
    "lengths",
    [[1], [2], [5], [4, 4], [1, 1, 1], [3, 0, 2, 7], [6, 1, 2, 9, 10]],
)
def test_partition_properties(make_pdf, page_labels, lengths: list[int]) -> None:
    buffers = [
        make_pdf([100 * (doc + 1) + page for page in range(length)])
        for doc, length in enumerate(lengths)
    ]

    result = merge_and_split(buffers)

    expected_padding = sum(length % 2 for length in lengths)
    assert result.padding_pages == expected_padding
    assert result.merged_page_count == sum(lengths) + expected_padding
    assert result.merged_page_count % 2 == 0
    assert result.odd_page_count == result.even_page_count

    odd_labels = page_labels(result.odd_pages)
    even_labels = page_labels(result.even_pages)
    assert len(odd_labels) == result.odd_page_count
    assert len(even_labels) == result.even_page_count

    # every source page lands exactly once, in ascending order
    content = [label for label in odd_labels + even_labels if label != "blank"]
    assert sorted(content) == sorted(
        100 * (doc + 1) + page for doc, length in enumerate(lengths) for page in range(length)
    )
    for labels in (odd_labels, even_labels):
        marked = [label for label in labels if label != "blank"]
        assert marked == sorted(marked)

    # each document starts on a front side
    for doc, length in enumerate(lengths):
        if length:
            assert 100 * (doc + 1) in odd_labels


def test_invalid_document_aborts_merge_with_index(make_pdf, corrupt_pdf: bytes) -> None:
    with pytest.raises(InvalidDocumentError) as excinfo:
        merge_and_split([make_pdf([101]), corrupt_pdf, make_pdf([301])])

    assert excinfo.value.source_index == 1
    assert "Document #2" in str(excinfo.value)


def test_parallel_parsing_reports_first_failure(make_pdf, corrupt_pdf: bytes) -> None:
    with pytest.raises(InvalidDocumentError) as excinfo:
        merge_and_split(
            [make_pdf([101]), corrupt_pdf, corrupt_pdf, make_pdf([401])],
            max_workers=4,
        )

    assert excinfo.value.source_index == 1


def test_parallel_parsing_preserves_order(make_pdf, page_labels) -> None:
    buffers = [make_pdf([100 * doc + 1, 100 * doc + 2]) for doc in range(1, 7)]

    sequential = merge_and_split(buffers)
    parallel = merge_and_split(buffers, max_workers=3)

    assert page_labels(parallel.odd_pages) == page_labels(sequential.odd_pages)
    assert page_labels(parallel.even_pages) == page_labels(sequential.even_pages)
    assert page_labels(parallel.odd_pages) == [101, 201, 301, 401, 501, 601]


def test_source_file_inputs_carry_file_name(make_pdf, corrupt_pdf: bytes) -> None:
    with pytest.raises(InvalidDocumentError) as excinfo:
        merge_and_split([SourceFile("good.pdf", make_pdf([101])), SourceFile("bad.pdf", corrupt_pdf)])

    assert excinfo.value.file_name == "bad.pdf"
    assert excinfo.value.source_index == 1


def test_result_unpacks_into_odd_and_even(make_pdf) -> None:
    result = merge_and_split([make_pdf([101, 102])])
    odd, even = result

    assert isinstance(result, SplitResult)
    assert odd == result.odd_pages
    assert even == result.even_pages
    assert odd.startswith(b"%PDF-")
    assert even.startswith(b"%PDF-")
    assert result.merged_pages is None
    assert result.file_name == "merged_document.pdf"


def test_outputs_are_independent_of_sources(make_pdf, page_labels) -> None:
    source = make_pdf([101, 102, 103])
    snapshot = bytes(source)

    first = merge_and_split([source])
    second = merge_and_split([source])

    assert source == snapshot
    assert page_labels(first.odd_pages) == page_labels(second.odd_pages)
    assert page_labels(first.even_pages) == page_labels(second.even_pages)


def test_padding_page_matches_previous_page_size(make_pdf) -> None:
    result = merge_and_split([make_pdf([150, 250, 350])])

    blank = PdfReader(io.BytesIO(result.even_pages)).pages[-1]
    assert round(float(blank.mediabox.width)) == 350
    assert round(float(blank.mediabox.height)) == 200


def test_keep_merged_returns_padded_document(make_pdf, page_labels) -> None:
    result = merge_and_split([make_pdf([101, 102, 103]), make_pdf([201])], keep_merged=True)

    assert page_labels(result.merged_pages) == [101, 102, 103, "blank", 201, "blank"]


def test_merge_documents(make_pdf, page_labels) -> None:
    merged = merge_documents([make_pdf([101]), make_pdf([201, 202])])

    assert page_labels(merged) == [101, "blank", 201, 202]


def test_merge_documents_requires_input() -> None:
    with pytest.raises(EmptyInputError):
        merge_documents([])


def test_copy_metadata_labels_outputs(make_pdf) -> None:
    result = merge_and_split(
        [make_pdf([101, 102], title="Course Notes"), make_pdf([201], title="Appendix")],
        copy_metadata=True,
    )

    odd_meta = PdfReader(io.BytesIO(result.odd_pages)).metadata
    even_meta = PdfReader(io.BytesIO(result.even_pages)).metadata
    assert odd_meta.title == "Course Notes (odd pages)"
    assert even_meta.title == "Course Notes (even pages)"
    assert odd_meta.author == "duplexprint-tests"


def test_metadata_not_copied_by_default(make_pdf) -> None:
    result = merge_and_split([make_pdf([101, 102], title="Course Notes")])

    metadata = PdfReader(io.BytesIO(result.odd_pages)).metadata
    assert metadata is None or metadata.title is None
