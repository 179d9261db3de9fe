from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import DictionaryObject, NameObject, NumberObject, StreamObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PDFFactory = Callable[..., bytes]


def _add_marked_page(writer: PdfWriter, width: int) -> None:
    """Add a page of *width* points whose content stream draws its width."""

    page = writer.add_blank_page(width=width, height=200)
    font_dict = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Font"),
            NameObject("/Subtype"): NameObject("/Type1"),
            NameObject("/BaseFont"): NameObject("/Helvetica"),
        }
    )
    font_ref = writer._add_object(font_dict)
    page[NameObject("/Resources")] = DictionaryObject(
        {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font_ref})}
    )
    content_bytes = f"BT /F1 12 Tf 10 100 Td (page {width}) Tj ET".encode("utf-8")
    stream = StreamObject()
    stream[NameObject("/Length")] = NumberObject(len(content_bytes))
    stream._data = content_bytes
    page[NameObject("/Contents")] = writer._add_object(stream)


@pytest.fixture()
def make_pdf() -> PDFFactory:
    """Build an in-memory PDF with one marked page per entry in *widths*."""

    def _create(
        widths: Sequence[int],
        *,
        title: str | None = None,
        user_password: str | None = None,
    ) -> bytes:
        writer = PdfWriter()
        for width in widths:
            _add_marked_page(writer, width)
        if title is not None:
            writer.add_metadata({"/Title": title, "/Author": "duplexprint-tests"})
        if user_password is not None:
            writer.encrypt(user_password=user_password, owner_password="owner-secret")
        stream = io.BytesIO()
        writer.write(stream)
        return stream.getvalue()

    return _create


@pytest.fixture()
def page_labels() -> Callable[[bytes], list[object]]:
    """Describe each page of a PDF by its width, or ``"blank"`` for padding."""

    def _describe(data: bytes) -> list[object]:
        reader = PdfReader(io.BytesIO(data))
        labels: list[object] = []
        for page in reader.pages:
            if "/Contents" not in page:
                labels.append("blank")
            else:
                labels.append(round(float(page.mediabox.width)))
        return labels

    return _describe


@pytest.fixture()
def corrupt_pdf() -> bytes:
    return b"this is not a pdf document"


@pytest.fixture()
def pdf_files(tmp_path: Path, make_pdf: PDFFactory) -> list[Path]:
    """Two PDFs on disk: a 2-page and a 3-page document."""

    first = tmp_path / "first.pdf"
    first.write_bytes(make_pdf([101, 102], title="First Document"))
    second = tmp_path / "second.pdf"
    second.write_bytes(make_pdf([201, 202, 203]))
    return [first, second]
