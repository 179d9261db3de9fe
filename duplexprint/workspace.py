"""Working set of uploaded files feeding the merge-and-split engine.

:class:`DuplexWorkspace` keeps the files a user has added together with their
page counts, collects per-file warnings and turns a successful engine run into
two output files. It holds no state beyond one session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import DuplexSettings
from .document import FileLike, as_source_file, inspect_files
from .engine import merge_and_split
from .exceptions import DuplexPrintError, EmptyInputError
from .types import PageCountReport, SourceFile, SplitResult
from .utils import PathLike, ensure_path, is_pdf_name

LOGGER = logging.getLogger("duplexprint.workspace")

COUNT_FAILURE_MESSAGE = (
    "Error processing one or more files. Please ensure they are valid PDFs."
)
EMPTY_WORKSPACE_MESSAGE = "Please add at least one PDF file."
PROCESS_FAILURE_MESSAGE = "An error occurred while processing the PDFs."

PRINTING_INSTRUCTIONS: Tuple[Tuple[str, str], ...] = (
    ("Download", "You'll receive two files: {odd} and {even}"),
    ("First Print", "Print {odd} selecting \"All pages\""),
    ("Prepare", "Take the printed stack and reinsert it into your printer"),
    ("Check Orientation", "Ensure pages are oriented correctly for your specific printer model"),
    ("Second Print", "Print {even} selecting \"All pages\""),
)


@dataclass(frozen=True)
class QueuedFile:
    """A file accepted into the working set."""

    source: SourceFile
    page_count: int

    @property
    def name(self) -> str:
        return self.source.name


class DuplexWorkspace:
    """Ordered collection of accepted PDF files."""

    def __init__(self, settings: Optional[DuplexSettings] = None) -> None:
        self.settings = settings or DuplexSettings()
        self._files: List[QueuedFile] = []
        self.warnings: List[str] = []
        self.error: Optional[str] = None

    @property
    def files(self) -> List[QueuedFile]:
        return list(self._files)

    @property
    def total_pages(self) -> int:
        return sum(item.page_count for item in self._files)

    def __len__(self) -> int:
        return len(self._files)

    def add_files(self, files: Iterable[FileLike]) -> List[PageCountReport]:
        """Count and queue *files*; unreadable ones are reported and skipped."""

        self.error = None
        sources = [as_source_file(item) for item in files]
        reports = inspect_files(sources)

        failed = False
        for source, report in zip(sources, reports):
            if report.ok:
                self._files.append(QueuedFile(source=source, page_count=report.page_count))
            else:
                failed = True
                self.warnings.append(str(report))

        if failed:
            self.error = COUNT_FAILURE_MESSAGE
        LOGGER.info(
            "Queued %d of %d file(s); working set holds %d file(s)",
            sum(1 for report in reports if report.ok),
            len(reports),
            len(self._files),
        )
        return reports

    def add_paths(self, paths: Iterable[PathLike]) -> List[PageCountReport]:
        """Read PDF files from disk and queue them in the given order."""

        sources: List[SourceFile] = []
        for raw_path in paths:
            path = ensure_path(raw_path)
            if not is_pdf_name(path.name):
                LOGGER.warning("Skipping %s: not a .pdf file", path)
                self.warnings.append(f"{path.name}: File does not have .pdf extension")
                continue
            try:
                data = path.read_bytes()
            except OSError as exc:
                LOGGER.warning("Skipping %s: %s", path, exc)
                self.warnings.append(f"{path.name}: Unable to read file ({exc.strerror or exc})")
                continue
            sources.append(SourceFile(name=path.name, data=data))
        return self.add_files(sources)

    def remove(self, index: int) -> QueuedFile:
        """Remove and return the file at *index*."""

        removed = self._files.pop(index)
        LOGGER.debug("Removed %s from the working set", removed.name)
        return removed

    def clear(self) -> None:
        self._files.clear()
        self.warnings.clear()
        self.error = None

    def process(self, *, keep_merged: bool = False) -> SplitResult:
        """Merge and split every queued file.

        Raises:
            EmptyInputError: If no file has been queued.
            DuplexPrintError: If the engine fails; the working set is kept.
        """

        self.error = None
        if not self._files:
            self.error = EMPTY_WORKSPACE_MESSAGE
            raise EmptyInputError(EMPTY_WORKSPACE_MESSAGE)

        try:
            return merge_and_split(
                [item.source for item in self._files],
                max_workers=self.settings.max_workers,
                copy_metadata=self.settings.copy_metadata,
                keep_merged=keep_merged,
            )
        except DuplexPrintError as exc:
            LOGGER.error("Processing failed: %s", exc)
            self.error = PROCESS_FAILURE_MESSAGE
            raise

    def export(self, output_dir: PathLike, *, keep_merged: bool = False) -> List[Path]:
        """Process the working set and write the outputs into *output_dir*.

        Returns the odd and even page files, followed by the merged document
        when *keep_merged* is set. Nothing is written unless processing
        succeeds, and files already written are removed if a later write
        fails.
        """

        result = self.process(keep_merged=keep_merged)

        directory = ensure_path(output_dir)
        outputs = [
            (directory / self.settings.odd_filename, result.odd_pages),
            (directory / self.settings.even_filename, result.even_pages),
        ]
        if result.merged_pages is not None:
            outputs.append((directory / result.file_name, result.merged_pages))

        written: List[Path] = []
        try:
            directory.mkdir(parents=True, exist_ok=True)
            for path, data in outputs:
                path.write_bytes(data)
                written.append(path)
        except OSError as exc:
            LOGGER.error("Failed to write outputs to %s: %s", directory, exc)
            for path in written:
                path.unlink(missing_ok=True)
            self.error = PROCESS_FAILURE_MESSAGE
            raise

        LOGGER.info("Wrote %s", ", ".join(str(path) for path in written))
        return written

    def instructions(self) -> List[Tuple[str, str]]:
        """Return the manual duplex printing steps for the configured output names."""

        names = {"odd": self.settings.odd_filename, "even": self.settings.even_filename}
        return [(title, text.format(**names)) for title, text in PRINTING_INSTRUCTIONS]


__all__ = [
    "DuplexWorkspace",
    "QueuedFile",
    "PRINTING_INSTRUCTIONS",
]
