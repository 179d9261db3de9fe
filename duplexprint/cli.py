"""
Command-line interface for duplexprint.
"""

import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from duplexprint import __version__
from duplexprint.config import DuplexSettings
from duplexprint.exceptions import DuplexPrintError
from duplexprint.utils import configure_logging, format_file_size, pluralize_pages
from duplexprint.workspace import DuplexWorkspace

console = Console()


def _load_settings(verbose=False, **overrides):
    try:
        settings = DuplexSettings.from_env().with_overrides(**overrides)
    except DuplexPrintError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def _queue_files(workspace, input_pdfs):
    """Add *input_pdfs* to *workspace*, printing one warning per rejected file."""
    workspace.add_paths(input_pdfs)

    for warning in workspace.warnings:
        console.print(f"[bold yellow]⚠ Warning:[/bold yellow] {escape(warning)}")

    table = Table(title="Uploaded Files")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Pages", style="green", justify="right")
    table.add_column("Size", style="green", justify="right")

    for position, item in enumerate(workspace.files, start=1):
        table.add_row(
            str(position),
            escape(item.name),
            pluralize_pages(item.page_count),
            format_file_size(item.source.size),
        )

    if len(workspace):
        console.print(table)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Duplex Print - Prepare PDFs for manual double-sided printing.
    """
    pass


@cli.command(name="count")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def count_pages(input_pdfs, verbose):
    """
    Show the page count of every input PDF.

    Unreadable files are reported and skipped; the command fails only when
    no file could be read.

    Example:

        duplex-print count chapter1.pdf chapter2.pdf
    """
    workspace = DuplexWorkspace(_load_settings(verbose))
    _queue_files(workspace, input_pdfs)

    if not len(workspace):
        console.print("[bold red]✗ Error:[/bold red] No readable PDF files were given.")
        sys.exit(1)

    console.print(f"[bold]Total:[/bold] {pluralize_pages(workspace.total_pages)}\n")


@cli.command(name="split")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for the odd and even page files',
    type=click.Path(file_okay=False)
)
@click.option(
    '--workers', '-w',
    default=None,
    help='Number of threads used to parse the inputs',
    type=click.IntRange(min=1)
)
@click.option(
    '--copy-metadata/--no-copy-metadata',
    default=None,
    help='Copy metadata from the first document into both outputs'
)
@click.option(
    '--keep-merged',
    is_flag=True,
    help='Also write the padded merged document'
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def split(input_pdfs, output_dir, workers, copy_metadata, keep_merged, verbose):
    """
    Merge PDFs and split them into odd and even page files.

    Documents with an odd page count are followed by a blank page so that
    every document starts on a front side.

    Examples:

        duplex-print split report.pdf

        duplex-print split cover.pdf body.pdf -o print_job

        duplex-print split *.pdf --workers 4 --keep-merged
    """
    settings = _load_settings(verbose, max_workers=workers, copy_metadata=copy_metadata)
    workspace = DuplexWorkspace(settings)

    console.print("\n[bold cyan]Reading PDFs...[/bold cyan]")
    _queue_files(workspace, input_pdfs)

    if workspace.warnings:
        console.print(f"[yellow]{workspace.error or 'Some files were skipped.'}[/yellow]")

    console.print(f"\n[bold cyan]Processing {len(workspace)} file(s)...[/bold cyan]")
    try:
        written = workspace.export(output_dir, keep_merged=keep_merged)
    except (DuplexPrintError, OSError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(workspace.error or str(e))}")
        console.print(f"[dim]{escape(str(e))}[/dim]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    console.print(f"\n[bold green]✓ Successfully created {len(written)} file(s)[/bold green]")
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")
    for file_path in written:
        console.print(f"  • {os.path.basename(file_path)}")

    console.print("\n[bold]Printing Instructions[/bold]")
    for number, (title, text) in enumerate(workspace.instructions(), start=1):
        console.print(f"  {number}. [bold]{title}:[/bold] {text}")
    console.print()


if __name__ == '__main__':
    cli()
