"""
Command-line interface for PDF assembler.
"""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from pdf_assembler import __version__
from pdf_assembler.assembler import insert_pages, merge_documents, remove_pages
from pdf_assembler.config import Settings
from pdf_assembler.exceptions import PDFAssemblerException
from pdf_assembler.raster import document_to_images, images_to_document
from pdf_assembler.splitter import split_by_size
from pdf_assembler.storage import read_document, write_atomic, write_chunks, write_document, zip_files
from pdf_assembler.types import InsertPosition
from pdf_assembler.utils import encoded_size, format_file_size, megabytes_to_bytes, validate_max_bytes

console = Console()


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def _configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show log output')
@click.pass_context
def cli(ctx, verbose):
    """
    PDF Assembler CLI - Remove, insert, merge and size-split PDF pages.
    """
    settings = Settings.from_env()
    ctx.obj = settings
    if verbose:
        _configure_logging(settings.log_level)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_info(input_pdf):
    """
    Display page count and size of a PDF file.

    Example:

        pdf-assembler info input.pdf
    """
    try:
        document = read_document(input_pdf)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Path", os.path.abspath(input_pdf))
        table.add_row("File Size", format_file_size(os.path.getsize(input_pdf)))
        table.add_row("Number of Pages", str(document.page_count))
        for key in ("/Title", "/Author", "/Producer"):
            if document.metadata.get(key):
                table.add_row(key.lstrip("/"), document.metadata[key])

        console.print()
        console.print(table)
        console.print()
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="remove")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--pages', '-p',
    required=True,
    help="Pages to remove (e.g., '1,3,5-7')",
    type=str
)
@click.option(
    '--output', '-o',
    help='Output PDF path (defaults to replacing the input)',
    type=click.Path(dir_okay=False)
)
def remove(input_pdf, pages, output):
    """
    Remove pages from a PDF.

    Examples:

        pdf-assembler remove input.pdf -p 2,4

        pdf-assembler remove input.pdf -p 1-3 -o trimmed.pdf
    """
    try:
        document = read_document(input_pdf)
        result = remove_pages(document, pages)
        destination = write_document(result, output or input_pdf)

        console.print(
            f"\n[bold green]✓ Removed {document.page_count - result.page_count} page(s).[/bold green] "
            f"Original: {document.page_count} pages, New: {result.page_count} pages"
        )
        console.print(f"[dim]Output: {os.path.abspath(destination)}[/dim]\n")
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="insert")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('other_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--position',
    default='end',
    help='Where to insert the pages: beginning, end or at',
    type=click.Choice(['beginning', 'end', 'at'], case_sensitive=False)
)
@click.option(
    '--page', '-n',
    help='Target page number when --position at is used',
    type=int
)
@click.option(
    '--output', '-o',
    help='Output PDF path (defaults to replacing the input)',
    type=click.Path(dir_okay=False)
)
def insert(input_pdf, other_pdf, position, page, output):
    """
    Insert all pages of OTHER_PDF into INPUT_PDF.

    Examples:

        pdf-assembler insert input.pdf cover.pdf --position beginning

        pdf-assembler insert input.pdf appendix.pdf --position at -n 5 -o out.pdf
    """
    try:
        insert_position = InsertPosition.parse(position, page)
        document = read_document(input_pdf)
        other = read_document(other_pdf)
        result = insert_pages(document, other, insert_position)
        destination = write_document(result, output or input_pdf)

        console.print(
            f"\n[bold green]✓ Inserted {other.page_count} page(s) {insert_position}.[/bold green] "
            f"New page count: {result.page_count}"
        )
        console.print(f"[dim]Output: {os.path.abspath(destination)}[/dim]\n")
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF path',
    type=click.Path(dir_okay=False)
)
def merge(input_pdfs, output):
    """
    Merge PDFs in the given order.

    Example:

        pdf-assembler merge one.pdf two.pdf three.pdf -o merged.pdf
    """
    try:
        documents = [read_document(path) for path in input_pdfs]
        result = merge_documents(documents)
        destination = write_document(result, output)

        console.print(
            f"\n[bold green]✓ Merged {len(documents)} file(s) into {result.page_count} pages[/bold green]"
        )
        console.print(f"[dim]Output: {os.path.abspath(destination)}[/dim]\n")
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--max-size-mb', '-m',
    help='Maximum size of each chunk in megabytes (default from PDF_ASSEMBLER_MAX_SIZE_MB)',
    type=float
)
@click.option(
    '--max-bytes',
    help='Maximum size of each chunk in bytes (overrides --max-size-mb)',
    type=int
)
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for chunks',
    type=click.Path(file_okay=False)
)
@click.option(
    '--prefix', '-p',
    default='chunk',
    help='Prefix for chunk filenames',
    type=str
)
@click.option('--zip', 'make_zip', is_flag=True, help='Also bundle the chunks into a zip archive')
@click.pass_obj
def split(settings, input_pdf, max_size_mb, max_bytes, output_dir, prefix, make_zip):
    """
    Split a PDF into chunks no larger than a size budget.

    Pages are never divided; a single page above the budget becomes its own chunk.

    Examples:

        pdf-assembler split input.pdf -m 5

        pdf-assembler split input.pdf --max-bytes 250000 -o parts --zip
    """
    try:
        if max_bytes is None:
            max_bytes = megabytes_to_bytes(
                max_size_mb if max_size_mb is not None else settings.max_size_mb
            )
        max_bytes = validate_max_bytes(max_bytes)

        document = read_document(input_pdf)
        if document.page_count == 0:
            console.print("\n[bold yellow]PDF has no pages to split.[/bold yellow]\n")
            return

        console.print(
            f"\n[bold cyan]Splitting {document.page_count} pages into chunks of at most "
            f"{format_file_size(max_bytes)}...[/bold cyan]"
        )

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console
        ) as progress:
            task = progress.add_task("Measuring pages", total=document.page_count)

            def update_progress(current, total):
                progress.update(task, completed=current)

            chunks = split_by_size(document, max_bytes, progress_callback=update_progress)

        files, sizes = write_chunks(chunks, output_dir, prefix=prefix)

        table = Table(title="Chunks")
        table.add_column("File", style="cyan")
        table.add_column("Pages", style="green", justify="right")
        table.add_column("Size", style="green", justify="right")
        for path, chunk, size in zip(files, chunks, sizes):
            style = "red" if size > max_bytes else None
            table.add_row(path.name, str(chunk.page_count), format_file_size(size), style=style)

        console.print(table)
        console.print(f"\n[bold green]✓ PDF split into {len(files)} chunk(s).[/bold green]")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")

        if make_zip:
            archive = zip_files(files, Path(output_dir) / f"{Path(input_pdf).stem}_split.zip")
            console.print(f"[dim]Archive: {archive}[/dim]")
        console.print()
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="images-to-pdf")
@click.argument('images', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF path',
    type=click.Path(dir_okay=False)
)
def images_to_pdf(images, output):
    """
    Combine images into a PDF with one page per image.

    Example:

        pdf-assembler images-to-pdf scan1.jpg scan2.jpg -o scans.pdf
    """
    try:
        document = images_to_document(Path(path).read_bytes() for path in images)
        destination = write_document(document, output)
        console.print(f"\n[bold green]✓ Created {destination} with {document.page_count} page(s)[/bold green]\n")
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="pdf-to-images")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory for page images',
    type=click.Path(file_okay=False)
)
@click.option('--dpi', default=150, show_default=True, help='Rendering resolution', type=int)
@click.option('--quality', default=90, show_default=True, help='JPEG quality', type=int)
def pdf_to_images(input_pdf, output_dir, dpi, quality):
    """
    Render every page of a PDF to page_<n>.jpg.

    Example:

        pdf-assembler pdf-to-images input.pdf -o images --dpi 200
    """
    try:
        document = read_document(input_pdf)
        images = document_to_images(document, dpi=dpi, quality=quality)
        for index, image in enumerate(images, start=1):
            write_atomic(Path(output_dir) / f"page_{index}.jpg", image)
        console.print(f"\n[bold green]✓ Wrote {len(images)} image(s)[/bold green]")
        console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]\n")
    except PDFAssemblerException as e:
        _fail(e)


@cli.command(name="size")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
def show_size(input_pdf):
    """
    Show the re-encoded size of a PDF, the measure used by split.
    """
    try:
        document = read_document(input_pdf)
        console.print(f"{format_file_size(encoded_size(document))} ({document.page_count} pages)")
    except PDFAssemblerException as e:
        _fail(e)


if __name__ == '__main__':
    cli()
