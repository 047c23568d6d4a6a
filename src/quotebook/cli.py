"""Command-line interface for quotebook.

Built with Typer for commands and Rich for beautiful output.
"""

from pathlib import Path
from typing import Iterable, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import get_config
from .logging_utils import configure_logging
from .quotes import (
    ALL_CATEGORIES,
    Category,
    Quote,
    QuoteAction,
    QuoteDraft,
    QuoteManager,
    QuoteStore,
    to_selection,
)

# Create the main app
app = typer.Typer(
    name="quotebook",
    help="Keep, tag and search your favourite quotes.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


@app.callback()
def main_callback() -> None:
    """Keep, tag and search your favourite quotes."""
    configure_logging(get_config().log_level)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def open_manager() -> QuoteManager:
    """Load the configured quote database."""
    return QuoteManager.open(QuoteStore(get_config().db_path))


def format_quote_table(quotes: Iterable[Quote], title: str = "Quotes") -> Table:
    """Create a rich table for displaying quotes."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Quote", style="cyan", no_wrap=False)
    table.add_column("Categories", style="green")

    for quote in quotes:
        table.add_row(quote.text, quote.category_display or "-")

    return table


def build_draft(text: str, categories: Optional[list[Category]]) -> QuoteDraft:
    """Validate entry input, exiting with an error if it is unusable."""
    try:
        return QuoteDraft.from_categories(text, categories)
    except ValidationError:
        print_error("Quote text cannot be empty.")
        raise typer.Exit(1)


# ============================================================================
# Quote Commands
# ============================================================================


@app.command("list")
def list_quotes(
    category: Optional[list[Category]] = typer.Option(
        None, "--category", "-c", case_sensitive=False, help="Show only these categories"
    ),
) -> None:
    """List quotes, optionally filtered by category.

    With no --category every category is selected.
    """
    with open_manager().session() as manager:
        selection = to_selection(category) if category else [True] * len(ALL_CATEGORIES)
        quotes = manager.by_selection(selection)

        if not quotes:
            console.print("[dim]No quotes found.[/dim]")
            return

        title = "All Quotes"
        if category:
            title = "Quotes - " + ", ".join(c.value.title() for c in category)
        console.print(format_quote_table(quotes, title=title))


@app.command()
def add(
    text: str = typer.Argument(..., help="Quote text"),
    category: Optional[list[Category]] = typer.Option(
        None, "--category", "-c", case_sensitive=False, help="Category to tag (repeatable)"
    ),
) -> None:
    """Add a new quote."""
    draft = build_draft(text, category)

    with open_manager().session() as manager:
        quote = manager.add_quote(draft)

    print_success(f"Added: {quote.short_text}")
    if not quote.categories:
        print_warning("Quote has no categories and will not appear in category listings.")


@app.command()
def remove(
    text: str = typer.Argument(..., help="Exact text of the quote to remove"),
    category: Optional[list[Category]] = typer.Option(
        None, "--category", "-c", case_sensitive=False, help="Exact categories of the quote"
    ),
) -> None:
    """Remove a quote."""
    with open_manager().session() as manager:
        quote = manager.find_by_text(text, category or None)
        if quote is None:
            print_warning(f"No quote found matching: {text}")
            raise typer.Exit(1)
        manager.handle_action(QuoteAction.DELETE, quote)

    print_success(f"Removed: {quote.short_text}")


@app.command()
def edit(
    text: str = typer.Argument(..., help="Exact text of the quote to edit"),
    new_text: Optional[str] = typer.Option(None, "--text", "-t", help="Replacement text"),
    category: Optional[list[Category]] = typer.Option(
        None, "--category", "-c", case_sensitive=False, help="Replacement categories"
    ),
) -> None:
    """Edit a quote's text or categories."""
    with open_manager().session() as manager:
        quote = manager.find_by_text(text)
        if quote is None:
            print_warning(f"No quote found matching: {text}")
            raise typer.Exit(1)

        draft = manager.handle_action(QuoteAction.EDIT, quote)
        try:
            draft = QuoteDraft(
                text=new_text if new_text is not None else draft.text,
                selection=to_selection(category) if category else draft.selection,
            )
        except ValidationError:
            print_error("Quote text cannot be empty.")
            raise typer.Exit(1)

        updated = manager.add_quote(draft)

    print_success(f"Updated: {updated.short_text}")


@app.command()
def search(
    term: str = typer.Argument(..., help="Text to look for (case-sensitive)"),
) -> None:
    """Search quotes by text."""
    with open_manager().session() as manager:
        results = manager.search(term)
        console.print(f"[bold]Search Results: {len(results)}/{manager.total}[/bold]")

        if results:
            console.print(format_quote_table(results, title=f"Search: {term}"))


@app.command()
def sort() -> None:
    """Sort the database and remove duplicate quotes."""
    with open_manager().session() as manager:
        before = manager.total
        manager.store.sort(manager.quotes)
        removed = before - manager.total

    print_success(f"Sorted {manager.total} quotes")
    if removed:
        console.print(f"[dim]Removed {removed} duplicate(s)[/dim]")


@app.command()
def categories() -> None:
    """Show all categories with quote counts."""
    with open_manager().session() as manager:
        table = Table(title="Categories", show_header=True, header_style="bold magenta")
        table.add_column("Category", style="cyan")
        table.add_column("Quotes", justify="right")

        for category in ALL_CATEGORIES:
            table.add_row(category.value, str(len(manager.by_categories([category]))))

        console.print(table)


@app.command()
def export(
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (defaults to QUOTEBOOK_EXPORT_PATH)"
    ),
    format: str = typer.Option("csv", "--format", "-f", help="Format: csv, markdown"),
) -> None:
    """Export quotes to a file."""
    from .export import ExportFormat

    try:
        export_format = ExportFormat(format.lower())
    except ValueError:
        print_error(f"Invalid format: {format}. Use: csv, markdown")
        raise typer.Exit(1)

    output = output or get_config().export_path

    with open_manager().session() as manager:
        console.print(f"[dim]Exporting to {output}...[/dim]")
        result = manager.export(output, export_format)

    if result.success:
        print_success(f"Exported {result.quotes_exported} quotes to {result.file_path}")
    else:
        print_error(f"Export failed: {result.error}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"quotebook version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
