import os
import json
from typing import List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from book_catalog.book import Book, SpecialBook
from book_catalog.library import Library

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def print_book_list(lib: Library) -> None:
    """Print every book in the current output mode.
    - plain: the catalog's own listing (location, record, separator); counts a view per book
    - json: JSON array of the records
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "plain" or not len(lib):
        lib.show_all_books()
        return

    books: List[Book] = lib.list_books()
    if mode == "json":
        payload = [dict(b.to_dict(), location=i) for i, b in enumerate(books)]
        print(json.dumps(payload, ensure_ascii=False))
    else:
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("#", style="dim", no_wrap=True)
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Genre", style="green")
        for i, b in enumerate(books):
            genre = b.genre if isinstance(b, SpecialBook) else ""
            table.add_row(str(i), str(b.id), b.title, b.author, genre)
        _console.print(table)

def print_total(total: int) -> None:
    """Print the live book counter in the current output mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps({"total_books": total}))
    elif mode == "rich":
        _console.print(Panel.fit(f"[bold]Total Books:[/] {total}", title="📊 Stats", border_style="blue"))
    else:
        print(f"Total books in library (static): {total}")
