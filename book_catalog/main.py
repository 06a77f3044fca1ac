import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt

from book_catalog.book import Book, SpecialBook, total_books
from book_catalog.config import settings
from book_catalog.exceptions import CatalogError, CorruptDataError, InvalidRecordError, StorageUnavailableError
from book_catalog.library import Library
from book_catalog.ui_helpers import print_book_list, print_total, set_output_mode
from book_catalog.validators import IdValidator

APP_NAME = "Book Catalog CLI"

MENU_TEXT = """
=== Library Menu ===
1. Add Book
2. Add Special Book
3. Show All Books
4. Search Book
5. Save Books to File
6. Load Books from File
7. Show Total Books (Static Member)
8. Exit"""

console = Console()

logger = logging.getLogger(__name__)


def _data_file(file: Optional[str]) -> str:
    return file or settings.data_file


def _open_library(path: str) -> Library:
    """Load the working catalog file, if there is one yet.

    Stored books that the catalog rejects (duplicate id, over capacity) are
    reported and skipped; only an unreadable or malformed file stops the command.
    """
    lib = Library()
    if not os.path.exists(path):
        return lib
    try:
        stored = Library.read(path)
    except (StorageUnavailableError, CorruptDataError) as e:
        print(f"Could not read catalog {path}: {e}")
        raise typer.Exit(code=1)
    for book in stored:
        try:
            lib.insert(book)
        except CatalogError as e:
            logger.warning(f"Stored book skipped: path={path} id={book.id} reason={e}")
            print(f"Skipped stored book {book.id}: {e}")
    return lib


def _persist(lib: Library, path: str) -> None:
    try:
        lib.save(path)
    except StorageUnavailableError as e:
        print(f"Could not write catalog {path}: {e}")
        raise typer.Exit(code=1)


def _add(book: Book, path: str) -> None:
    lib = _open_library(path)
    if lib.add_book(book):
        _persist(lib, path)
        print(book.summary())


FILE_OPTION = typer.Option(None, "--file", "-f", help="Catalog file (default: LIBRARY_DATA_FILE)")

# --- Typer CLI Application ---
app = typer.Typer(help=APP_NAME)

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)

@app.command("add")
def cli_add(book_id: int, title: str, author: str, file: Optional[str] = FILE_OPTION):
    """Add a book."""
    try:
        book = Book(book_id, title, author)
    except InvalidRecordError as e:
        print(f"Error: {e}")
        return
    _add(book, _data_file(file))

@app.command("add-special")
def cli_add_special(book_id: int, title: str, author: str, genre: str, file: Optional[str] = FILE_OPTION):
    """Add a special book with a genre."""
    try:
        book = SpecialBook(book_id, title, author, genre)
    except InvalidRecordError as e:
        print(f"Error: {e}")
        return
    _add(book, _data_file(file))

@app.command("list")
def cli_list(file: Optional[str] = FILE_OPTION):
    """Show all books with their locations."""
    lib = _open_library(_data_file(file))
    print_book_list(lib)

@app.command("search")
def cli_search(
    title: str = typer.Argument(..., help="Exact title (case-sensitive)"),
    file: Optional[str] = FILE_OPTION,
):
    """Find the first book whose title matches exactly."""
    lib = _open_library(_data_file(file))
    lib.search_book(title)

@app.command("save")
def cli_save(target: str, file: Optional[str] = FILE_OPTION):
    """Write the catalog to another file."""
    lib = _open_library(_data_file(file))
    lib.save_to_file(target)

@app.command("load")
def cli_load(source: str, file: Optional[str] = FILE_OPTION):
    """Replace the catalog with the books stored in SOURCE."""
    path = _data_file(file)
    lib = _open_library(path)
    if lib.load_from_file(source) is not None:
        _persist(lib, path)

@app.command("total")
def cli_total(file: Optional[str] = FILE_OPTION):
    """Show how many book records are alive in this process."""
    lib = _open_library(_data_file(file))
    logger.debug(f"Catalog holds {len(lib)} books")
    print_total(total_books())

def _ask_book(special: bool) -> Optional[Book]:
    raw_id = Prompt.ask("Enter Book ID", console=console)
    title = Prompt.ask("Enter Title", console=console)
    author = Prompt.ask("Enter Author", console=console)
    genre = Prompt.ask("Enter Genre", console=console) if special else None
    try:
        book_id = IdValidator.parse_id(raw_id)
        if special:
            return SpecialBook(book_id, title, author, genre)
        return Book(book_id, title, author)
    except InvalidRecordError as e:
        print(f"Error: {e}")
        return None

@app.command("menu")
def cli_menu():
    """Interactive numbered menu over an in-memory catalog."""
    lib = Library()
    while True:
        print(MENU_TEXT)
        try:
            choice = Prompt.ask("Enter choice", console=console)
            if choice == "1":
                book = _ask_book(special=False)
                if book is not None and lib.add_book(book):
                    print(book.summary())
            elif choice == "2":
                book = _ask_book(special=True)
                if book is not None:
                    lib.add_book(book)
            elif choice == "3":
                lib.show_all_books()
            elif choice == "4":
                lib.search_book(Prompt.ask("Enter Title to Search", console=console))
            elif choice == "5":
                lib.save_to_file(Prompt.ask("Enter filename to save", console=console))
            elif choice == "6":
                lib.load_from_file(Prompt.ask("Enter filename to load", console=console))
            elif choice == "7":
                print_total(total_books())
            elif choice == "8":
                print("Exiting...")
                return
            else:
                print("Invalid choice.")
        except EOFError:
            print("Exiting...")
            return


def main() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    app()


if __name__ == "__main__":
    main()
