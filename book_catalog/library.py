import logging
from typing import Callable, Iterator, List, Optional, Tuple

from book_catalog.book import SPECIAL_TAG, Book, SpecialBook
from book_catalog.config import settings
from book_catalog.exceptions import (
    BookNotFoundError,
    CapacityExceededError,
    CatalogError,
    CorruptDataError,
    DuplicateBookError,
    StorageUnavailableError,
)
from book_catalog.validators import IdValidator

logger = logging.getLogger(__name__)

SEPARATOR = "---------------------"


class Library:
    """Manages an ordered, bounded collection of books and its text-file persistence.

    Every reporting operation (``add_book``, ``show_all_books``, ``search_book``,
    ``save_to_file``, ``load_from_file``) writes its outcome to ``output`` and
    never raises for catalog errors. The strict counterparts (``insert``,
    ``get_book``, ``save``, ``read``) raise ``CatalogError`` subclasses instead.
    """

    def __init__(self, max_books: Optional[int] = None, output: Callable[[str], None] = print) -> None:
        self.max_books = settings.max_books if max_books is None else max_books
        if self.max_books < 0:
            raise ValueError("max_books cannot be negative.")
        self.output = output
        self.books: List[Book] = []

    def __len__(self) -> int:
        return len(self.books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self.books)

    def __contains__(self, book_id: object) -> bool:
        return any(book.id == book_id for book in self.books)

    @property
    def is_full(self) -> bool:
        return len(self.books) >= self.max_books

    # ------------------------- Core operations ------------------------- #
    def insert(self, book: Book) -> None:
        """Append a book, or raise without touching the collection."""
        if self.is_full:
            raise CapacityExceededError("Library is full.")
        if book.id in self:
            raise DuplicateBookError(f"Error: Book ID {book.id} already exists.")
        self.books.append(book)

    def add_book(self, book: Book) -> bool:
        """Add a book and report the outcome. A rejected book is not kept."""
        try:
            self.insert(book)
        except CatalogError as e:
            logger.warning(f"Book rejected: id={book.id} reason={e}")
            self.output(str(e))
            return False
        logger.info(f"Book added: id={book.id} type={book.kind} count={len(self.books)}")
        self.output("Book added successfully!")
        return True

    def list_books(self) -> List[Book]:
        return list(self.books)

    def find_book(self, title: str) -> Optional[Tuple[int, Book]]:
        """Return (location, book) for the first exact title match, or None."""
        for index, book in enumerate(self.books):
            if book.title == title:
                return index, book
        return None

    def get_book(self, title: str) -> Book:
        match = self.find_book(title)
        if match is None:
            raise BookNotFoundError(f"Book not found: {title!r}")
        return match[1]

    def show_all_books(self) -> None:
        if not self.books:
            self.output("No books to display.")
            return
        for index, book in enumerate(self.books):
            self.output(f"Location (index): {index}")
            book.display(self.output)
            self.output(SEPARATOR)

    def search_book(self, title: str) -> Optional[Book]:
        match = self.find_book(title)
        if match is None:
            logger.info(f"Search miss: title={title!r}")
            self.output("Book not found.")
            return None
        index, book = match
        self.output(f"Book found at location (index): {index}")
        book.display(self.output)
        return book

    def clear(self) -> None:
        """Drop every held book."""
        self.books.clear()

    # ------------------------- Persistence ------------------------- #
    def save(self, path: str) -> None:
        """Write the catalog to ``path``, replacing whatever was there."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(f"{len(self.books)}\n")
                for book in self.books:
                    f.write(f"{book.id}\n")
                    f.write(f"{book.title}\n")
                    f.write(f"{book.author}\n")
                    f.write(f"{book.kind}\n")
                    if isinstance(book, SpecialBook):
                        f.write(f"{book.genre}\n")
        except OSError as e:
            raise StorageUnavailableError("Error opening file for writing.") from e

    @staticmethod
    def read(path: str) -> List[Book]:
        """Parse a catalog file into fresh books without touching any catalog."""
        try:
            f = open(path, "r", encoding="utf-8")
        except OSError as e:
            raise StorageUnavailableError("Error opening file for reading.") from e
        with f:
            try:
                lines = [line.rstrip("\n") for line in f]
            except UnicodeDecodeError as e:
                raise CorruptDataError(f"file is not valid UTF-8 text ({e.reason})") from e
        return Library._parse_lines(lines)

    @staticmethod
    def _parse_lines(lines: List[str]) -> List[Book]:
        cursor = iter(enumerate(lines, 1))

        def next_line(what: str) -> Tuple[int, str]:
            try:
                return next(cursor)
            except StopIteration:
                raise CorruptDataError(f"unexpected end of file while reading {what}") from None

        def next_int(what: str) -> int:
            lineno, raw = next_line(what)
            if not IdValidator.is_decimal(raw):
                raise CorruptDataError(f"line {lineno}: {what} must be an integer, got {raw!r}")
            return int(raw.strip())

        count = next_int("book count")
        if count < 0:
            raise CorruptDataError(f"line 1: book count cannot be negative ({count})")

        books: List[Book] = []
        for _ in range(count):
            book_id = next_int("book id")
            _, title = next_line("title")
            _, author = next_line("author")
            _, tag = next_line("book type")
            if tag == SPECIAL_TAG:
                _, genre = next_line("genre")
                books.append(SpecialBook(book_id, title, author, genre))
            else:
                books.append(Book(book_id, title, author))
        return books

    def save_to_file(self, path: str) -> bool:
        try:
            self.save(path)
        except StorageUnavailableError as e:
            logger.warning(f"Save failed: path={path} cause={e.__cause__}")
            self.output(str(e))
            return False
        logger.info(f"Catalog saved: path={path} count={len(self.books)}")
        self.output("Books saved to file.")
        return True

    def load_from_file(self, path: str) -> Optional[int]:
        """Replace the catalog with the books stored at ``path``.

        The current books are dropped only once the file has been opened and
        parsed; each stored book then goes through ``add_book``, so duplicate
        ids or overflow are reported per book. Returns the number accepted, or
        None when the file could not be used and the catalog was left alone.
        """
        try:
            loaded = self.read(path)
        except StorageUnavailableError as e:
            logger.warning(f"Load failed: path={path} cause={e.__cause__}")
            self.output(str(e))
            return None
        except CorruptDataError as e:
            logger.warning(f"Load failed: path={path} reason={e}")
            self.output(f"Error: {e}")
            return None

        self.clear()
        accepted = 0
        for book in loaded:
            if self.add_book(book):
                accepted += 1
        logger.info(f"Catalog loaded: path={path} stored={len(loaded)} accepted={accepted}")
        self.output("Books loaded from file.")
        return accepted
