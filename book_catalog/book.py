from __future__ import annotations

import weakref
from typing import Callable

from book_catalog.validators import IdValidator, TextValidator

NORMAL_TAG = "Normal"
SPECIAL_TAG = "Special"

_live_books = 0


def total_books() -> int:
    """Number of Book instances currently alive in this process."""
    return _live_books


def _release() -> None:
    global _live_books
    _live_books -= 1


class Book:
    """Represents a single book record in the catalog."""

    kind = NORMAL_TAG

    def __init__(self, book_id: int, title: str, author: str) -> None:
        global _live_books
        self.id = IdValidator.validate_id(book_id)
        self.title = title
        self.author = author
        self.view_count = 0
        _live_books += 1
        weakref.finalize(self, _release)

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = TextValidator.validate_field("Title", value)

    @property
    def author(self) -> str:
        return self._author

    @author.setter
    def author(self, value: str) -> None:
        self._author = TextValidator.validate_field("Author", value)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ID: {self.id})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, title={self.title!r}, author={self.author!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def get_id(self) -> int:
        return self.id

    def get_title(self) -> str:
        return self.title

    def get_author(self) -> str:
        return self.author

    def display(self, write: Callable[[str], None] = print) -> None:
        """Count one view, then render the record line by line to ``write``."""
        self.view_count += 1
        write(f"Book ID: {self.id}")
        write(f"Title: {self.title}")
        write(f"Author: {self.author}")
        write(f"View Count: {self.view_count}")

    def summary(self) -> str:
        return f"Book: {self.title} by {self.author}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "type": self.kind,
            "view_count": self.view_count,
        }


class SpecialBook(Book):
    """A book record that also carries a genre."""

    kind = SPECIAL_TAG

    def __init__(self, book_id: int, title: str, author: str, genre: str) -> None:
        super().__init__(book_id, title, author)
        self.genre = genre

    @property
    def genre(self) -> str:
        return self._genre

    @genre.setter
    def genre(self, value: str) -> None:
        self._genre = TextValidator.validate_field("Genre", value)

    def __repr__(self) -> str:
        return (f"SpecialBook(id={self.id!r}, title={self.title!r}, "
                f"author={self.author!r}, genre={self.genre!r})")

    def get_genre(self) -> str:
        return self.genre

    def display(self, write: Callable[[str], None] = print) -> None:
        write("[Special Book]")
        super().display(write)
        write(f"Genre: {self.genre}")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["genre"] = self.genre
        return data
