import gc

import pytest

from book_catalog.book import Book, SpecialBook, total_books
from book_catalog.exceptions import InvalidRecordError
from book_catalog.validators import IdValidator, TextValidator


def test_display_renders_and_counts_view():
    book = Book(1, "Dune", "Herbert")
    lines = []

    book.display(lines.append)

    assert lines == ["Book ID: 1", "Title: Dune", "Author: Herbert", "View Count: 1"]
    assert book.view_count == 1


def test_view_count_after_n_displays():
    book = Book(7, "Emma", "Austen")
    for _ in range(5):
        book.display(lambda line: None)
    assert book.view_count == 5


def test_special_display_wraps_base_rendering():
    book = SpecialBook(2, "Dune Messiah", "Herbert", "SciFi")
    lines = []

    book.display(lines.append)

    assert lines == [
        "[Special Book]",
        "Book ID: 2",
        "Title: Dune Messiah",
        "Author: Herbert",
        "View Count: 1",
        "Genre: SciFi",
    ]
    assert book.view_count == 1


def test_display_dispatches_through_base_reference():
    books = [Book(1, "A", "X"), SpecialBook(2, "B", "Y", "Poetry")]
    lines = []
    for b in books:
        b.display(lines.append)
    assert lines.count("[Special Book]") == 1
    assert lines[-1] == "Genre: Poetry"


def test_accessors_have_no_side_effects():
    book = SpecialBook(3, "Title", "Author", "Drama")
    assert book.get_id() == 3
    assert book.get_title() == "Title"
    assert book.get_author() == "Author"
    assert book.get_genre() == "Drama"
    assert book.view_count == 0


def test_equality_uses_id_only():
    assert Book(5, "One", "A") == Book(5, "Other", "B")
    assert Book(5, "One", "A") == SpecialBook(5, "One", "A", "SciFi")
    assert Book(5, "One", "A") != Book(6, "One", "A")
    assert len({Book(5, "x", "y"), Book(5, "z", "w")}) == 1


def test_summary_line():
    assert Book(1, "Ulysses", "James Joyce").summary() == "Book: Ulysses by James Joyce"


def test_type_tags():
    assert Book(1, "a", "b").kind == "Normal"
    assert SpecialBook(1, "a", "b", "c").kind == "Special"
    assert SpecialBook(1, "a", "b", "c").to_dict()["genre"] == "c"


@pytest.mark.parametrize("title", ["two\nlines", "carriage\rreturn"])
def test_line_breaks_are_rejected(title):
    with pytest.raises(InvalidRecordError, match="Title cannot contain line breaks"):
        Book(1, title, "Author")


def test_genre_line_break_rejected():
    with pytest.raises(ValueError):
        SpecialBook(1, "Title", "Author", "Sci\nFi")


def test_non_integer_id_rejected():
    with pytest.raises(InvalidRecordError):
        Book("1", "Title", "Author")
    with pytest.raises(InvalidRecordError):
        Book(True, "Title", "Author")


def test_empty_text_is_allowed():
    book = Book(0, "", "")
    assert book.title == ""


def test_parse_id():
    assert IdValidator.parse_id(" 42 ") == 42
    assert IdValidator.parse_id("-3") == -3
    with pytest.raises(InvalidRecordError):
        IdValidator.parse_id("forty-two")
    with pytest.raises(InvalidRecordError):
        IdValidator.parse_id(None)


def test_is_single_line():
    assert TextValidator.is_single_line("plain title")
    assert not TextValidator.is_single_line("a\nb")
    assert not TextValidator.is_single_line(None)


def test_live_counter_tracks_construction_and_release():
    gc.collect()
    before = total_books()

    book = SpecialBook(1, "Counted", "Someone", "Essay")
    assert total_books() == before + 1

    del book
    gc.collect()
    assert total_books() == before


def test_fields_stay_single_line_after_construction():
    book = SpecialBook(1, "Title", "Author", "Drama")

    with pytest.raises(InvalidRecordError, match="Title cannot contain line breaks"):
        book.title = "a\nb"
    with pytest.raises(InvalidRecordError, match="Author cannot contain line breaks"):
        book.author = "a\rb"
    with pytest.raises(InvalidRecordError, match="Genre cannot contain line breaks"):
        book.genre = "Sci\nFi"

    assert (book.title, book.author, book.genre) == ("Title", "Author", "Drama")

    book.title = "Renamed"
    assert book.get_title() == "Renamed"


@pytest.mark.parametrize("raw", ["1_000", "١", "+-1", "", "  ", "1.0"])
def test_parse_id_accepts_plain_decimal_only(raw):
    with pytest.raises(InvalidRecordError):
        IdValidator.parse_id(raw)


def test_is_decimal():
    assert IdValidator.is_decimal("+12")
    assert IdValidator.is_decimal(" -3 ")
    assert not IdValidator.is_decimal("1_000")
    assert not IdValidator.is_decimal("١٢")
