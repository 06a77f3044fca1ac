import os
import pytest

from book_catalog.config import settings
from book_catalog.library import Library


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # Listings stay in plain mode regardless of the caller's shell
    monkeypatch.delenv("LIB_CLI_OUTPUT", raising=False)


@pytest.fixture
def sink():
    """Collects every line a Library writes."""
    return []


@pytest.fixture
def lib(sink):
    return Library(max_books=100, output=sink.append)


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    # Unique catalog file per test
    path = str(tmp_path / "books.txt")
    monkeypatch.setattr(settings, "data_file", path)
    yield path
    if os.path.exists(path):
        os.remove(path)
