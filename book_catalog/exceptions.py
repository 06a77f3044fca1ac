class CatalogError(Exception):
    """Base exception for catalog errors."""


class CapacityExceededError(CatalogError):
    """The catalog already holds its maximum number of books."""


class DuplicateBookError(CatalogError, ValueError):
    """Trying to add a book whose id already exists."""


class BookNotFoundError(CatalogError, LookupError):
    """No book with the requested title exists in the catalog."""


class StorageUnavailableError(CatalogError):
    """The save/load target could not be opened."""


class CorruptDataError(CatalogError, ValueError):
    """A catalog file does not follow the line-oriented format."""


class InvalidRecordError(CatalogError, ValueError):
    """A book field is missing or cannot be stored."""
