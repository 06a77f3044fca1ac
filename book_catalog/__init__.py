"""Book Catalog - Core Application Package

This package contains the catalog application modules:
- Record model (book.py)
- Catalog management and flat-file persistence (library.py)
- CLI interface and interactive menu (main.py)
- Output formatting (ui_helpers.py)
- Field validation (validators.py)
- Settings (config.py)
"""

__version__ = "1.0.0"
