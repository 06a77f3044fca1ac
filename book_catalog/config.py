import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Application settings
    app_name: str = os.getenv("APP_NAME", "Book Catalog")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")

    # Catalog settings
    max_books: int = int(os.getenv("LIBRARY_MAX_BOOKS", "100"))
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "books.txt")

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()


settings = Settings()
