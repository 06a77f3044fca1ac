from typing import Any, Optional

from book_catalog.exceptions import InvalidRecordError

LINE_BREAKS = ("\n", "\r")


class IdValidator:
    """Book ids are plain integers, unique only within a catalog."""

    @staticmethod
    def parse_id(raw: Optional[str]) -> int:
        if raw is None:
            raise InvalidRecordError("Book ID cannot be empty.")
        if not IdValidator.is_decimal(raw):
            raise InvalidRecordError(f"Book ID must be an integer, got {raw!r}.")
        return int(raw.strip())

    @staticmethod
    def is_decimal(raw: Optional[str]) -> bool:
        """Plain ASCII digits with an optional sign; no underscores or other scripts."""
        if not isinstance(raw, str):
            return False
        s = raw.strip()
        digits = s[1:] if s[:1] in ("+", "-") else s
        return digits.isascii() and digits.isdigit()

    @staticmethod
    def validate_id(value: Any) -> int:
        # bool is an int subclass but never a meaningful id
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidRecordError(f"Book ID must be an integer, got {value!r}.")
        return value


class TextValidator:
    """Title, author and genre are stored one per line in catalog files."""

    @staticmethod
    def is_single_line(text: Optional[str]) -> bool:
        if not isinstance(text, str):
            return False
        return not any(ch in text for ch in LINE_BREAKS)

    @staticmethod
    def validate_field(name: str, text: Optional[str]) -> str:
        if not isinstance(text, str):
            raise InvalidRecordError(f"{name} must be text, got {type(text).__name__}.")
        if not TextValidator.is_single_line(text):
            raise InvalidRecordError(f"{name} cannot contain line breaks.")
        return text
