"""
Utilities for handling directories and the identifiers used as path components.
"""

from pathlib import Path

from pathvalidate import ValidationError, validate_filename

from gitbak.exceptions import InvalidReferenceError

# Rejected on every platform so a manifest stays portable between machines.
_SEPARATORS = ("/", "\\")


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def validate_path_component(value: str, label: str) -> str:
    """
    Ensures an identifier names exactly one file or directory inside its parent.

    Identifiers are otherwise opaque: names that only some platforms reserve
    (``con``, ``aux``, ``a:b`` ...) are accepted unless the running platform
    cannot store them.
    """
    if value in (".", "..") or any(sep in value for sep in _SEPARATORS):
        raise InvalidReferenceError(f"Invalid {label} '{value}': not a single name.")
    if value != value.strip():
        raise InvalidReferenceError(
            f"Invalid {label} '{value}': surrounding whitespace is not allowed."
        )
    try:
        validate_filename(value, platform="auto")
    except ValidationError as e:
        raise InvalidReferenceError(f"Invalid {label} '{value}': {e}") from e
    return value
