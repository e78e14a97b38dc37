"""Validators for user input and a small form validation helper."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, TypeVar
from urllib.parse import urlsplit

T = TypeVar("T")

Validator = Callable[[str, str], None]

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_HEX_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}
_INVALID_FILENAME_CHARS = ("/", "\\", ":", "*", "?", '"', "<", ">", "|")


class ValidationError(ValueError):
    """Raised when a value fails validation; the message is user-facing."""


def validate_required(value: str, field_name: str) -> None:
    """Fail if ``value`` is empty."""
    if not value:
        raise ValidationError(f"{field_name} is required")


def validate_length(
    value: str, min_length: int, max_length: Optional[int], field_name: str
) -> None:
    """Fail if ``value`` is shorter than ``min_length`` or longer than ``max_length``."""
    if len(value) < min_length:
        raise ValidationError(
            f"{field_name} must be at least {min_length} characters"
        )
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field_name} cannot exceed {max_length} characters")


def validate_path_exists(path: str, field_name: str) -> None:
    """Fail if ``path`` is empty or does not exist."""
    if not path:
        raise ValidationError(f"{field_name} cannot be empty")
    if not Path(path).exists():
        raise ValidationError(f"{field_name} does not exist: {path}")


def validate_directory_exists(path: str, field_name: str) -> None:
    """Fail unless ``path`` is an existing directory."""
    validate_path_exists(path, field_name)
    if not Path(path).is_dir():
        raise ValidationError(f"{field_name} is not a directory: {path}")


def validate_file_exists(path: str, field_name: str) -> None:
    """Fail unless ``path`` is an existing regular file."""
    validate_path_exists(path, field_name)
    if not Path(path).is_file():
        raise ValidationError(f"{field_name} is not a file: {path}")


def validate_number_range(
    value: T, min_value: Optional[T], max_value: Optional[T], field_name: str
) -> None:
    """Fail if ``value`` lies outside the optional inclusive bounds."""
    if min_value is not None and value < min_value:  # type: ignore[operator]
        raise ValidationError(f"{field_name} must be at least {min_value}")
    if max_value is not None and value > max_value:  # type: ignore[operator]
        raise ValidationError(f"{field_name} cannot exceed {max_value}")


def _is_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    if any(ch.isspace() for ch in url):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return False
    return True


def validate_url(url: str, field_name: str, require_https: bool = False) -> None:
    """Fail if ``url`` is not an absolute URL, or not HTTPS when required."""
    if not url:
        raise ValidationError(f"{field_name} cannot be empty")
    if not _is_url(url):
        raise ValidationError(f"{field_name} is not a valid URL: {url}")
    if require_https and urlsplit(url).scheme.lower() != "https":
        raise ValidationError(f"{field_name} must use HTTPS protocol")


def validate_email(email: str, field_name: str) -> None:
    """Fail if ``email`` is empty or not shaped like an e-mail address."""
    if not email:
        raise ValidationError(f"{field_name} cannot be empty")
    if not _EMAIL_RE.fullmatch(email):
        raise ValidationError(f"{field_name} is not a valid email address: {email}")


def is_valid_hex_color(color: str) -> bool:
    """True for a ``#RRGGBB`` colour code."""
    return _HEX_COLOR_RE.fullmatch(color) is not None


def validate_hex_color(color: str, field_name: str) -> None:
    """Fail unless ``color`` is a ``#RRGGBB`` colour code."""
    if not color:
        raise ValidationError(f"{field_name} cannot be empty")
    if not is_valid_hex_color(color):
        raise ValidationError(
            f"{field_name} must be a valid hex color (e.g., #FF0000)"
        )


def normalize_hex_color(color: str) -> str:
    """Return ``color`` upper-cased with a leading ``#``."""
    if not color:
        raise ValidationError("Color cannot be empty")
    normalized = color if color.startswith("#") else f"#{color}"
    if not is_valid_hex_color(normalized):
        raise ValidationError(f"Invalid hex color: {color}")
    return normalized.upper()


def validate_filename(filename: str, field_name: str) -> None:
    """Fail if ``filename`` is empty or contains path or reserved characters."""
    if not filename:
        raise ValidationError(f"{field_name} cannot be empty")
    for ch in _INVALID_FILENAME_CHARS:
        if ch in filename:
            raise ValidationError(f"{field_name} contains invalid character: '{ch}'")


class FormValidator:
    """Collects field values and the first validation error for each field."""

    def __init__(self) -> None:
        self._fields: Dict[str, str] = {}
        self._errors: Dict[str, str] = {}

    def add_field(self, field_name: str, value: str) -> None:
        """Register a field value to be validated."""
        self._fields[field_name] = value

    def validate(self, field_name: str, validators: Iterable[Validator]) -> bool:
        """Run validators in order; record the first failure and return False."""
        value = self._fields.get(field_name)
        if value is None:
            self._errors[field_name] = "Field not found"
            return False
        for validator in validators:
            try:
                validator(value, field_name)
            except ValidationError as exc:
                self._errors[field_name] = str(exc)
                return False
        return True

    def is_valid(self) -> bool:
        """True if no errors have been recorded."""
        return not self._errors

    def errors(self) -> Dict[str, str]:
        """A copy of all recorded errors, keyed by field."""
        return dict(self._errors)

    def error_message(self, field_name: str) -> Optional[str]:
        """The recorded error for ``field_name``, if any."""
        return self._errors.get(field_name)

    def error_summary(self) -> str:
        """A human-readable list of all errors."""
        if not self._errors:
            return "No validation errors"
        lines = ["Validation errors:"]
        lines.extend(f"- {name}: {error}" for name, error in self._errors.items())
        return "\n".join(lines).strip()

    def clear(self) -> None:
        """Forget all fields and errors."""
        self._fields.clear()
        self._errors.clear()