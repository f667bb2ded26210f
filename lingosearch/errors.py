# lingosearch/errors.py
"""Exceptions raised while building multilingual search queries."""

from typing import Any


class LingoSearchError(Exception):
    """Base class for lingosearch errors."""


class SchemaUnavailable(LingoSearchError):
    """Index mapping has no usable `translations` nested field."""


class UnsupportedValueShape(LingoSearchError):
    """Search value is not text, an integer, a list of integers or a date."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Unsupported value for field {field!r}: {value!r} ({type(value).__name__})"
        )


class CapabilityNotFound(LingoSearchError):
    """Policy defines no restriction for the requested action."""

    def __init__(self, policy: object, action: str) -> None:
        self.policy = policy
        self.action = action
        super().__init__(f"{type(policy).__name__} has no restriction for action {action!r}")


class LocaleFieldMismatch(LingoSearchError):
    """Locale-scoped autocomplete requested on fields that are not translated."""

    def __init__(self, fields: tuple[str, ...], locale: str) -> None:
        self.fields = fields
        self.locale = locale
        super().__init__(
            f"Cannot autocomplete with locale {locale!r} on non-translated fields: "
            f"{', '.join(fields)}"
        )
