"""Helpers for working with optional values."""

from typing import Optional, TypeVar

T = TypeVar("T")


def first_present(*values: Optional[T]) -> Optional[T]:
    """Return the first value that is not None.

    Values are checked in the given order, so earlier arguments take
    priority over later ones. Empty strings count as present.

    Example:
        >>> first_present(None, "xmlns-value", "other")
        'xmlns-value'
        >>> first_present(None, None) is None
        True
    """
    for value in values:
        if value is not None:
            return value
    return None
