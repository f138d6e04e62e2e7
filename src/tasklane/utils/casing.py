"""Key case conversion helpers.

Convert ``snake_case`` identifiers to ``camelCase`` and back, and rename the
top-level keys of a mapping accordingly. Only ASCII letters are treated as
case-bearing; everything else passes through unchanged.
"""

import re
from collections.abc import Mapping
from typing import TypeVar

V = TypeVar("V")

_UNDERSCORE_LOWER = re.compile(r"_([a-z])")
_UPPER = re.compile(r"([A-Z])")


def to_camel_case(text: str = "") -> str:
    """Convert ``snake_case`` to ``camelCase``.

    Every underscore followed by a lowercase letter is replaced by that letter
    in upper case. Other underscores are kept.

    Example:
        ```py
        >>> to_camel_case("exposure_time_s")
        'exposureTimeS'
        ```
    """
    return _UNDERSCORE_LOWER.sub(lambda m: m.group(1).upper(), text)


def to_snake_case(text: str = "") -> str:
    """Convert ``camelCase`` to ``snake_case``.

    Every uppercase letter is prefixed with an underscore, then the whole
    string is lower-cased.

    Example:
        ```py
        >>> to_snake_case("returnCode")
        'return_code'
        ```
    """
    return _UPPER.sub(r"_\1", text).lower()


def convert_keys_to_camel_case(obj: Mapping[str, V]) -> dict[str, V]:
    """Return a new dict with top-level keys converted to ``camelCase``."""
    return {to_camel_case(key): value for key, value in obj.items()}


def convert_keys_to_snake_case(obj: Mapping[str, V]) -> dict[str, V]:
    """Return a new dict with top-level keys converted to ``snake_case``.

    Values, including nested mappings, are not touched.
    """
    return {to_snake_case(key): value for key, value in obj.items()}


__all__ = [
    "convert_keys_to_camel_case",
    "convert_keys_to_snake_case",
    "to_camel_case",
    "to_snake_case",
]
