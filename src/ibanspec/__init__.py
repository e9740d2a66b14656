"""Validation, parsing and formatting of IBANs against per-country BBAN structures."""

from __future__ import annotations

from typing import Any, Optional

from .errors import IbanError, InvalidBBAN, MalformedStructure, UnknownCountry
from .formatting import electronic_format, print_format
from .registry import COUNTRIES, add_specification, get_specification
from .spec import CountrySpec

countries = COUNTRIES

__version__ = "1.0.0"


def is_valid(iban: Any) -> bool:
    """True for a well-formed IBAN of a known country with a correct checksum."""
    if not isinstance(iban, str):
        return False
    iban = electronic_format(iban)
    spec = COUNTRIES.get(iban[:2])
    return spec is not None and spec.is_valid(iban)


def to_bban(iban: str, separator: str = " ") -> Optional[str]:
    """
    BBAN of the IBAN with its structure blocks joined by separator.

    Raises UnknownCountry for an unregistered country code; returns None when
    the BBAN part does not match the country structure.
    """
    iban = electronic_format(iban)
    return get_specification(iban[:2]).to_bban(iban, separator)


def from_bban(country_code: str, bban: str) -> str:
    """Builds the IBAN for a BBAN; raises UnknownCountry or InvalidBBAN."""
    return get_specification(country_code).from_bban(electronic_format(bban))


def is_valid_bban(country_code: str, bban: Any) -> bool:
    if not isinstance(bban, str):
        return False
    spec = COUNTRIES.get(country_code)
    return spec is not None and spec.is_valid_bban(electronic_format(bban))


__all__ = [
    "COUNTRIES",
    "CountrySpec",
    "IbanError",
    "InvalidBBAN",
    "MalformedStructure",
    "UnknownCountry",
    "add_specification",
    "countries",
    "electronic_format",
    "from_bban",
    "get_specification",
    "is_valid",
    "is_valid_bban",
    "print_format",
    "to_bban",
]
