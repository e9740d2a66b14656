from __future__ import annotations


class IbanError(ValueError):
    """Base class for all ibanspec errors."""


class MalformedStructure(IbanError):
    """BBAN structure string of a country specification cannot be compiled."""

    def __init__(self, structure: str, reason: str):
        super().__init__(f"Malformed structure {structure!r}: {reason}")
        self.structure = structure
        self.reason = reason


class InvalidBBAN(IbanError):
    def __init__(self, country_code: str, bban: str):
        super().__init__(f"Invalid BBAN for {country_code}: {bban!r}")
        self.country_code = country_code
        self.bban = bban


class UnknownCountry(IbanError):
    def __init__(self, country_code: str):
        super().__init__(f"No country with code {country_code!r}")
        self.country_code = country_code
