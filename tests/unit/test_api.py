from __future__ import annotations

import pytest

import ibanspec
from ibanspec import (
    InvalidBBAN,
    UnknownCountry,
    countries,
    from_bban,
    is_valid,
    is_valid_bban,
    to_bban,
)


@pytest.mark.parametrize("value", [1, [], {}, True, None])
def test_is_valid_non_string(value) -> None:
    assert is_valid(value) is False


def test_is_valid_unknown_country() -> None:
    assert not is_valid("ZZ68539007547034")


@pytest.mark.parametrize(
    "iban",
    [
        "BE68539007547034",
        "NL86INGB0002445588",
        "MD75EX0900002374642125EU",
        "LC55HEMM000100010012001200023015",
        "CI93CI0080111301134291200589",
        "EG800002000156789012345180002",
        "be68 5390 0754 7034",
    ],
)
def test_is_valid_real_ibans(iban: str) -> None:
    assert is_valid(iban)


def test_is_valid_wrong_check_digit() -> None:
    assert not is_valid("BE68539007547035")


def test_to_bban() -> None:
    assert to_bban("BE68 5390 0754 7034", "-") == "539-0075470-34"
    assert to_bban("BE68 5390 0754 7034") == "539 0075470 34"


def test_to_bban_unknown_country() -> None:
    with pytest.raises(UnknownCountry):
        to_bban("ZZ68539007547034")


def test_from_bban() -> None:
    assert from_bban("BE", "539007547034") == "BE68539007547034"
    assert from_bban("BE", "539-0075470-34") == "BE68539007547034"


def test_from_bban_invalid() -> None:
    with pytest.raises(InvalidBBAN, match="Invalid BBAN"):
        from_bban("BE", "1539-0075470-34")


def test_from_bban_unknown_country() -> None:
    with pytest.raises(UnknownCountry, match="No country with code"):
        from_bban("ZZ", "539007547034")


@pytest.mark.parametrize("value", [1, {}, [], True])
def test_is_valid_bban_non_string(value) -> None:
    assert is_valid_bban("BE", value) is False


def test_is_valid_bban() -> None:
    assert is_valid_bban("BE", "539007547034")
    assert is_valid_bban("NL", "INGB0002445588")
    assert is_valid_bban("BE", "539-0075470-34")
    assert not is_valid_bban("BE", "1539-0075470-34")
    assert not is_valid_bban("BE", "ABC-0075470-34")
    assert not is_valid_bban("ZZ", "539007547034")


def test_round_trip_via_public_api() -> None:
    for spec in countries.values():
        assert from_bban(spec.country_code, to_bban(spec.example)) == spec.example


def test_countries_alias() -> None:
    assert ibanspec.countries is ibanspec.COUNTRIES
    assert countries["BE"].example == "BE68539007547034"
