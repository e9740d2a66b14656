from __future__ import annotations

import logging

import pytest

from ibanspec import registry
from ibanspec.registry import COUNTRIES, add_specification, get_specification, load_extra_specifications
from ibanspec.errors import MalformedStructure, UnknownCountry
from ibanspec.spec.specification import CountrySpec


@pytest.fixture
def restore_registry():
    saved = dict(COUNTRIES)
    yield
    COUNTRIES.clear()
    COUNTRIES.update(saved)


def _flip_last(iban: str) -> str:
    last = iban[-1]
    if last.isdigit():
        repl = str((int(last) + 1) % 10)
    else:
        repl = chr((ord(last.upper()) - ord("A") + 1) % 26 + ord("A"))
    return iban[:-1] + repl


def test_registry_has_all_country_tables() -> None:
    assert len(COUNTRIES) >= 100
    for code in ("BE", "DE", "NL", "LC", "CI", "WF"):
        assert code in COUNTRIES


@pytest.mark.parametrize("code", sorted(COUNTRIES))
def test_example_is_valid(code: str) -> None:
    spec = COUNTRIES[code]
    assert spec.country_code == code
    assert spec.is_consistent()
    assert spec.is_valid(spec.example)


@pytest.mark.parametrize("code", sorted(COUNTRIES))
def test_example_with_changed_last_character_is_invalid(code: str) -> None:
    assert not COUNTRIES[code].is_valid(_flip_last(COUNTRIES[code].example))


@pytest.mark.parametrize("code", sorted(COUNTRIES))
def test_example_round_trip(code: str) -> None:
    spec = COUNTRIES[code]
    bban = spec.to_bban(spec.example, "")
    assert spec.from_bban(bban) == spec.example


@pytest.mark.parametrize("code", sorted(COUNTRIES))
def test_length_off_by_one_is_rejected(code: str) -> None:
    spec = COUNTRIES[code]
    assert not spec.is_valid(spec.example[:-1])
    assert not spec.is_valid(spec.example + "0")


def test_get_specification() -> None:
    assert get_specification("BE").structure == "F03F07F02"
    with pytest.raises(UnknownCountry) as exc_info:
        get_specification("ZZ")
    assert exc_info.value.country_code == "ZZ"


def test_add_specification_overrides(restore_registry) -> None:
    spec = CountrySpec("BE", 16, "F12", "BE68539007547034")
    add_specification(spec)
    assert get_specification("BE") is spec
    assert spec.to_bban("BE68539007547034") == "539007547034"


def test_load_extra_specifications(restore_registry, caplog) -> None:
    caplog.set_level(logging.INFO, logger=registry.__name__)
    cfg = {
        "registry": {
            "extra_specs": [
                {"country_code": "zz", "length": 10, "structure": "F06", "example": "ZZ00123456"},
                {"country_code": "BE", "length": 17, "structure": "F03F07F02"},
            ]
        }
    }
    loaded = load_extra_specifications(cfg)
    assert [s.country_code for s in loaded] == ["ZZ", "BE"]
    assert get_specification("ZZ").is_valid_bban("123456")
    assert get_specification("BE").example == ""
    assert "does not match structure" in caplog.text
    assert "Overriding built-in specification BE" in caplog.text


def test_load_extra_specifications_fails_fast_on_bad_structure(restore_registry) -> None:
    cfg = {"registry": {"extra_specs": [{"country_code": "ZZ", "length": 8, "structure": "X04"}]}}
    with pytest.raises(MalformedStructure):
        load_extra_specifications(cfg)
    assert "ZZ" not in COUNTRIES


def test_load_extra_specifications_without_section() -> None:
    assert load_extra_specifications({}) == []
    assert load_extra_specifications({"registry": {"extra_specs": None}}) == []


@pytest.mark.parametrize(
    "bad_entry",
    [
        {"country_code": "ZZ", "length": 8, "structure": "X04"},
        {"country_code": "ZZ", "length": "eight", "structure": "F04"},
        {"country_code": "ZZ", "structure": "F04"},
    ],
)
def test_load_extra_specifications_is_all_or_nothing(restore_registry, bad_entry) -> None:
    before = COUNTRIES["BE"]
    cfg = {
        "registry": {
            "extra_specs": [
                {"country_code": "BE", "length": 16, "structure": "F12"},
                {"country_code": "YY", "length": 10, "structure": "F06"},
                bad_entry,
            ]
        }
    }
    with pytest.raises((MalformedStructure, KeyError, ValueError)):
        load_extra_specifications(cfg)
    assert COUNTRIES["BE"] is before
    assert "YY" not in COUNTRIES
    assert "ZZ" not in COUNTRIES
