from __future__ import annotations

import logging
from typing import Any, Dict, List

from ibanspec.errors import UnknownCountry
from ibanspec.spec.specification import CountrySpec
from ibanspec.utils.config import deep_get

log = logging.getLogger(__name__)

# (country code, IBAN length, BBAN structure, example IBAN)
_SPECIFICATIONS = (
    # SWIFT IBAN registry
    ("AD", 24, "F04F04A12", "AD1200012030200359100100"),
    ("AE", 23, "F03F16", "AE070331234567890123456"),
    ("AL", 28, "F08A16", "AL47212110090000000235698741"),
    ("AT", 20, "F05F11", "AT611904300234573201"),
    ("AZ", 28, "U04A20", "AZ21NABZ00000000137010001944"),
    ("BA", 20, "F03F03F08F02", "BA391290079401028494"),
    ("BE", 16, "F03F07F02", "BE68539007547034"),
    ("BG", 22, "U04F04F02A08", "BG80BNBG96611020345678"),
    ("BH", 22, "U04A14", "BH67BMAG00001299123456"),
    ("BR", 29, "F08F05F10U01A01", "BR9700360305000010009795493P1"),
    ("BY", 28, "A04F04A16", "BY13NBRB3600900000002Z00AB00"),
    ("CH", 21, "F05A12", "CH9300762011623852957"),
    ("CR", 22, "F04F14", "CR72012300000171549015"),
    ("CY", 28, "F03F05A16", "CY17002001280000001200527600"),
    ("CZ", 24, "F04F06F10", "CZ6508000000192000145399"),
    ("DE", 22, "F08F10", "DE89370400440532013000"),
    ("DK", 18, "F04F09F01", "DK5000400440116243"),
    ("DO", 28, "U04F20", "DO28BAGR00000001212453611324"),
    ("EE", 20, "F02F02F11F01", "EE382200221020145685"),
    ("EG", 29, "F04F04F17", "EG800002000156789012345180002"),
    ("ES", 24, "F04F04F01F01F10", "ES9121000418450200051332"),
    ("FI", 18, "F06F07F01", "FI2112345600000785"),
    ("FO", 18, "F04F09F01", "FO6264600001631634"),
    ("FR", 27, "F05F05A11F02", "FR1420041010050500013M02606"),
    ("GB", 22, "U04F06F08", "GB29NWBK60161331926819"),
    ("GE", 22, "U02F16", "GE29NB0000000101904917"),
    ("GI", 23, "U04A15", "GI75NWBK000000007099453"),
    ("GL", 18, "F04F09F01", "GL8964710001000206"),
    ("GR", 27, "F03F04A16", "GR1601101250000000012300695"),
    ("GT", 28, "A04A20", "GT82TRAJ01020000001210029690"),
    ("HR", 21, "F07F10", "HR1210010051863000160"),
    ("HU", 28, "F03F04F01F15F01", "HU42117730161111101800000000"),
    ("IE", 22, "U04F06F08", "IE29AIBK93115212345678"),
    ("IL", 23, "F03F03F13", "IL620108000000099999999"),
    ("IS", 26, "F04F02F06F10", "IS140159260076545510730339"),
    ("IT", 27, "U01F05F05A12", "IT60X0542811101000000123456"),
    ("IQ", 23, "U04F03A12", "IQ98NBIQ850123456789012"),
    ("JO", 30, "A04F22", "JO15AAAA1234567890123456789012"),
    ("KW", 30, "U04A22", "KW81CBKU0000000000001234560101"),
    ("KZ", 20, "F03A13", "KZ86125KZT5004100100"),
    ("LB", 28, "F04A20", "LB62099900000001001901229114"),
    ("LC", 32, "U04F24", "LC07HEMM000100010012001200013015"),
    ("LI", 21, "F05A12", "LI21088100002324013AA"),
    ("LT", 20, "F05F11", "LT121000011101001000"),
    ("LU", 20, "F03A13", "LU280019400644750000"),
    ("LV", 21, "U04A13", "LV80BANK0000435195001"),
    ("MC", 27, "F05F05A11F02", "MC5811222000010123456789030"),
    ("MD", 24, "U02A18", "MD24AG000225100013104168"),
    ("ME", 22, "F03F13F02", "ME25505000012345678951"),
    ("MK", 19, "F03A10F02", "MK07250120000058984"),
    ("MR", 27, "F05F05F11F02", "MR1300020001010000123456753"),
    ("MT", 31, "U04F05A18", "MT84MALT011000012345MTLCAST001S"),
    ("MU", 30, "U04F02F02F12F03U03", "MU17BOMM0101101030300200000MUR"),
    ("NL", 18, "U04F10", "NL91ABNA0417164300"),
    ("NO", 15, "F04F06F01", "NO9386011117947"),
    ("PK", 24, "U04A16", "PK36SCBL0000001123456702"),
    ("PL", 28, "F08F16", "PL61109010140000071219812874"),
    ("PS", 29, "U04A21", "PS92PALS000000000400123456702"),
    ("PT", 25, "F04F04F11F02", "PT50000201231234567890154"),
    ("QA", 29, "U04A21", "QA30AAAA123456789012345678901"),
    ("RO", 24, "U04A16", "RO49AAAA1B31007593840000"),
    ("RS", 22, "F03F13F02", "RS35260005601001611379"),
    ("SA", 24, "F02A18", "SA0380000000608010167519"),
    ("SC", 31, "U04F04F16U03", "SC18SSCB11010000000000001497USD"),
    ("SE", 24, "F03F16F01", "SE4550000000058398257466"),
    ("SI", 19, "F05F08F02", "SI56263300012039086"),
    ("SK", 24, "F04F06F10", "SK3112000000198742637541"),
    ("SM", 27, "U01F05F05A12", "SM86U0322509800000000270100"),
    ("ST", 25, "F08F11F02", "ST68000100010051845310112"),
    ("SV", 28, "U04F20", "SV62CENR00000000000000700025"),
    ("TL", 23, "F03F14F02", "TL380080012345678910157"),
    ("TN", 24, "F02F03F13F02", "TN5910006035183598478831"),
    ("TR", 26, "F05F01A16", "TR330006100519786457841326"),
    ("UA", 29, "F25", "UA511234567890123456789012345"),
    ("VA", 22, "F18", "VA59001123000012345678"),
    ("VG", 24, "U04F16", "VG96VPVG0000012345678901"),
    ("XK", 20, "F04F10F02", "XK051212012345678906"),
    # countries using IBAN-like account numbers without being in the registry
    ("AO", 25, "F21", "AO69123456789012345678901"),
    ("BF", 27, "F23", "BF2312345678901234567890123"),
    ("BI", 16, "F12", "BI41123456789012"),
    ("BJ", 28, "F24", "BJ39123456789012345678901234"),
    ("CI", 28, "U02F22", "CI70CI1234567890123456789012"),
    ("CM", 27, "F23", "CM9012345678901234567890123"),
    ("CV", 25, "F21", "CV30123456789012345678901"),
    ("DZ", 24, "F20", "DZ8612345678901234567890"),
    ("IR", 26, "F22", "IR861234568790123456789012"),
    ("MG", 27, "F23", "MG1812345678901234567890123"),
    ("ML", 28, "U01F23", "ML15A12345678901234567890123"),
    ("MZ", 25, "F21", "MZ25123456789012345678901"),
    ("SN", 28, "U01F23", "SN52A12345678901234567890123"),
    # French territories
    ("GF", 27, "F05F05A11F02", "GF121234512345123456789AB13"),
    ("GP", 27, "F05F05A11F02", "GP791234512345123456789AB13"),
    ("MQ", 27, "F05F05A11F02", "MQ221234512345123456789AB13"),
    ("RE", 27, "F05F05A11F02", "RE131234512345123456789AB13"),
    ("PF", 27, "F05F05A11F02", "PF281234512345123456789AB13"),
    ("TF", 27, "F05F05A11F02", "TF891234512345123456789AB13"),
    ("YT", 27, "F05F05A11F02", "YT021234512345123456789AB13"),
    ("NC", 27, "F05F05A11F02", "NC551234512345123456789AB13"),
    ("BL", 27, "F05F05A11F02", "BL391234512345123456789AB13"),
    ("MF", 27, "F05F05A11F02", "MF551234512345123456789AB13"),
    ("PM", 27, "F05F05A11F02", "PM071234512345123456789AB13"),
    ("WF", 27, "F05F05A11F02", "WF621234512345123456789AB13"),
)

COUNTRIES: Dict[str, CountrySpec] = {}


def add_specification(spec: CountrySpec) -> None:
    COUNTRIES[spec.country_code] = spec


def get_specification(country_code: str) -> CountrySpec:
    try:
        return COUNTRIES[country_code]
    except KeyError:
        raise UnknownCountry(country_code) from None


def _spec_from_mapping(raw: Dict[str, Any]) -> CountrySpec:
    return CountrySpec(
        country_code=str(raw["country_code"]).strip().upper(),
        length=int(raw["length"]),
        structure=str(raw["structure"]).strip(),
        example=str(raw.get("example") or ""),
    )


def load_extra_specifications(cfg: Dict[str, Any]) -> List[CountrySpec]:
    """
    Registers specifications listed under ``registry.extra_specs`` in the config.

    Structures are compiled right away so a broken entry fails at load time
    (MalformedStructure) instead of on the first validation. Nothing is
    registered unless every entry parses and compiles.
    """
    entries = deep_get(cfg, ["registry", "extra_specs"], []) or []
    loaded: List[CountrySpec] = []
    for raw in entries:
        spec = _spec_from_mapping(raw)
        spec.matcher()
        loaded.append(spec)

    for spec in loaded:
        if not spec.is_consistent():
            log.warning(
                "Specification %s: length %s does not match structure %s",
                spec.country_code,
                spec.length,
                spec.structure,
            )
        if spec.country_code in COUNTRIES:
            log.info("Overriding built-in specification %s", spec.country_code)
        add_specification(spec)
    return loaded


for _row in _SPECIFICATIONS:
    add_specification(CountrySpec(*_row))
del _row
