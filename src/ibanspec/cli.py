from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ibanspec import from_bban, is_valid, is_valid_bban, print_format, to_bban
from ibanspec.errors import InvalidBBAN, MalformedStructure, UnknownCountry
from ibanspec.formatting import electronic_format
from ibanspec.registry import COUNTRIES, get_specification, load_extra_specifications
from ibanspec.utils.config import Settings, default_config_path, load_yaml, settings_from_config
from ibanspec.utils.forensic_context import forensic_scope, new_correlation_id
from ibanspec.utils.logging_setup import log_event, setup_logging
from ibanspec.utils.paths import resolve_app_paths

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNKNOWN_COUNTRY = 2
EXIT_CONFIG_ERROR = 3


def _cmd_validate(args: argparse.Namespace, settings: Settings, log) -> int:
    rc = EXIT_OK
    for raw in args.iban:
        iban = electronic_format(raw)
        with forensic_scope(country_code=iban[:2]):
            ok = is_valid(iban)
            print(f"{raw}\t{'OK' if ok else 'INVALID'}")
            if not ok:
                rc = EXIT_INVALID
            log_event(log, "iban.validate", "IBAN validated", iban=iban, valid=ok)
    return rc


def _explain(iban: str) -> Optional[str]:
    """Human readable reason why the BBAN part does not match, if it doesn't."""
    spec = get_specification(iban[:2])
    compiled = spec.matcher()
    idx = compiled.mismatch(iban[4:])
    if idx is None:
        return None
    if idx < 0:
        return f"expected {spec.length} characters, got {len(iban)}"
    block = compiled.blocks[idx]
    return f"block {idx + 1} is not {block.width} x class {block.letter}"


def _cmd_to_bban(args: argparse.Namespace, settings: Settings, log) -> int:
    separator = settings.bban_separator if args.separator is None else args.separator
    iban = electronic_format(args.iban)
    with forensic_scope(country_code=iban[:2]):
        bban = to_bban(iban, separator)
        if bban is None:
            reason = _explain(iban)
            print(f"No BBAN match: {reason}", file=sys.stderr)
            log_event(log, "iban.to_bban", "BBAN extraction failed", iban=iban, reason=reason)
            return EXIT_INVALID
        print(bban)
        log_event(log, "iban.to_bban", "BBAN extracted", iban=iban, bban=bban)
    return EXIT_OK


def _cmd_from_bban(args: argparse.Namespace, settings: Settings, log) -> int:
    country_code = args.country.upper()
    with forensic_scope(country_code=country_code):
        try:
            iban = from_bban(country_code, args.bban)
        except InvalidBBAN as exc:
            print(str(exc), file=sys.stderr)
            log_event(log, "iban.from_bban", "BBAN rejected", bban=exc.bban)
            return EXIT_INVALID
        print(print_format(iban, settings.print_separator, settings.print_group_size) if args.print else iban)
        log_event(log, "iban.from_bban", "IBAN built", iban=iban)
    return EXIT_OK


def _cmd_validate_bban(args: argparse.Namespace, settings: Settings, log) -> int:
    country_code = args.country.upper()
    with forensic_scope(country_code=country_code):
        get_specification(country_code)
        ok = is_valid_bban(country_code, args.bban)
        print("OK" if ok else "INVALID")
        log_event(log, "iban.validate_bban", "BBAN validated", country_code=country_code, valid=ok)
    return EXIT_OK if ok else EXIT_INVALID


def _cmd_format(args: argparse.Namespace, settings: Settings, log) -> int:
    separator = settings.print_separator if args.separator is None else args.separator
    group_size = settings.print_group_size if args.group_size is None else args.group_size
    print(print_format(args.iban, separator, group_size))
    return EXIT_OK


def _cmd_countries(args: argparse.Namespace, settings: Settings, log) -> int:
    for code in sorted(COUNTRIES):
        spec = COUNTRIES[code]
        print(f"{code}\t{spec.length}\t{spec.structure}\t{spec.example}")
    return EXIT_OK


def _group_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid group size: {value!r}") from None
    if size < 1:
        raise argparse.ArgumentTypeError(f"group size must be at least 1, got {size}")
    return size


_COMMANDS: Dict[str, Callable[[argparse.Namespace, Settings, object], int]] = {
    "validate": _cmd_validate,
    "to-bban": _cmd_to_bban,
    "from-bban": _cmd_from_bban,
    "validate-bban": _cmd_validate_bban,
    "format": _cmd_format,
    "countries": _cmd_countries,
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ibanspec", description="IBAN validation and BBAN conversion")
    ap.add_argument("--config", default=None, help="YAML config (default: ./ibanspec.yaml or $IBANSPEC_CONFIG)")
    ap.add_argument("--log-dir", default=None)
    ap.add_argument("-v", "--verbose", action="store_true", help="log to console as well")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_validate = sub.add_parser("validate", help="check one or more IBANs")
    ap_validate.add_argument("iban", nargs="+")

    ap_to = sub.add_parser("to-bban", help="extract the BBAN of an IBAN")
    ap_to.add_argument("iban")
    ap_to.add_argument("--separator", default=None)

    ap_from = sub.add_parser("from-bban", help="build an IBAN from country code and BBAN")
    ap_from.add_argument("country")
    ap_from.add_argument("bban")
    ap_from.add_argument("--print", action="store_true", help="output in print format")

    ap_vb = sub.add_parser("validate-bban", help="check a BBAN against the country structure")
    ap_vb.add_argument("country")
    ap_vb.add_argument("bban")

    ap_fmt = sub.add_parser("format", help="print format of an IBAN")
    ap_fmt.add_argument("iban")
    ap_fmt.add_argument("--separator", default=None)
    ap_fmt.add_argument("--group-size", type=_group_size, default=None)

    sub.add_parser("countries", help="list registered country specifications")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_path = Path(args.config) if args.config else default_config_path()
    cfg = load_yaml(config_path)
    settings = settings_from_config(cfg)
    paths = resolve_app_paths(str(config_path), args.log_dir or settings.log_dir)
    log = setup_logging(paths.log_dir, name="ibanspec.cli", console=args.verbose or settings.log_console)

    with forensic_scope(correlation_id=new_correlation_id(), command=args.command):
        try:
            extra = load_extra_specifications(cfg)
        except (MalformedStructure, KeyError, TypeError, ValueError) as exc:
            print(f"Invalid registry config in {paths.config_path}: {exc}", file=sys.stderr)
            log.exception("Loading extra specifications failed")
            return EXIT_CONFIG_ERROR
        if extra:
            log.info("Loaded %d extra specifications from %s", len(extra), paths.config_path)

        try:
            return _COMMANDS[args.command](args, settings, log)
        except UnknownCountry as exc:
            print(str(exc), file=sys.stderr)
            log_event(log, "iban.unknown_country", "Unknown country", country_code=exc.country_code)
            return EXIT_UNKNOWN_COUNTRY
