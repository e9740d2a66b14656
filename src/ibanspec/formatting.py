from __future__ import annotations

import re

_NON_ALPHANUM_RE = re.compile(r"[^A-Za-z0-9]+")


def electronic_format(value: str) -> str:
    """Remove everything except letters and digits, upper-case the rest."""
    return _NON_ALPHANUM_RE.sub("", value or "").upper()


def print_format(iban: str, separator: str = " ", group_size: int = 4) -> str:
    """'BE68539007547034' -> 'BE68 5390 0754 7034'"""
    if group_size < 1:
        raise ValueError(f"group_size must be positive, got {group_size}")
    compact = electronic_format(iban)
    return separator.join(compact[i:i + group_size] for i in range(0, len(compact), group_size))
