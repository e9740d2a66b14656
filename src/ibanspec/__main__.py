"""Spouštěcí bod pro `python -m ibanspec`."""

from __future__ import annotations

from ibanspec.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
