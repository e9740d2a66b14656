from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ibanspec.utils.config import default_config_path

APP_NAME = "ibanspec"


def default_log_dir() -> Path:
    env = os.environ.get("IBANSPEC_LOG_DIR", "").strip()
    if env:
        return Path(env)
    base = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(base) / APP_NAME / "LOG"


@dataclass(frozen=True)
class AppPaths:
    config_path: Path
    log_dir: Path


def ensure_dirs(*paths: Path) -> None:
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def resolve_app_paths(config_path: str | None, log_dir: str | None) -> AppPaths:
    cfg = Path(config_path) if config_path else default_config_path()
    ld = Path(log_dir) if log_dir else default_log_dir()
    ensure_dirs(ld)
    return AppPaths(config_path=cfg, log_dir=ld)
