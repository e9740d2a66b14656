from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_NAME = "ibanspec.yaml"
CONFIG_ENV_VAR = "IBANSPEC_CONFIG"

DEFAULT_SEPARATOR = " "
DEFAULT_GROUP_SIZE = 4


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env:
        return Path(env)
    return Path.cwd() / DEFAULT_CONFIG_NAME


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


@dataclass(frozen=True)
class Settings:
    print_separator: str = DEFAULT_SEPARATOR
    print_group_size: int = DEFAULT_GROUP_SIZE
    bban_separator: str = DEFAULT_SEPARATOR
    log_dir: Optional[str] = None
    log_console: bool = False


def _group_size(value: Any) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_GROUP_SIZE
    return size if size > 0 else DEFAULT_GROUP_SIZE


def settings_from_config(cfg: Dict[str, Any]) -> Settings:
    """
    Config layout (all keys optional):

        format:
          separator: " "
          group_size: 4
        bban:
          separator: " "
        logging:
          dir: ./LOG
          console: false
        registry:
          extra_specs: [...]
    """
    print_sep = deep_get(cfg, ["format", "separator"], DEFAULT_SEPARATOR)
    bban_sep = deep_get(cfg, ["bban", "separator"], DEFAULT_SEPARATOR)
    log_dir = deep_get(cfg, ["logging", "dir"])
    return Settings(
        print_separator=DEFAULT_SEPARATOR if print_sep is None else str(print_sep),
        print_group_size=_group_size(deep_get(cfg, ["format", "group_size"], DEFAULT_GROUP_SIZE)),
        bban_separator=DEFAULT_SEPARATOR if bban_sep is None else str(bban_sep),
        log_dir=str(log_dir) if log_dir else None,
        log_console=bool(deep_get(cfg, ["logging", "console"], False)),
    )
