from __future__ import annotations

import json
import logging
import os
import socket
import threading
import traceback
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from ibanspec.utils.forensic_context import get_forensic_fields

_TRUE_VALUES = {"1", "true", "TRUE", "True", "yes", "YES"}
_FALSE_VALUES = {"0", "false", "False", "FALSE", "no", "NO"}


class LineCappedFileHandler(logging.Handler):
    """
    Appends to one log file and, once it grows past max_lines plus a small
    slack, rewrites it with only the newest max_lines lines.
    """

    def __init__(self, filename: Path, *, max_lines: int = 5000, encoding: str = "utf-8"):
        super().__init__()
        self._filename = Path(filename)
        self._encoding = encoding
        self.max_lines = int(max_lines)
        self._trim_chunk = max(10, self.max_lines // 100)
        self._mtx = threading.RLock()
        self._filename.parent.mkdir(parents=True, exist_ok=True)
        self._line_count = self._count_lines()
        self._stream = open(self._filename, "a", encoding=self._encoding, errors="backslashreplace")

    def _count_lines(self) -> int:
        if not self._filename.exists():
            return 0
        with open(self._filename, "r", encoding=self._encoding, errors="ignore") as rf:
            return sum(1 for _ in rf)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            if not msg.endswith("\n"):
                msg += "\n"
            with self._mtx:
                self._stream.write(msg)
                self._stream.flush()
                self._line_count += msg.count("\n")
                if self._line_count >= self.max_lines + self._trim_chunk:
                    self._trim()
        except Exception:
            self.handleError(record)

    def _trim(self) -> None:
        self._stream.close()
        with open(self._filename, "r", encoding=self._encoding, errors="ignore") as rf:
            tail = deque(rf, maxlen=self.max_lines)
        with open(self._filename, "w", encoding=self._encoding, errors="backslashreplace") as wf:
            wf.writelines(tail)
        self._line_count = len(tail)
        self._stream = open(self._filename, "a", encoding=self._encoding, errors="backslashreplace")

    def close(self) -> None:
        with self._mtx:
            if not self._stream.closed:
                self._stream.close()
        super().close()


class ForensicContextFilter(logging.Filter):
    """Doplní do každého záznamu hostname, uživatele a forenzní contextvars."""

    def __init__(self) -> None:
        super().__init__()
        self._hostname = socket.gethostname()
        self._user = os.environ.get("USERNAME") or os.environ.get("USER") or "unknown"

    def filter(self, record: logging.LogRecord) -> bool:
        record.hostname = self._hostname
        record.user = self._user
        record.forensic = get_forensic_fields()
        return True


class JsonLineFormatter(logging.Formatter):
    """Serializuje log record do JSONL pro strojové čtení."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "funcName": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "hostname": getattr(record, "hostname", None),
            "user": getattr(record, "user", None),
            "event_name": getattr(record, "event_name", None),
            "forensic": getattr(record, "forensic", None) or get_forensic_fields(),
        }

        extra_obj = getattr(record, "extra_payload", None)
        if extra_obj:
            payload["extra"] = extra_obj

        if record.exc_info:
            payload["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, ensure_ascii=False, default=str)


_ROOT_CONFIGURED = False
_ROOT_CONFIG_LOCK = threading.Lock()


def _compute_max_lines() -> int:
    env_max = os.environ.get("IBANSPEC_LOG_MAX_LINES", "").strip()
    if env_max:
        try:
            val = int(env_max)
        except ValueError:
            val = 0
        if val > 0:
            return val
    return 5000


def _detail_enabled() -> bool:
    return str(os.environ.get("IBANSPEC_LOG_DETAIL", "1")).strip() not in _FALSE_VALUES


def setup_logging(log_dir: Path, name: str = "ibanspec", console: bool = False) -> logging.Logger:
    """
    Configures the root logger once:
      <log_dir>/ibanspec.log              human readable
      <log_dir>/ibanspec_forensic.jsonl   one JSON object per record
    both capped to the newest IBANSPEC_LOG_MAX_LINES lines.

    Console output is off unless console=True or IBANSPEC_LOG_CONSOLE=1.
    """
    global _ROOT_CONFIGURED

    log_dir.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    max_lines = _compute_max_lines()

    with _ROOT_CONFIG_LOCK:
        if not _ROOT_CONFIGURED:
            root = logging.getLogger()
            root.setLevel(logging.DEBUG)

            fmt = logging.Formatter(
                "%(asctime)s.%(msecs)03d %(levelname)s pid=%(process)d "
                "host=%(hostname)s user=%(user)s "
                "[%(name)s:%(funcName)s:%(lineno)d] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            forensic_filter = ForensicContextFilter()

            fh = LineCappedFileHandler(log_dir / "ibanspec.log", max_lines=max_lines)
            fh.setFormatter(fmt)
            fh.addFilter(forensic_filter)
            root.addHandler(fh)

            fh_json = LineCappedFileHandler(log_dir / "ibanspec_forensic.jsonl", max_lines=max_lines * 2)
            fh_json.setFormatter(JsonLineFormatter())
            fh_json.addFilter(forensic_filter)
            root.addHandler(fh_json)

            if console or os.environ.get("IBANSPEC_LOG_CONSOLE", "").strip() in _TRUE_VALUES:
                ch = logging.StreamHandler()
                ch.setLevel(logging.INFO)
                ch.setFormatter(fmt)
                ch.addFilter(forensic_filter)
                root.addHandler(ch)

            setattr(root, "_ibanspec_log_detail", _detail_enabled())
            _ROOT_CONFIGURED = True

    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    logger.debug("Logging initialized: log_dir=%s max_lines=%s", log_dir, max_lines)
    return logger


def log_event(logger: logging.Logger, event_name: str, message: str, **extra: Any) -> None:
    """
    Helper pro strukturované logování:
    - doplní event_name a extra_payload
    - do textového logu přidá čitelný suffix key=value
    """
    extra_payload: Dict[str, Any] = extra or {}
    detail_enabled = bool(getattr(logging.getLogger(), "_ibanspec_log_detail", True))

    if not detail_enabled:
        extra_payload = {k: v for k, v in extra_payload.items() if len(repr(v)) <= 400}

    suffix = ""
    if extra_payload:
        suffix = " | " + " ".join(f"{k}={extra_payload[k]!r}" for k in sorted(extra_payload))
    logger.info(
        f"{message}{suffix}",
        extra={
            "event_name": event_name,
            "extra_payload": extra_payload,
            "forensic": get_forensic_fields(),
        },
    )
