from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# Context proměnné – udržují se per-thread/async task.
correlation_id_var = contextvars.ContextVar("correlation_id", default=None)
command_var = contextvars.ContextVar("command", default=None)
country_code_var = contextvars.ContextVar("country_code", default=None)

_VARS: Dict[str, contextvars.ContextVar] = {
    "correlation_id": correlation_id_var,
    "command": command_var,
    "country_code": country_code_var,
}


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def get_forensic_fields() -> Dict[str, Any]:
    """Vrátí současný stav všech forenzních contextvars jako dict."""
    return {name: var.get() for name, var in _VARS.items()}


@contextmanager
def forensic_scope(**fields: Any) -> Iterator[None]:
    """
    Temporarily sets the given context variables; unknown names are ignored.
    Previous values are restored on exit.
    """
    tokens = []
    try:
        for name, value in fields.items():
            var = _VARS.get(name)
            if var is not None:
                tokens.append((var, var.set(value)))
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
