from __future__ import annotations
import logging
import os
from typing import Callable, Optional, TypeVar

from curage.errors import CurageConfigError

T = TypeVar("T")

# Defaults
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_HOST = "127.0.0.1"
_DEFAULT_PORT = 2087

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def value_from_env(var: str, default: T, convert: Callable[[str], T]) -> T:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw.strip())
    except ValueError as ex:
        raise CurageConfigError(f"{var}={raw!r}: {ex}") from ex


def parse_flag(raw: str) -> bool:
    v = raw.lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE | _FALSE)}")


def parse_log_level(raw: str) -> str:
    name = raw.upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError("not a logging level name")
    return name


def parse_port(raw: str) -> int:
    port = int(raw)
    if not 0 < port < 65536:
        raise ValueError("port out of range")
    return port


def get_log_level(override: Optional[str] = None) -> str:
    if override:
        try:
            return parse_log_level(override)
        except ValueError as ex:
            raise CurageConfigError(f"--log-level {override!r}: {ex}") from ex
    return value_from_env("CURAGE_LOG_LEVEL", _DEFAULT_LOG_LEVEL, parse_log_level)


def get_block_scoping() -> bool:
    """Whether if/while bodies keep their bindings to themselves."""
    return value_from_env("CURAGE_BLOCK_SCOPING", False, parse_flag)


def get_server_address() -> tuple[str, int]:
    host = value_from_env("CURAGE_LS_HOST", _DEFAULT_HOST, str)
    port = value_from_env("CURAGE_LS_PORT", _DEFAULT_PORT, parse_port)
    return host, port
