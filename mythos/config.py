"""Server configuration.

Values come from, in rising priority: built-in defaults, a TOML file
(``MYTHOS_CONFIG`` or ``./mythos.toml`` if it exists), and ``MYTHOS_*``
environment variables.
"""

from __future__ import annotations

import ipaddress
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

__all__ = ["Config"]

_ENV_PREFIX = "MYTHOS_"
_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _check_socket_addr(value: str) -> None:
    if value.startswith("["):
        host, sep, port = value[1:].rpartition("]:")
        parse_host = ipaddress.IPv6Address
    else:
        host, sep, port = value.rpartition(":")
        parse_host = ipaddress.IPv4Address
    if not sep or not port.isdigit() or int(port) > 65535:
        raise ValueError(f"invalid socket address: {value!r}")
    try:
        parse_host(host)
    except ValueError as err:
        raise ValueError(f"invalid socket address: {value!r}") from err


@dataclass(frozen=True)
class Config:
    """Settings the server runs with."""

    listen: str = "0.0.0.0:8080"
    data_dir: Path = Path("./data")
    log_filter: str = "info,mythos=debug,sqlx=warn"
    cookie_secure: bool = True
    token_ttl_days: int = 30
    tmdb_api_key: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.listen, str):
            raise ValueError("listen must be a string")
        _check_socket_addr(self.listen)
        object.__setattr__(self, "data_dir", Path(self.data_dir))
        if not isinstance(self.log_filter, str):
            raise ValueError("log_filter must be a string")
        if not isinstance(self.cookie_secure, bool):
            raise ValueError("cookie_secure must be a boolean")
        if isinstance(self.token_ttl_days, bool) or not isinstance(self.token_ttl_days, int):
            raise ValueError("token_ttl_days must be an integer")
        if self.token_ttl_days < 0:
            raise ValueError("token_ttl_days must not be negative")
        if self.tmdb_api_key is not None and not isinstance(self.tmdb_api_key, str):
            raise ValueError("tmdb_api_key must be a string")

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a configuration from defaults, the TOML file and the environment."""
        env = os.environ if environ is None else environ
        names = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        path = Path(env.get("MYTHOS_CONFIG", "mythos.toml"))
        if path.exists():
            with path.open("rb") as handle:
                data = tomllib.load(handle)
            values.update({k: v for k, v in data.items() if k in names})

        for key, raw in env.items():
            if not key.startswith(_ENV_PREFIX):
                continue
            name = key[len(_ENV_PREFIX):].lower()
            if "__" in name or name not in names:
                continue
            values[name] = _from_env(name, raw)

        return cls(**values)

    def db_path(self) -> Path:
        return self.data_dir / "mythos.db"

    def posters_dir(self) -> Path:
        return self.data_dir / "posters"

    def transcode_dir(self) -> Path:
        return self.data_dir / "transcode"

    def subtitles_dir(self) -> Path:
        return self.data_dir / "subtitles"


def _from_env(name: str, raw: str) -> Any:
    if name == "cookie_secure":
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"invalid boolean for {name}: {raw!r}")
    if name == "token_ttl_days":
        try:
            return int(raw.strip())
        except ValueError as err:
            raise ValueError(f"invalid integer for {name}: {raw!r}") from err
    return raw