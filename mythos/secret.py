"""JWT signing secret resolution.

In order of preference: the ``MYTHOS_JWT_SECRET`` environment variable
(base64), ``{data_dir}/jwt.secret`` (base64), or 32 fresh random bytes
written atomically to ``{data_dir}/jwt.secret``.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import secrets
from collections.abc import Mapping
from pathlib import Path

__all__ = ["SecretError", "resolve", "secret_path"]

MIN_SECRET_LEN = 32

log = logging.getLogger(__name__)


class SecretError(Exception):
    """The JWT secret could not be read, decoded or written."""


def secret_path(data_dir: str | os.PathLike[str]) -> Path:
    """Where the persisted secret lives inside the data directory."""
    return Path(data_dir) / "jwt.secret"


def _decode(text: str, origin: str) -> bytes:
    try:
        data = base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as err:
        raise SecretError(f"decoding {origin}: base64 decode failed") from err
    if len(data) < MIN_SECRET_LEN:
        raise SecretError(
            f"{origin} decoded to {len(data)} bytes; need at least {MIN_SECRET_LEN}"
        )
    return data


def resolve(
    data_dir: str | os.PathLike[str], environ: Mapping[str, str] | None = None
) -> bytes:
    """Return the JWT secret, creating and persisting one when none exists."""
    env = os.environ if environ is None else environ
    from_env = env.get("MYTHOS_JWT_SECRET")
    if from_env is not None:
        data = _decode(from_env, "MYTHOS_JWT_SECRET")
        log.info("using JWT secret from MYTHOS_JWT_SECRET env var")
        return data

    path = secret_path(data_dir)
    if path.exists():
        try:
            contents = path.read_text()
        except (OSError, UnicodeDecodeError) as err:
            raise SecretError(f"reading jwt secret at {path}: {err}") from err
        return _decode(contents, f"jwt secret at {path}")

    log.info("generating new JWT secret at %s", path)
    data = secrets.token_bytes(MIN_SECRET_LEN)
    _write_atomic(path, base64.b64encode(data).decode("ascii"))
    return data


def _write_atomic(target: Path, contents: str) -> None:
    parent = target.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise SecretError(f"creating directory {parent}: {err}") from err

    tmp = parent / f".jwt.secret.tmp.{os.getpid()}"
    try:
        with tmp.open("w") as handle:
            handle.write(contents)
            handle.flush()
            try:
                os.fsync(handle.fileno())
            except OSError:
                pass
    except OSError as err:
        raise SecretError(f"writing temp file {tmp}: {err}") from err

    if os.name == "posix":
        try:
            os.chmod(tmp, 0o600)
        except OSError as err:
            raise SecretError(f"chmod 0600 {tmp}: {err}") from err
    else:
        log.warning(
            "jwt.secret written without strict file permissions on this platform; "
            "ensure the data_dir is not world-readable"
        )

    try:
        os.replace(tmp, target)
    except OSError as err:
        raise SecretError(f"rename {tmp} -> {target}: {err}") from err