import base64

import pytest

from mythos.secret import SecretError, resolve, secret_path


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def test_secret_path_is_inside_data_dir(tmp_path):
    assert secret_path(tmp_path) == tmp_path / "jwt.secret"


def test_environment_secret_is_used(tmp_path):
    key_bytes = bytes(range(40))
    result = resolve(tmp_path, {"MYTHOS_JWT_SECRET": _encode(key_bytes)})
    assert result == key_bytes
    assert not secret_path(tmp_path).exists()


def test_environment_secret_too_short_raises(tmp_path):
    # "password" is valid base64 that decodes to only six bytes.
    with pytest.raises(SecretError, match="need at least"):
        resolve(tmp_path, {"MYTHOS_JWT_SECRET": "password"})


def test_environment_secret_bad_base64_raises(tmp_path):
    # "secret" has six characters, so its base64 padding is wrong.
    with pytest.raises(SecretError, match="base64"):
        resolve(tmp_path, {"MYTHOS_JWT_SECRET": "secret"})


def test_generates_and_persists_secret(tmp_path):
    data_dir = tmp_path / "nested" / "data"
    first = resolve(data_dir, {})
    assert len(first) == 32
    stored = secret_path(data_dir).read_text()
    assert base64.b64decode(stored) == first
    assert resolve(data_dir, {}) == first


def test_no_temp_file_left_behind(tmp_path):
    resolve(tmp_path, {})
    assert [p.name for p in tmp_path.iterdir()] == ["jwt.secret"]


def test_existing_file_is_read_with_whitespace(tmp_path):
    key_bytes = bytes(range(32, 80))
    secret_path(tmp_path).write_text(_encode(key_bytes) + "\n")
    assert resolve(tmp_path, {}) == key_bytes


def test_existing_short_file_raises(tmp_path):
    secret_path(tmp_path).write_text(_encode(bytes(range(4))))
    with pytest.raises(SecretError, match="need at least"):
        resolve(tmp_path, {})


def test_environment_takes_priority_over_file(tmp_path):
    file_bytes = bytes(range(32))
    env_bytes = bytes(range(100, 140))
    secret_path(tmp_path).write_text(_encode(file_bytes))
    assert resolve(tmp_path, {"MYTHOS_JWT_SECRET": _encode(env_bytes)}) == env_bytes