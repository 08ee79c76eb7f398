"""Tests for client configuration."""

import pytest

from enginoor.config import Config
from enginoor.engine import ConfigError


def test_raw_secret_used_as_key_bytes():
    config = Config(jwt_secret_raw="0xdeadbeef")
    assert config.jwt_secret == b"0xdeadbeef"


def test_secret_file_is_hex_decoded(tmp_path):
    path = tmp_path / "jwt.hex"
    path.write_text("0x" + "ab" * 32 + "\n")

    config = Config(jwt_secret_path=str(path))
    assert config.jwt_secret == b"\xab" * 32


def test_raw_secret_wins_over_file(tmp_path):
    path = tmp_path / "jwt.hex"
    path.write_text("ab" * 32)

    config = Config(jwt_secret_raw="raw", jwt_secret_path=str(path))
    assert config.jwt_secret == b"raw"


def test_missing_secret():
    with pytest.raises(ConfigError):
        Config().jwt_secret


@pytest.mark.parametrize("content", ["", "0x", "not-hex"])
def test_bad_secret_file(tmp_path, content):
    path = tmp_path / "jwt.hex"
    path.write_text(content)

    with pytest.raises(ConfigError):
        Config(jwt_secret_path=str(path)).jwt_secret


def test_unreadable_secret_file(tmp_path):
    with pytest.raises(ConfigError):
        Config(jwt_secret_path=str(tmp_path / "missing")).jwt_secret


def test_secret_not_in_repr():
    assert "hunter2" not in repr(Config(jwt_secret_raw="hunter2"))


@pytest.mark.parametrize("overrides", [
    {"engine_api_url": ""},
    {"timeout": 0},
    {"jwt_expiry": -5},
    {"jwt_secret_raw": ""},
])
def test_validate_rejects(overrides):
    values = {"jwt_secret_raw": "secret", **overrides}
    with pytest.raises(ConfigError):
        Config(**values).validate()


def test_validate_accepts_defaults_with_secret():
    Config(jwt_secret_raw="secret").validate()


def test_validate_returns_secret(tmp_path):
    path = tmp_path / "jwt.hex"
    path.write_text("0x" + "01" * 32)

    assert Config(jwt_secret_path=str(path)).validate() == b"\x01" * 32
