import pytest
from pathlib import Path
from stsmfa.config import (
    BUILTIN_KEY_HEX,
    DEFAULTS_ENV_VAR,
    AWS_DIR_ENV_VAR,
    KEY_ENV_VAR,
    ToolConfig,
    resolve_key,
)
from stsmfa.errors import InvalidKeyError

ENV_KEY = "ab" * 32


def test_resolve_key_from_environment():
    """Test that a well-formed key in the environment is preferred."""
    key = resolve_key({KEY_ENV_VAR: ENV_KEY}, allow_builtin_key=True)

    assert key == bytes.fromhex(ENV_KEY)


def test_resolve_key_fails_closed():
    """Test that no key means no run unless the built-in key is allowed."""
    with pytest.raises(InvalidKeyError):
        resolve_key({})


def test_resolve_key_ignores_malformed_key(capsys):
    """Test that a malformed key is reported and not used."""
    with pytest.raises(InvalidKeyError):
        resolve_key({KEY_ENV_VAR: "not-a-key"})

    assert "not 64 hexadecimal characters" in capsys.readouterr().out


def test_resolve_key_builtin(capsys):
    """Test the opt-in built-in key."""
    key = resolve_key({}, allow_builtin_key=True)

    assert key == bytes.fromhex(BUILTIN_KEY_HEX)
    assert "built-in encryption key" in capsys.readouterr().out


def test_from_environment(tmp_path):
    """Test building a configuration from environment variables."""
    env = {
        KEY_ENV_VAR: ENV_KEY,
        AWS_DIR_ENV_VAR: str(tmp_path / "aws"),
        DEFAULTS_ENV_VAR: str(tmp_path / "cfg" / "defaults.json"),
    }

    config = ToolConfig.from_environment(env)

    assert config.credentials_path == tmp_path / "aws" / "credentials"
    assert config.config_path == tmp_path / "aws" / "config"
    assert config.defaults_path == tmp_path / "cfg" / "defaults.json"
    assert config.key == bytes.fromhex(ENV_KEY)


def test_from_environment_default_paths():
    """Test the default file locations."""
    config = ToolConfig.from_environment({KEY_ENV_VAR: ENV_KEY})

    assert config.aws_dir == Path.home() / ".aws"
    assert config.defaults_path == Path("config") / "defaults.json"


def test_ensure_directories(tmp_path):
    """Test creating missing directories."""
    config = ToolConfig(tmp_path / "aws", tmp_path / "cfg" / "defaults.json", bytes(32))

    config.ensure_directories()
    config.ensure_directories()

    assert (tmp_path / "aws").is_dir()
    assert (tmp_path / "cfg").is_dir()
