import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from stsmfa.crypto.cipher import decrypt, encrypt
from stsmfa.profiles.expiry import format_expiration
from stsmfa.session.defaults import DefaultsRecord
from stsmfa.session.prompts import (
    confirm_refresh,
    read_duration,
    read_parameters,
    read_token_code,
    read_value,
    validate_role_arn,
    validate_token_code,
)


def answers(*values):
    """A reader that returns the given answers in order."""
    return MagicMock(side_effect=list(values))


@pytest.fixture
def defaults(key):
    """Previously saved defaults."""
    return DefaultsRecord(
        profile_name="work",
        device_arn=encrypt("arn:aws:iam::123456789012:mfa/alice", key),
        access_key_id=encrypt("AKIAOLD", key),
        secret_key=encrypt("old-secret-value", key),
        duration_seconds=3600,
        region="eu-west-1",
    )


def test_read_value():
    """Test that an empty answer means keep the current value."""
    assert read_value("Region: ", answers("us-east-1\r")) == "us-east-1"
    assert read_value("Region: ", answers("")) is None


def test_validate_token_code():
    """Test MFA code length checks."""
    assert validate_token_code("123456\n") == "123456"

    with pytest.raises(ValueError):
        validate_token_code("12345")


def test_validate_role_arn():
    """Test the role ARN length check."""
    arn = "arn:aws:iam::123456789012:role/DeployRole"
    assert validate_role_arn(arn) == arn

    with pytest.raises(ValueError):
        validate_role_arn("arn:aws:iam::1:role/x")


def test_read_token_code_loops_until_valid(capsys):
    """Test that the MFA code is asked for until it has six characters."""
    reader = answers("", "123", "654321")

    assert read_token_code(reader=reader) == "654321"
    assert reader.call_count == 3
    assert "valid 6 digit token" in capsys.readouterr().out


def test_read_token_code_uses_initial_value():
    """Test that a code given on the command line skips the prompt."""
    reader = answers()

    assert read_token_code("123456", reader=reader) == "123456"
    reader.assert_not_called()


def test_read_duration(defaults, capsys):
    """Test that invalid durations are asked for again."""
    assert read_duration(defaults, answers("60", "abc", "7200"))
    assert defaults.duration_seconds == 7200
    assert "Invalid duration" in capsys.readouterr().out

    assert not read_duration(defaults, answers(""))
    assert defaults.duration_seconds == 7200


def test_confirm_refresh_without_profile(tool_config):
    """Test that a profile that is not in the file needs no confirmation."""
    reader = answers()

    assert confirm_refresh(tool_config, "work", reader)
    reader.assert_not_called()


def test_confirm_refresh_valid_credentials(tool_config):
    """Test asking before replacing credentials that are still valid."""
    future = format_expiration(datetime.now(timezone.utc) + timedelta(hours=1))
    tool_config.credentials_path.write_text(f"[work]\nexpiration = {future}\n")

    assert not confirm_refresh(tool_config, "work", answers("maybe", "N"))
    assert confirm_refresh(tool_config, "work", answers("y"))


def test_confirm_refresh_expired_credentials(tool_config):
    """Test that expired credentials are refreshed without asking."""
    tool_config.credentials_path.write_text("[work]\nexpiration = Mon, 02 Jan 2006 15:04:05 -0700\n")
    reader = answers()

    assert confirm_refresh(tool_config, "work", reader)
    reader.assert_not_called()


def test_read_parameters_keeps_defaults(tool_config, defaults, key):
    """Test that pressing enter everywhere changes nothing and saves nothing."""
    proceed = read_parameters(tool_config, defaults, answers("", "", "", "", "", ""))

    assert proceed
    assert decrypt(defaults.access_key_id, key) == "AKIAOLD"
    assert not tool_config.defaults_path.exists()


def test_read_parameters_updates_and_saves(tool_config, defaults, key):
    """Test that new answers are encrypted and saved when asked to."""
    reader = answers("us-west-2", "", "AKIANEW", "new-secret", "dev", "900", "yes")

    assert read_parameters(tool_config, defaults, reader)

    assert defaults.region == "us-west-2"
    assert defaults.profile_name == "dev"
    assert defaults.duration_seconds == 900
    assert decrypt(defaults.access_key_id, key) == "AKIANEW"
    assert decrypt(defaults.secret_key, key) == "new-secret"
    assert decrypt(defaults.device_arn, key) == "arn:aws:iam::123456789012:mfa/alice"
    assert tool_config.defaults_path.exists()


def test_read_parameters_masks_secret_key(tool_config, defaults):
    """Test that the stored secret key is not echoed in full."""
    reader = answers("", "", "", "", "", "")

    read_parameters(tool_config, defaults, reader)

    prompts = [call.args[0] for call in reader.call_args_list]
    assert any("AKIAOLD" in p for p in prompts)
    assert not any("old-secret-value" in p for p in prompts)
    assert any("alue" in p for p in prompts if "Secret" in p)


def test_read_parameters_declined_refresh(tool_config, defaults, capsys):
    """Test stopping when the operator keeps valid credentials."""
    future = format_expiration(datetime.now(timezone.utc) + timedelta(hours=1))
    tool_config.credentials_path.write_text(f"[work]\nexpiration = {future}\n")

    proceed = read_parameters(tool_config, defaults, answers("", "", "", "", "", "n"))

    assert not proceed
    assert "NOT to refresh" in capsys.readouterr().out
