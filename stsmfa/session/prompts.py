"""
Interactive prompts for the values needed to request a session token.

Pressing enter at a prompt keeps the value shown in parentheses.
"""

from typing import Callable, Optional

from ..crypto import reveal_secret
from ..errors import NotFoundError
from ..profiles.expiry import find_profile
from .defaults import (
    DefaultsRecord,
    MAX_DURATION,
    MIN_DURATION,
    save_defaults,
    update_secret,
    validate_duration,
)

TOKEN_CODE_LENGTH = 6
MIN_ROLE_ARN_LENGTH = 32

Reader = Callable[[str], str]


def read_value(message: str, reader: Reader = input) -> Optional[str]:
    """Prompt once. Returns None when the operator just presses enter."""
    text = reader(message).replace("\r", "").replace("\n", "")
    return text or None


def validate_token_code(token_code: str) -> str:
    """Return the token code with line endings removed, or raise ValueError."""
    token_code = token_code.replace("\r", "").replace("\n", "")
    if len(token_code) != TOKEN_CODE_LENGTH:
        raise ValueError(f"Token from MFA device must be {TOKEN_CODE_LENGTH} characters long")
    return token_code


def validate_role_arn(role_arn: str) -> str:
    """
    Sanity check a role ARN given on the command line.

    Only the length is checked; the ARN structure is left to AWS.
    """
    role_arn = role_arn.replace("\r", "").replace("\n", "")
    if len(role_arn) < MIN_ROLE_ARN_LENGTH:
        raise ValueError(f"Role ARN must be at least {MIN_ROLE_ARN_LENGTH} characters long")
    return role_arn


def read_token_code(initial: Optional[str] = None, reader: Reader = input) -> str:
    """Ask for the MFA code until a six character value is entered."""
    token_code = initial
    while not token_code or len(token_code) != TOKEN_CODE_LENGTH:
        if token_code is not None:
            print(f"Please enter a valid {TOKEN_CODE_LENGTH} digit token code from your MFA device!")
        token_code = read_value("Token code from your device: ", reader) or ""
    return token_code


def _masked(value: str) -> str:
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


def _ask_yes_no(message: str, reader: Reader) -> bool:
    answer = ""
    while answer not in ("y", "n"):
        answer = (read_value(message, reader) or "").lower()
    return answer == "y"


def confirm_refresh(config, profile_name: str, reader: Reader = input) -> bool:
    """
    Ask whether to refresh credentials that have not expired yet.

    Returns:
        bool: True to continue, False if the operator keeps the current credentials
    """
    try:
        expired, expiration = find_profile(config.credentials_path, profile_name)
    except NotFoundError:
        return True
    if expired:
        return True
    return _ask_yes_no(
        f"Your credentials for the profile [{profile_name}] is not expired yet! "
        f"It will expire at {expiration}. Would you like to refresh it (y/n): ",
        reader,
    )


def read_duration(defaults: DefaultsRecord, reader: Reader = input) -> bool:
    """Prompt for the session duration. Returns True if it was changed."""
    while True:
        text = read_value(f"Duration in seconds [{MIN_DURATION}-{MAX_DURATION}] "
                          f"({defaults.duration_seconds}): ", reader)
        if text is None:
            return False
        try:
            defaults.duration_seconds = validate_duration(text)
            return True
        except ValueError:
            print(f"\t Invalid duration! Please enter a numeric value between {MIN_DURATION}-{MAX_DURATION}")


def read_parameters(config, defaults: DefaultsRecord, reader: Reader = input) -> bool:
    """
    Walk the operator through every remembered value.

    Args:
        config: ToolConfig for this run
        defaults: Record to update in place
        reader: Prompt function (input by default)

    Returns:
        bool: False if the operator chose to keep still-valid credentials
    """
    changed = False

    text = read_value(f"Region ({defaults.region}): ", reader)
    if text is not None:
        defaults.region = text
        changed = True

    prompts = [
        ("device_arn", "Device arn ({}): ", False),
        ("access_key_id", "Permanent AWS Access Key ({}): ", False),
        ("secret_key", "Permanent AWS Secret Key ({}): ", True),
    ]
    for field, message, secret in prompts:
        current = reveal_secret(getattr(defaults, field), config.key)
        text = read_value(message.format(_masked(current) if secret else current), reader)
        if text is not None:
            update_secret(defaults, field, text, config.key)
            changed = True

    text = read_value(f"Profile name for temporary credentials to save into ({defaults.profile_name}): ", reader)
    if text is not None:
        defaults.profile_name = text
        changed = True

    if not confirm_refresh(config, defaults.profile_name, reader):
        print("Exiting because existing token is still valid and the user selected NOT to refresh it!")
        return False

    if read_duration(defaults, reader):
        changed = True

    if changed:
        text = read_value("\nYou have changed the configuration value(s). "
                          "Would you like to save changes to defaults [yes/no, y/n] (no): ", reader)
        if text and text.lower() in ("y", "yes"):
            save_defaults(config, defaults)
    return True
