"""
Runtime configuration for stsmfa.

Everything that used to be process-wide state (file locations, the
encryption key) lives on a ToolConfig that callers pass around explicitly.
"""

import os
import logging
from pathlib import Path
from typing import Mapping, Optional

from .crypto.cipher import is_valid_key_hex, key_from_hex
from .errors import InvalidKeyError

logger = logging.getLogger(__name__)

KEY_ENV_VAR = "AWS_STS_TOKEN_MFA_ENC_KEY"
AWS_DIR_ENV_VAR = "AWS_STS_MFA_AWS_DIR"
DEFAULTS_ENV_VAR = "AWS_STS_MFA_DEFAULTS"

# Only used when the operator opts in with --allow-default-key. Kept so that
# defaults files written by earlier releases can still be read.
BUILTIN_KEY_HEX = "1c5e61ce116c47867d9a059debbfc9f4ab0d0bf7c1efe0011a26fd0471ce4a93"


def resolve_key(env: Optional[Mapping[str, str]] = None,
                allow_builtin_key: bool = False) -> bytes:
    """
    Pick the encryption key for the defaults file.

    Args:
        env: Environment to read from (defaults to os.environ)
        allow_builtin_key: Fall back to the built-in key when the environment
            does not supply a valid one

    Returns:
        bytes: 32 byte key

    Raises:
        InvalidKeyError: If no valid key is available
    """
    env = os.environ if env is None else env
    candidate = env.get(KEY_ENV_VAR, "")
    if is_valid_key_hex(candidate):
        logger.info("Using encryption key from %s", KEY_ENV_VAR)
        return key_from_hex(candidate)

    if candidate:
        print(f"Warning: {KEY_ENV_VAR} is set but is not 64 hexadecimal characters; ignoring it")

    if not allow_builtin_key:
        raise InvalidKeyError(
            f"No encryption key found. Set {KEY_ENV_VAR} to 64 hexadecimal characters, "
            "or pass --allow-default-key to use the built-in key"
        )

    print("Warning: using the built-in encryption key. Anyone with this tool can decrypt your defaults file.")
    return key_from_hex(BUILTIN_KEY_HEX)


class ToolConfig:
    """File locations and the encryption key for one run of the tool."""
    def __init__(self, aws_dir: Path, defaults_path: Path, key: bytes):
        self.aws_dir = Path(aws_dir)
        self.defaults_path = Path(defaults_path)
        self.key = key

    @property
    def credentials_path(self) -> Path:
        """Path to the AWS credentials file."""
        return self.aws_dir / "credentials"

    @property
    def config_path(self) -> Path:
        """Path to the AWS config file."""
        return self.aws_dir / "config"

    @classmethod
    def from_environment(cls, env: Optional[Mapping[str, str]] = None,
                         allow_builtin_key: bool = False) -> "ToolConfig":
        """
        Build a configuration from environment variables.

        Args:
            env: Environment to read from (defaults to os.environ)
            allow_builtin_key: See ``resolve_key``

        Returns:
            ToolConfig: Configuration for this run
        """
        env = os.environ if env is None else env
        aws_dir = env.get(AWS_DIR_ENV_VAR) or str(Path.home() / ".aws")
        defaults_path = env.get(DEFAULTS_ENV_VAR) or str(Path("config") / "defaults.json")
        key = resolve_key(env, allow_builtin_key=allow_builtin_key)
        return cls(Path(aws_dir).expanduser(), Path(defaults_path).expanduser(), key)

    def ensure_directories(self) -> None:
        """Create the AWS directory and the defaults directory if missing."""
        for directory in (self.aws_dir, self.defaults_path.parent):
            if not directory.exists():
                directory.mkdir(mode=0o744, parents=True)
