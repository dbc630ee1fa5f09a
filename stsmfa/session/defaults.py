"""
Defaults File

Remembers what the operator entered last time (region, MFA device, permanent
keys, profile name, duration) in a small JSON file. The device ARN and the
permanent keys are stored as cipher blobs; values left in plaintext by older
versions are encrypted the next time the file is loaded.
"""

import json
import logging
from typing import Any, Dict

from ..crypto import encrypt, seal_secret

logger = logging.getLogger(__name__)

MIN_DURATION = 900
MAX_DURATION = 129600

ENCRYPTED_FIELDS = ("device_arn", "access_key_id", "secret_key")


class DefaultsRecord:
    """Values remembered between runs."""
    def __init__(self, profile_name: str = "", device_arn: str = "",
                 access_key_id: str = "", secret_key: str = "", token: str = "",
                 duration_seconds: int = 0, region: str = ""):
        self.profile_name = profile_name
        self.device_arn = device_arn  # cipher blob
        self.access_key_id = access_key_id  # cipher blob
        self.secret_key = secret_key  # cipher blob
        self.token = token
        self.duration_seconds = duration_seconds
        self.region = region

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON representation used on disk."""
        return {
            "profileName": self.profile_name,
            "deviceARN": self.device_arn,
            "accessKeyID": self.access_key_id,
            "secretKey": self.secret_key,
            "token": self.token,
            "durationInSeconds": self.duration_seconds,
            "awsRegion": self.region,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefaultsRecord":
        """Build a record from its JSON representation. Missing keys get empty values."""
        return cls(
            profile_name=data.get("profileName") or "",
            device_arn=data.get("deviceARN") or "",
            access_key_id=data.get("accessKeyID") or "",
            secret_key=data.get("secretKey") or "",
            token=data.get("token") or "",
            duration_seconds=int(data.get("durationInSeconds") or 0),
            region=data.get("awsRegion") or "",
        )


def validate_duration(value: Any) -> int:
    """
    Validate a session duration.

    Args:
        value: Duration in seconds, as an int or a numeric string

    Returns:
        int: The duration

    Raises:
        ValueError: If the value is not an integer between 900 and 129600
    """
    duration = int(str(value).strip())
    if duration < MIN_DURATION or duration > MAX_DURATION:
        raise ValueError(f"Duration must be between {MIN_DURATION} and {MAX_DURATION} seconds")
    return duration


def save_defaults(config, record: DefaultsRecord) -> None:
    """Write the defaults record to the configured defaults file."""
    with open(config.defaults_path, "w", encoding="utf-8") as f:
        json.dump(record.to_dict(), f)


def load_defaults(config) -> DefaultsRecord:
    """
    Load the defaults file, creating it if needed.

    A missing file is created with encrypted empty values. Secret fields that
    do not decrypt under the current key are treated as plaintext from an
    older version and re-encrypted; the file is saved again if that happens.

    Args:
        config: ToolConfig for this run

    Returns:
        DefaultsRecord: Record whose secret fields are all cipher blobs
    """
    if not config.defaults_path.exists():
        empty = encrypt("", config.key)
        save_defaults(config, DefaultsRecord(device_arn=empty, access_key_id=empty, secret_key=empty))
        logger.info("Created defaults file %s", config.defaults_path)

    with open(config.defaults_path, "r", encoding="utf-8") as f:
        record = DefaultsRecord.from_dict(json.load(f))

    changed = False
    for field in ENCRYPTED_FIELDS:
        sealed, field_changed = seal_secret(getattr(record, field), config.key)
        if field_changed:
            logger.info("Encrypted plaintext %s in %s", field, config.defaults_path)
            setattr(record, field, sealed)
            changed = True

    if changed:
        save_defaults(config, record)
    return record


def update_secret(record: DefaultsRecord, field: str, plaintext: str, key: bytes) -> None:
    """Store a new plaintext value for one of the encrypted fields."""
    if field not in ENCRYPTED_FIELDS:
        raise ValueError(f"{field} is not an encrypted field")
    setattr(record, field, encrypt(plaintext, key))
