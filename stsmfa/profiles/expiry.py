"""
Expiration timestamps stored alongside temporary credentials.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from ..errors import NotFoundError
from .parser import read_profiles

EXPIRATION_KEY = "expiration"

# RFC 1123 with a numeric zone, e.g. "Mon, 02 Jan 2006 15:04:05 -0700"
EXPIRATION_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


def format_expiration(moment: datetime) -> str:
    """Format a timestamp for the credentials file. Naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.strftime(EXPIRATION_FORMAT)


def parse_expiration(text: str) -> datetime:
    """Parse a stored timestamp. Raises ValueError if it does not match the format."""
    return datetime.strptime(text.strip(), EXPIRATION_FORMAT)


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def is_expired(attributes: Dict[str, str], now: Optional[datetime] = None) -> bool:
    """
    Check whether a profile's credentials have expired.

    Args:
        attributes: Profile attributes
        now: Reference time (defaults to the current UTC time)

    Returns:
        bool: False when there is no expiration attribute, True when the
        attribute cannot be parsed or lies in the past
    """
    text = attributes.get(EXPIRATION_KEY)
    if text is None:
        return False
    try:
        expires_at = parse_expiration(text)
    except ValueError:
        return True
    return _now(now) > expires_at


def find_profile(path: Union[str, Path], name: str,
                 now: Optional[datetime] = None) -> Tuple[bool, str]:
    """
    Look up the expiration of a profile in a credentials file.

    Args:
        path: Credentials file
        name: Profile (section) name
        now: Reference time (defaults to the current UTC time)

    Returns:
        Tuple of (expired, stored expiration text)

    Raises:
        NotFoundError: If the profile is missing or carries no expiration
    """
    sections = read_profiles(path)
    attributes = sections.get(name)
    if attributes is None or EXPIRATION_KEY not in attributes:
        raise NotFoundError(f"No expiring credentials for profile '{name}' in {path}")
    return is_expired(attributes, now), attributes[EXPIRATION_KEY]
