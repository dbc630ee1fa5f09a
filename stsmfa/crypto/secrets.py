"""
Stored secrets are either cipher blobs or plaintext left behind by an older
defaults file. ``classify_secret`` tells the two apart explicitly so callers
never branch on decryption exceptions themselves.
"""

import logging
from typing import Tuple, Union

from ..errors import AuthenticationError, FormatError, TooShortError
from .cipher import _cipher_for, decrypt, encrypt

logger = logging.getLogger(__name__)


class Encrypted:
    """A stored value that decrypts under the current key."""
    def __init__(self, blob: str, plaintext: str):
        self.blob = blob
        self.plaintext = plaintext

    def __eq__(self, other) -> bool:
        return isinstance(other, Encrypted) and other.blob == self.blob

    def __repr__(self) -> str:
        return f"Encrypted(blob={self.blob[:16]}...)"


class PlaintextLegacy:
    """A stored value that is not a blob under the current key."""
    def __init__(self, value: str):
        self.value = value

    def __eq__(self, other) -> bool:
        return isinstance(other, PlaintextLegacy) and other.value == self.value

    def __repr__(self) -> str:
        return "PlaintextLegacy(<hidden>)"


StoredSecret = Union[Encrypted, PlaintextLegacy]


def classify_secret(stored: str, key: bytes) -> StoredSecret:
    """
    Classify a value read from the defaults file.

    Args:
        stored: Value as it appears on disk
        key: Current 32 byte encryption key

    Returns:
        Encrypted if the value decrypts under ``key``, PlaintextLegacy otherwise

    Raises:
        InvalidKeyError: If ``key`` is not a 32 byte key
    """
    # Key errors propagate; only the value itself can be legacy
    _cipher_for(key)
    try:
        return Encrypted(stored, decrypt(stored, key))
    except (FormatError, TooShortError, AuthenticationError):
        return PlaintextLegacy(stored)


def reveal_secret(stored: str, key: bytes) -> str:
    """Return the plaintext behind a stored value, whichever form it is in."""
    secret = classify_secret(stored, key)
    if isinstance(secret, Encrypted):
        return secret.plaintext
    return secret.value


def seal_secret(stored: str, key: bytes) -> Tuple[str, bool]:
    """
    Make sure a stored value is encrypted under ``key``.

    Returns:
        Tuple of (value to persist, whether it changed)
    """
    secret = classify_secret(stored, key)
    if isinstance(secret, Encrypted):
        return secret.blob, False
    logger.info("Encrypting a value stored as plaintext")
    return encrypt(secret.value, key), True
