"""
Error types raised by stsmfa.

Malformed lines in profile files are never errors; they are dropped while
parsing. Filesystem failures surface as the builtin OSError.
"""


class StsMfaError(Exception):
    """Base class for all stsmfa errors."""


class CipherError(StsMfaError, ValueError):
    """Encryption or decryption of a stored secret failed."""


class FormatError(CipherError):
    """Ciphertext is not valid hex, or its plaintext is not valid text."""


class InvalidKeyError(FormatError, KeyError):
    """Encryption key is not exactly 32 bytes (64 hex characters)."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class TooShortError(CipherError):
    """Ciphertext is shorter than the nonce it should carry."""


class AuthenticationError(CipherError):
    """Authentication tag did not verify: tampered data or a different key."""


class NotFoundError(StsMfaError, LookupError):
    """A profile, or the attribute asked for, is not present."""
