"""
AES-256-GCM encryption of short strings.

A cipher blob is the lowercase hex encoding of ``nonce || ciphertext || tag``.
Every call to ``encrypt`` draws a fresh nonce, so encrypting the same value
twice gives two different blobs.
"""

import os
import binascii
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import AuthenticationError, FormatError, InvalidKeyError, TooShortError

KEY_SIZE = 32
NONCE_SIZE = 12


def is_valid_key_hex(text: str) -> bool:
    """Return True if ``text`` is a 64 character hexadecimal key."""
    if not text or len(text) != KEY_SIZE * 2:
        return False
    try:
        bytes.fromhex(text)
    except ValueError:
        return False
    return True


def key_from_hex(text: str) -> bytes:
    """
    Decode a hex encoded encryption key.

    Args:
        text: 64 hexadecimal characters

    Returns:
        bytes: The 32 byte key

    Raises:
        InvalidKeyError: If the text is not a well-formed key
    """
    if not is_valid_key_hex(text):
        raise InvalidKeyError("Encryption key must be 64 hexadecimal characters")
    return bytes.fromhex(text)


def _cipher_for(key: bytes) -> AESGCM:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
        raise InvalidKeyError(f"Encryption key must be exactly {KEY_SIZE} bytes")
    return AESGCM(bytes(key))


def encrypt(plaintext: str, key: bytes) -> str:
    """
    Encrypt a string under the given key.

    Args:
        plaintext: Value to encrypt, the empty string included
        key: 32 byte key

    Returns:
        str: Hex encoded nonce followed by the sealed output
    """
    aead = _cipher_for(key)
    nonce = os.urandom(NONCE_SIZE)
    sealed = aead.encrypt(nonce, plaintext.encode("utf-8"), None)
    return (nonce + sealed).hex()


def decrypt(blob: str, key: bytes) -> str:
    """
    Decrypt a blob produced by ``encrypt``.

    Args:
        blob: Hex encoded cipher blob
        key: 32 byte key

    Returns:
        str: The original plaintext

    Raises:
        FormatError: If the blob is not hex or the key is malformed
        TooShortError: If the blob is shorter than a nonce
        AuthenticationError: If the tag does not verify under this key
    """
    aead = _cipher_for(key)
    try:
        data = binascii.unhexlify(blob)
    except (binascii.Error, TypeError, ValueError) as e:
        raise FormatError(f"Cipher blob is not valid hex: {e}")

    if len(data) < NONCE_SIZE:
        raise TooShortError("Cipher blob is shorter than the nonce")

    nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
    try:
        plaintext = aead.decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise AuthenticationError("Decryption failed: wrong key or corrupted data")

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"Decrypted value is not valid text: {e}")
