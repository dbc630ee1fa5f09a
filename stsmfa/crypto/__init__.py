"""
At-rest encryption of the permanent secrets kept in the defaults file.
"""

from .cipher import encrypt, decrypt, key_from_hex, is_valid_key_hex, KEY_SIZE, NONCE_SIZE
from .secrets import Encrypted, PlaintextLegacy, classify_secret, reveal_secret, seal_secret

__all__ = [
    'encrypt',
    'decrypt',
    'key_from_hex',
    'is_valid_key_hex',
    'KEY_SIZE',
    'NONCE_SIZE',
    'Encrypted',
    'PlaintextLegacy',
    'classify_secret',
    'reveal_secret',
    'seal_secret',
]
