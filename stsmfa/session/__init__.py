"""
Everything around the token request: remembered defaults, prompts and the STS call.
"""

from .defaults import DefaultsRecord, load_defaults, save_defaults, validate_duration
from .prompts import read_parameters, read_token_code, validate_role_arn, validate_token_code
from .sts import get_session_token

__all__ = [
    'DefaultsRecord',
    'load_defaults',
    'save_defaults',
    'validate_duration',
    'read_parameters',
    'read_token_code',
    'validate_role_arn',
    'validate_token_code',
    'get_session_token',
]
