"""
Reading, merging and rewriting the AWS credentials and config files.
"""

from .parser import parse_profiles, read_profiles
from .expiry import is_expired, find_profile, format_expiration, parse_expiration
from .writer import (
    Credential,
    ProfileEntry,
    assumed_profile_name,
    credentials_entries,
    config_entries,
    merge_profiles,
    render_profiles,
    rewrite,
    write_credentials_file,
    write_config_file,
)

__all__ = [
    'parse_profiles',
    'read_profiles',
    'is_expired',
    'find_profile',
    'format_expiration',
    'parse_expiration',
    'Credential',
    'ProfileEntry',
    'assumed_profile_name',
    'credentials_entries',
    'config_entries',
    'merge_profiles',
    'render_profiles',
    'rewrite',
    'write_credentials_file',
    'write_config_file',
]
