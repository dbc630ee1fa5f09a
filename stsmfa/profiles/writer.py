"""
Profile File Writer

This module merges freshly minted credentials into the AWS credentials and
config files. New entries are written first, followed by every existing
section that they do not replace. In the credentials file, sections whose
temporary credentials have expired are dropped along the way.

The merged text is built completely in memory before the destination is
truncated, but the truncate-then-write sequence itself is not crash-safe.
"""

import os
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Union

from .expiry import EXPIRATION_KEY, format_expiration, is_expired
from .messages import assumed_role_message, credentials_saved_message
from .parser import Sections, read_profiles

__all__ = [
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

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
CONFIG_DEFAULT_SECTION = "profile default"
OUTPUT_FORMAT = "json"


class Credential(NamedTuple):
    """Temporary credentials returned by STS for one profile."""
    profile_name: str
    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime


class ProfileEntry:
    """One [section] of a profile file."""
    def __init__(self, name: str, attributes: Optional[Dict[str, str]] = None):
        self.name = name
        self.attributes = dict(attributes or {})

    def __eq__(self, other) -> bool:
        return (isinstance(other, ProfileEntry)
                and other.name == self.name
                and other.attributes == self.attributes)

    def __repr__(self) -> str:
        return f"ProfileEntry({self.name!r}, {sorted(self.attributes)!r})"


def assumed_profile_name(profile_name: str, role_arn: str) -> str:
    """
    Name of the profile that assumes ``role_arn`` from ``profile_name``.

    Args:
        profile_name: Base profile name
        role_arn: Role ARN, e.g. arn:aws:iam::123456789012:role/DeployRole

    Returns:
        str: "<profile>-assumed-<last path segment of the ARN>"
    """
    return f"{profile_name}-assumed-{role_arn.split('/')[-1]}"


def _config_section(profile_name: str) -> str:
    return f"profile {profile_name}"


def credentials_entries(credential: Credential,
                        role_arn: Optional[str] = None) -> List[ProfileEntry]:
    """
    Build the credentials file entries for a new credential.

    Args:
        credential: Temporary credentials from STS
        role_arn: Optional role to create an assume-role profile for

    Returns:
        List[ProfileEntry]: Base profile, then the assumed-role profile if any
    """
    entries = [ProfileEntry(credential.profile_name, {
        "aws_access_key_id": credential.access_key_id,
        "aws_secret_access_key": credential.secret_access_key,
        "aws_session_token": credential.session_token,
        # Older SDKs still read aws_security_token
        "aws_security_token": credential.session_token,
        EXPIRATION_KEY: format_expiration(credential.expiration),
    })]
    if role_arn:
        entries.append(ProfileEntry(assumed_profile_name(credential.profile_name, role_arn), {
            "role_arn": role_arn,
            "source_profile": credential.profile_name,
        }))
    return entries


def config_entries(profile_name: str, region: str, existing: Sections,
                   role_arn: Optional[str] = None) -> List[ProfileEntry]:
    """
    Build the config file entries for a profile.

    A [profile default] section is added when the profile is not itself the
    default one and the file has none, since the AWS CLI fails without it.

    Args:
        profile_name: Base profile name
        region: AWS region for the profile
        existing: Sections already in the config file
        role_arn: Optional role to create an assume-role profile for

    Returns:
        List[ProfileEntry]: Entries to write ahead of the existing sections
    """
    def entry(name: str) -> ProfileEntry:
        return ProfileEntry(_config_section(name), {"region": region, "output": OUTPUT_FORMAT})

    entries = [entry(profile_name)]
    if role_arn:
        entries.append(entry(assumed_profile_name(profile_name, role_arn)))
    if profile_name != DEFAULT_PROFILE and CONFIG_DEFAULT_SECTION not in existing:
        entries.append(entry(DEFAULT_PROFILE))
    return entries


def merge_profiles(existing: Sections, new_entries: Iterable[ProfileEntry],
                   prune_expired: bool, now: Optional[datetime] = None) -> Sections:
    """
    Merge new entries into the existing sections of a file.

    Args:
        existing: Sections read from the file, in file order
        new_entries: Entries to write first, in the given order
        prune_expired: Drop existing sections whose credentials have expired
        now: Reference time for expiry checks

    Returns:
        Sections: The merged file contents
    """
    merged: Sections = {}
    for new_entry in new_entries:
        merged[new_entry.name] = dict(new_entry.attributes)

    written = set(merged)
    for name, attributes in existing.items():
        if name in written:
            continue
        if prune_expired and is_expired(attributes, now):
            logger.info("Credentials for %s expired at %s. Removing this profile!",
                        name, attributes.get(EXPIRATION_KEY))
            continue
        merged[name] = dict(attributes)
    return merged


def render_profiles(sections: Sections) -> str:
    """Serialize sections as [name] headers with key = value lines."""
    lines = []
    for name, attributes in sections.items():
        lines.append(f"[{name}]")
        for key, value in attributes.items():
            lines.append(f"{key} = {value}")
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def rewrite(path: Union[str, Path], existing: Sections,
            new_entries: Iterable[ProfileEntry], prune_expired: bool,
            now: Optional[datetime] = None) -> None:
    """
    Replace a profile file with the merge of new entries and its old sections.

    Args:
        path: File to replace
        existing: Sections previously read from ``path``
        new_entries: Entries to write first
        prune_expired: Drop expired sections (credentials file only)
        now: Reference time for expiry checks

    Raises:
        OSError: If the file cannot be written
    """
    text = render_profiles(merge_profiles(existing, new_entries, prune_expired, now))
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())


def write_credentials_file(config, credential: Credential,
                           role_arn: Optional[str] = None,
                           device_arn: Optional[str] = None) -> List[ProfileEntry]:
    """
    Write a new credential into the credentials file.

    Args:
        config: ToolConfig for this run
        credential: Temporary credentials from STS
        role_arn: Optional role to create an assume-role profile for
        device_arn: MFA device ARN, used in the trust-policy guidance

    Returns:
        List[ProfileEntry]: The entries that were written
    """
    path = config.credentials_path
    entries = credentials_entries(credential, role_arn)
    rewrite(path, read_profiles(path), entries, prune_expired=True)

    print(credentials_saved_message(credential.profile_name, str(path),
                                    format_expiration(credential.expiration)))
    if role_arn:
        print(assumed_role_message(entries[-1].name, role_arn, device_arn))
    return entries


def write_config_file(config, profile_name: str, region: str,
                      role_arn: Optional[str] = None) -> List[ProfileEntry]:
    """
    Write region and output settings for a profile into the config file.

    Args:
        config: ToolConfig for this run
        profile_name: Base profile name
        region: AWS region
        role_arn: Optional role whose assume-role profile also needs settings

    Returns:
        List[ProfileEntry]: The entries that were written
    """
    path = config.config_path
    existing = read_profiles(path)
    entries = config_entries(profile_name, region, existing, role_arn)
    rewrite(path, existing, entries, prune_expired=False)
    return entries
