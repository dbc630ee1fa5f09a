"""
Operator-facing text printed after the credentials file is written.
"""

import textwrap
from typing import Optional

SEPARATOR = "=" * 50

TRUST_POLICY_TEMPLATE = textwrap.dedent("""
    "Statement": [
        {
            "Effect": "Allow",
            "Principal": {
                "AWS": "{{user_arn}}"
            },
            "Action": "sts:AssumeRole"
        },
        ...
    ]""")


def user_arn_from_device_arn(device_arn: str) -> str:
    """Turn arn:aws:iam::123:mfa/alice into arn:aws:iam::123:user/alice."""
    return device_arn.replace("mfa", "user", 1)


def credentials_saved_message(profile_name: str, path: str, expiration: str) -> str:
    """Confirmation shown once the credentials file has been rewritten."""
    return "\n".join([
        "",
        SEPARATOR,
        "",
        f"Credentials saved in profile [{profile_name}] in file {path}.",
        f"Token will expire at {expiration}",
        "",
        SEPARATOR,
    ])


def assumed_role_message(role_profile_name: str, role_arn: str,
                         device_arn: Optional[str]) -> str:
    """Guidance on the trust policy the target role needs."""
    user_arn = user_arn_from_device_arn(device_arn or "")
    lines = [
        f"A new profile [{role_profile_name}] which assumes role {role_arn} is created. "
        f"You can assume this role by appending '--profile {role_profile_name}' to cli commands.",
        f"Make sure that {user_arn} is authorized for sts:AssumeRole on {role_arn} "
        "and this role's trust relationship policy has:",
        TRUST_POLICY_TEMPLATE.replace("{{user_arn}}", user_arn, 1),
        SEPARATOR,
    ]
    return "\n".join(lines)
