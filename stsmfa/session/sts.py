"""
Calls AWS STS GetSessionToken with the operator's permanent keys and MFA code.
"""

import logging
import boto3

from ..crypto import decrypt
from ..profiles.writer import Credential
from .defaults import DefaultsRecord

logger = logging.getLogger(__name__)


def get_session_token(defaults: DefaultsRecord, token_code: str, key: bytes) -> Credential:
    """
    Get temporary credentials for the profile named in ``defaults``.

    Args:
        defaults: Defaults record holding the encrypted permanent keys and device ARN
        token_code: Six digit code from the MFA device
        key: Encryption key for the defaults record

    Returns:
        Credential: Temporary credentials

    Raises:
        CipherError: If a stored secret cannot be decrypted
        botocore.exceptions.ClientError: If STS rejects the request
    """
    access_key_id = decrypt(defaults.access_key_id, key)
    secret_key = decrypt(defaults.secret_key, key)
    device_arn = decrypt(defaults.device_arn, key)

    client = boto3.client(
        "sts",
        region_name=defaults.region or None,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_key,
        aws_session_token=defaults.token or None,
    )
    logger.debug("Requesting session token for %s with device %s", defaults.profile_name, device_arn)
    response = client.get_session_token(
        SerialNumber=device_arn,
        TokenCode=token_code,
        DurationSeconds=defaults.duration_seconds,
    )
    credentials = response["Credentials"]
    return Credential(
        profile_name=defaults.profile_name,
        access_key_id=credentials["AccessKeyId"],
        secret_access_key=credentials["SecretAccessKey"],
        session_token=credentials["SessionToken"],
        expiration=credentials["Expiration"],
    )
