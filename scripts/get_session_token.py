#!/usr/bin/env python3
"""
AWS STS Session Token CLI

Requests MFA-backed temporary credentials from AWS STS and saves them into
~/.aws/credentials and ~/.aws/config. Remembered values live in a defaults
file whose secrets are encrypted with the key in AWS_STS_TOKEN_MFA_ENC_KEY.
"""

import argparse
import logging
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

# Add the parent directory to sys.path to import from stsmfa
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from stsmfa.config import ToolConfig
from stsmfa.crypto import reveal_secret
from stsmfa.errors import StsMfaError
from stsmfa.profiles import write_config_file, write_credentials_file
from stsmfa.session import (
    get_session_token,
    load_defaults,
    read_parameters,
    read_token_code,
    validate_role_arn,
    validate_token_code,
)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Get MFA-backed temporary AWS credentials and save them as a profile"
    )
    parser.add_argument("-t", "-token", "--token", dest="token",
                        help="6 digit token code from your MFA device")
    parser.add_argument("-r", "-role", "--role", dest="role",
                        help="Role ARN to create an assume-role profile for")
    parser.add_argument("-s", "-skip", "--skip", dest="skip", action="store_true",
                        help="Skip prompts and use the saved defaults")
    parser.add_argument("--allow-default-key", action="store_true",
                        help="Use the built-in encryption key when AWS_STS_TOKEN_MFA_ENC_KEY is not set")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def run(args):
    """Run one token request. Returns the process exit status."""
    token_code = validate_token_code(args.token) if args.token else None
    role_arn = validate_role_arn(args.role) if args.role else None

    config = ToolConfig.from_environment(allow_builtin_key=args.allow_default_key)
    config.ensure_directories()
    defaults = load_defaults(config)

    if not args.skip and not read_parameters(config, defaults):
        return 0

    token_code = read_token_code(token_code)
    credential = get_session_token(defaults, token_code, config.key)

    device_arn = reveal_secret(defaults.device_arn, config.key)
    write_credentials_file(config, credential, role_arn=role_arn, device_arn=device_arn)
    write_config_file(config, defaults.profile_name, defaults.region, role_arn=role_arn)
    return 0


def main():
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        status = run(args)
    except (StsMfaError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (ClientError, BotoCoreError) as e:
        print(f"Error requesting session token: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Error writing AWS files: {e}")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print("\nAborted")
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
