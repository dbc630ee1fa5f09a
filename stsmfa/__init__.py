"""
stsmfa - obtain MFA-backed AWS session credentials and keep the local
AWS credentials and config files in order.
"""

__version__ = "0.1.0"
