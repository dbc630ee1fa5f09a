"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the stsmfa package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stsmfa.config import ToolConfig

TEST_KEY_HEX = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


@pytest.fixture
def key():
    """A fixed 32 byte encryption key."""
    return bytes.fromhex(TEST_KEY_HEX)


@pytest.fixture
def tool_config(tmp_path, key):
    """A ToolConfig whose files all live under tmp_path."""
    config = ToolConfig(tmp_path / ".aws", tmp_path / "config" / "defaults.json", key)
    config.ensure_directories()
    return config
