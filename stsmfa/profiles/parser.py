"""
Reader for the INI-like AWS credentials and config files.

The reader is lenient on purpose: lines it does not understand are dropped
instead of raising, so a hand-edited file never stops a refresh.
"""

from pathlib import Path
from typing import Dict, Optional, Union

Sections = Dict[str, Dict[str, str]]


def parse_profiles(raw_text: str) -> Sections:
    """
    Parse profile file text into an ordered mapping.

    Args:
        raw_text: Contents of a credentials or config file

    Returns:
        Sections: Section name -> {key: value}, in file order
    """
    sections: Sections = {}
    current: Optional[str] = None

    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith("[") and line.endswith("]"):
            current = line[1:-1]
            sections[current] = {}
            continue

        if current is None:
            continue

        index = line.find("=")
        if index < 1:
            continue
        sections[current][line[:index].strip()] = line[index + 1:].strip()

    return sections


def read_profiles(path: Union[str, Path]) -> Sections:
    """
    Read and parse a profile file.

    Args:
        path: File to read

    Returns:
        Sections: Parsed sections, or an empty mapping if the file does not exist
    """
    path = Path(path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return parse_profiles(f.read())
