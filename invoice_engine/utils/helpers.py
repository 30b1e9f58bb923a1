"""
Helper Utilities Module.

This module provides small, generic helpers shared across the
invoice field engine.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - clean_line: Replace control characters and tidy spacing
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs")
        PosixPath('outputs')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.
    Returns empty string if no extension exists.

    Args:
        filepath: Path to the file.

    Returns:
        Lowercase file extension including dot (e.g., ".pdf").

    Example:
        >>> get_file_extension("document.PDF")
        ".pdf"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def clean_line(text: str) -> str:
    """
    Replace ASCII control characters with spaces and tidy double spaces.

    A single pass of double-space replacement is applied, so runs of
    three or more spaces shrink but may not fully collapse.

    Args:
        text: Raw text fragment.

    Returns:
        Cleaned, trimmed text.

    Example:
        >>> clean_line("Widget\\tA  ")
        "Widget A"
    """
    text = ''.join(' ' if (ord(ch) < 32 or ord(ch) == 127) else ch for ch in text)
    return text.replace('  ', ' ').strip()
