"""Helper utilities for MedLens."""

import re
from pathlib import Path


def truncate_text(text: str, max_length: int, marker: str = "") -> tuple[str, bool]:
    """Hard-cap text at max_length characters.

    Args:
        text: Text to truncate
        max_length: Maximum number of characters kept from text
        marker: Appended after the cut (not counted against max_length)

    Returns:
        Tuple of (possibly truncated text, whether truncation happened)
    """
    if len(text) <= max_length:
        return text, False
    return text[:max_length] + marker, True


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent path traversal and other issues."""
    filename = Path(filename or "").name
    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

    max_length = 255
    if len(filename) > max_length:
        name, ext = Path(filename).stem, Path(filename).suffix
        filename = name[: max_length - len(ext)] + ext

    if not filename or filename.startswith("."):
        filename = "document" + Path(filename).suffix

    return filename


def file_extension(filename: str) -> str:
    """Return the lowercased extension without the dot ('' if none)."""
    return Path(filename).suffix.lower().lstrip(".")


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
