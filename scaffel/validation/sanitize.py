# scaffel/validation/sanitize.py
"""
Input sanitization and validation utilities.

Resolves output locations and cleans free-text input from the CLI.
"""

import logging
import re
from pathlib import Path

from scaffel.errors import FileSystemError, ValidationError

logger = logging.getLogger(__name__)


def sanitize_output_dir(user_path: str) -> Path:
    """
    Sanitize and prepare the output directory.

    Resolves to an absolute path and creates it (with parents) if missing.

    Args:
        user_path: User-provided path string

    Returns:
        Resolved absolute Path object

    Raises:
        FileSystemError: If the path is invalid, is a file, or cannot be created
    """
    try:
        resolved = Path(user_path).expanduser().resolve()
    except (ValueError, OSError) as e:
        raise FileSystemError(f"Invalid path '{user_path}': {e}", user_path) from e

    if resolved.exists() and not resolved.is_dir():
        raise FileSystemError(f"Path is not a directory: {resolved}", str(resolved))

    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Cannot create directory {resolved}: {e}", str(resolved)) from e

    logger.debug(f"Sanitized output directory: {resolved}")
    return resolved


def sanitize_description(text: str | None, max_length: int = 5000) -> str | None:
    """
    Strip a description and cap its length.

    Blank input becomes None; overly long input is truncated with a warning.
    """
    if text is None:
        return None

    cleaned = text.strip()
    if not cleaned:
        return None

    if len(cleaned) > max_length:
        logger.warning(
            f"Description truncated from {len(cleaned)} to {max_length} characters"
        )
        cleaned = cleaned[:max_length]

    return cleaned


def sanitize_feature_list(raw: str) -> list[str]:
    """
    Split a comma-separated feature list into clean names.

    Raises:
        ValidationError: If the list contains no names at all
    """
    names = [part.strip() for part in raw.split(",")]
    names = [name for name in names if name]
    if not names:
        raise ValidationError("Feature list is empty", [f"No feature names in '{raw}'"])
    return names


def slugify(value: str, fallback: str = "feature") -> str:
    """
    Reduce ``value`` to a filename-safe slug.

    Lowercases, replaces every character outside ``[a-z0-9-]`` with ``-``
    and collapses runs of dashes. Returns ``fallback`` if nothing is left.
    """
    slug = re.sub(r"[^a-z0-9-]", "-", value.lower())
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug or fallback
