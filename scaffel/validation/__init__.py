# scaffel/validation/__init__.py
"""Input validation and sanitization utilities."""

from .sanitize import sanitize_description, sanitize_feature_list, sanitize_output_dir, slugify

__all__ = [
    "sanitize_output_dir",
    "sanitize_description",
    "sanitize_feature_list",
    "slugify",
]
