"""
File Storage Value Objects

Filename sanitization and storage locator helpers.
"""

import re

_PARENT_DIR = re.compile(r"\.\.")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """
    Make a client-supplied filename safe to embed in a path or object key.

    Each '..' collapses to a single '_', then every character outside
    [A-Za-z0-9._-] becomes '_'. The result never contains '..' or a path
    separator, e.g. "../../../etc/passwd" -> "______etc_passwd".
    """
    return _UNSAFE_CHARS.sub("_", _PARENT_DIR.sub("_", filename))


def local_file_name(file_id: str, filename: str) -> str:
    """Collision-resistant on-disk name: '<id>_<sanitized filename>'."""
    return f"{file_id}_{sanitize_filename(filename)}"


def object_key(file_id: str, filename: str) -> str:
    """Remote object key: '<id>/<sanitized filename>'."""
    return f"{file_id}/{sanitize_filename(filename)}"
