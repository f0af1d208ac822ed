"""
Shared module for user data loading.

Each user is stored as <USERS_DIR>/<name>.json with the personal details printed
on the certificate:

    {"firstName": "...", "lastName": "...", "privateNumber": "...", "idNumber": "..."}
"""

import json
import os
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from config import USERS_DIR

# Type aliases for clarity
UserDict = Dict[str, Any]

USER_FIELDS = ("firstName", "lastName", "privateNumber", "idNumber")

# User names map directly to file names
_USER_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class UserNotFoundError(RuntimeError):
    """Raised when no user record exists for a requested name."""


def _user_path(name: str, users_dir: str) -> str:
    if not _USER_NAME_RE.match(name) or name.startswith("."):
        raise UserNotFoundError(f"Invalid user name: {name!r}")
    return os.path.join(users_dir, f"{name}.json")


@lru_cache(maxsize=64)
def _load_user_cached(name: str, users_dir: str) -> Optional[tuple]:
    """
    Load a user record from disk.

    Returns a tuple of (key, value) pairs (hashable for lru_cache), or None if
    the file does not exist.
    """
    path = _user_path(name, users_dir)
    if not os.path.isfile(path):
        return None

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Numbers may be stored as JSON ints; the certificate prints strings
    return tuple((key, str(data.get(key, ""))) for key in USER_FIELDS)


def load_user(name: str, users_dir: Optional[str] = None) -> UserDict:
    """
    Get a user's certificate details.

    Args:
        name: User name (file name without .json)
        users_dir: Directory of user files (default: config.USERS_DIR)

    Returns:
        Dict with keys: firstName, lastName, privateNumber, idNumber

    Raises:
        UserNotFoundError: If the user file does not exist
    """
    if users_dir is None:
        users_dir = USERS_DIR

    record = _load_user_cached(name, users_dir)
    if record is None:
        raise UserNotFoundError(f"User data not found: {name}")
    return dict(record)


def list_users(users_dir: Optional[str] = None) -> List[str]:
    """Names of all users with a record in users_dir, sorted."""
    if users_dir is None:
        users_dir = USERS_DIR
    if not os.path.isdir(users_dir):
        return []
    return sorted(
        os.path.splitext(f)[0]
        for f in os.listdir(users_dir)
        if f.endswith(".json")
    )


def user_from_fields(data: Dict[str, Any]) -> UserDict:
    """Build a user dict from inline values (missing fields become empty strings)."""
    return {key: "" if data.get(key) is None else str(data.get(key)) for key in USER_FIELDS}


def clear_user_cache() -> None:
    """Clear the user cache. Useful for testing."""
    _load_user_cached.cache_clear()
