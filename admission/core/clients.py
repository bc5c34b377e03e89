"""Client identifier helpers.

Recognized clients are configured as a comma-separated list. Identifiers are
treated as opaque keys; this module only parses them and derives a short,
non-reversible fingerprint for logs.
"""

from __future__ import annotations

import hashlib


def parse_client_ids(ids_string: str | None) -> set[str]:
    """Parse comma-separated client identifiers into a set.

    Args:
        ids_string: Comma-separated string of client ids, or None.

    Returns:
        Set of trimmed, non-empty client ids.

    Examples:
        >>> sorted(parse_client_ids("client1,client2"))
        ['client1', 'client2']
        >>> sorted(parse_client_ids(" client1 , client2 ,"))
        ['client1', 'client2']
        >>> parse_client_ids(None)
        set()
    """
    if not ids_string:
        return set()

    return {client_id.strip() for client_id in ids_string.split(",") if client_id.strip()}


def hash_client_id(client_id: str) -> str:
    """Hash a client id for logging without exposing it."""
    return hashlib.sha256(client_id.encode()).hexdigest()[:16]
