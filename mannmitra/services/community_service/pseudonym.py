"""Pseudonym Generator: stable anonymous display names for community posts.

    name = ADJECTIVES[|h| % 8] + NOUNS[|h >> 4| % 8] + str(|h| % 100)

where h is a 32-bit signed rolling hash (h = h * 31 + code unit) over the
identifier's UTF-16 code units. Cosmetic only: names collide freely and
are not an identity boundary. Log correlation uses hash_pii() instead.
"""
from typing import Tuple

ADJECTIVES: Tuple[str, ...] = ("Kind", "Brave", "Gentle", "Strong", "Wise", "Calm", "Bright", "Warm")
NOUNS: Tuple[str, ...] = ("Friend", "Heart", "Soul", "Spirit", "Voice", "Light", "Hope", "Star")

_UINT32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - 0x100000000 if value & 0x80000000 else value


def rolling_hash(stable_id: str) -> int:
    """32-bit signed polynomial hash over UTF-16 code units."""
    encoded = stable_id.encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32(h * 31 + code_unit)
    return h


def pseudonymize(stable_id: str) -> str:
    """Deterministic display name for a stable user identifier.

    Raises:
        TypeError: If stable_id is not a string
    """
    if not isinstance(stable_id, str):
        raise TypeError(f"stable_id must be str, got {type(stable_id).__name__}")

    h = rolling_hash(stable_id)
    adjective = ADJECTIVES[abs(h) % len(ADJECTIVES)]
    noun = NOUNS[abs(h >> 4) % len(NOUNS)]
    return f"{adjective}{noun}{abs(h) % 100}"
