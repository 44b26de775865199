"""
Raw Query Helpers
=================
Operate on query strings pair by pair without re-serializing them, so the
bytes that were signed are the bytes that are checked.
"""

from typing import List, Optional, Tuple
from urllib.parse import quote, unquote_plus


def split_pairs(query_string: str) -> List[str]:
    """Split a raw query into its `key=value` pairs, dropping empty ones."""
    return [pair for pair in query_string.split("&") if pair]


def pair_key(pair: str) -> str:
    return unquote_plus(pair.split("=", 1)[0])


def pair_value(pair: str) -> str:
    if "=" not in pair:
        return ""
    return unquote_plus(pair.split("=", 1)[1])


def extract_param(query_string: str, key: str) -> Tuple[List[str], str]:
    """
    Pull every occurrence of `key` out of a raw query.
    
    Returns:
        Tuple of (values, remaining_query) where remaining_query keeps the
        other segments, empty ones included, in their original order and
        encoding.
    """
    values = []
    remaining = []
    for pair in query_string.split("&") if query_string else []:
        if pair_key(pair) == key:
            values.append(pair_value(pair))
        else:
            remaining.append(pair)
    return values, "&".join(remaining)


def get_param(query_string: str, key: str) -> Optional[str]:
    """Last value of `key`, or None if absent."""
    values, _ = extract_param(query_string, key)
    return values[-1] if values else None


def has_param(query_string: str, key: str) -> bool:
    return any(pair_key(pair) == key for pair in split_pairs(query_string))


def append_param(query_string: str, key: str, value: str) -> str:
    """Append `key=value` (percent-encoded) after the existing pairs."""
    pair = f"{quote(key, safe='')}={quote(value, safe='')}"
    if not query_string:
        return pair
    return f"{query_string}&{pair}"
