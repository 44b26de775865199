"""
Signature Module
================
Keyed-hash signatures over canonical URLs and single-use token digests.
"""

from .models import (
    RequestParts,
    SingleUseToken,
    SIGNATURE_KEY,
    EXPIRES_AT_KEY,
    SINGLE_USE_TOKEN_KEY,
    RESERVED_KEYS,
)
from .codec import SignatureCodec, normalize_token, SIGNATURE_ALGORITHM
from .query import append_param, extract_param, get_param, has_param

__all__ = [
    # Models
    "RequestParts",
    "SingleUseToken",
    "SIGNATURE_KEY",
    "EXPIRES_AT_KEY",
    "SINGLE_USE_TOKEN_KEY",
    "RESERVED_KEYS",
    # Codec
    "SignatureCodec",
    "normalize_token",
    "SIGNATURE_ALGORITHM",
    # Query helpers
    "append_param",
    "extract_param",
    "get_param",
    "has_param",
]
