"""
Verification Module
===================
Signature, expiration and single-use checks for signed URLs.
"""

from .models import FailureKind, VerificationResult
from .verifier import UrlVerifier, parse_expires

__all__ = [
    "FailureKind",
    "VerificationResult",
    "UrlVerifier",
    "parse_expires",
]
