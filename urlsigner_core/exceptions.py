"""
Signed URL Exceptions
=====================
Exception classes for signed URL generation and verification.
"""

from datetime import datetime


class InvalidUrlSignature(Exception):
    """Base class for every reason a signed URL is rejected."""
    
    def __init__(self, url: str, message: str = "Invalid URL signature."):
        super().__init__(message)
        self.url = url


class UrlSignatureMismatch(InvalidUrlSignature):
    """Raised when the signature is absent, malformed or does not match."""
    
    def __init__(self, url: str, message: str = "URL signature mismatch."):
        super().__init__(url, message)


class ExpiredUrl(InvalidUrlSignature):
    """Raised when a correctly signed URL is past its expiration."""
    
    def __init__(self, url: str, expires_at: datetime, message: str = "URL has expired."):
        super().__init__(url, message)
        self.expires_at = expires_at


class SingleUseUrlMismatch(InvalidUrlSignature):
    """Raised when issuer and verifier disagree on single-use."""
    pass


class SingleUseUrlAlreadyUsed(InvalidUrlSignature):
    """Raised when the live token no longer matches the embedded digest."""
    
    def __init__(self, url: str, message: str = "URL has already been used."):
        super().__init__(url, message)


class RequestUnavailableError(RuntimeError):
    """Raised when the current request is not available."""
    pass


class ReservedParameterError(ValueError):
    """Raised when caller parameters use a reserved query key."""
    pass


class ConfigurationError(ValueError):
    """Raised when the signer is misconfigured."""
    pass
