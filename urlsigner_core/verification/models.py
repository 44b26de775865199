"""
Verification Models
===================
Result type for signed URL verification.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..exceptions import (
    ExpiredUrl,
    SingleUseUrlAlreadyUsed,
    SingleUseUrlMismatch,
    UrlSignatureMismatch,
)


class FailureKind(str, Enum):
    """Reasons a signed URL is rejected."""
    SIGNATURE_MISMATCH = "signature_mismatch"
    EXPIRED = "expired"
    SINGLE_USE_MISMATCH = "single_use_mismatch"
    SINGLE_USE_REPLAYED = "single_use_replayed"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying a URL: success, or exactly one failure kind."""
    url: str
    kind: Optional[FailureKind] = None
    reason: Optional[str] = None
    expires_at: Optional[datetime] = None
    
    @classmethod
    def success(cls, url: str) -> "VerificationResult":
        return cls(url=url)
    
    @classmethod
    def failure(
        cls,
        url: str,
        kind: FailureKind,
        reason: str,
        expires_at: Optional[datetime] = None,
    ) -> "VerificationResult":
        return cls(url=url, kind=kind, reason=reason, expires_at=expires_at)
    
    @property
    def ok(self) -> bool:
        return self.kind is None
    
    def __bool__(self) -> bool:
        return self.ok
    
    def raise_for_failure(self) -> None:
        """
        Raise the exception matching this failure; no-op on success.
        
        Raises:
            UrlSignatureMismatch, ExpiredUrl, SingleUseUrlMismatch,
            SingleUseUrlAlreadyUsed
        """
        if self.kind is None:
            return
        if self.kind is FailureKind.SIGNATURE_MISMATCH:
            raise UrlSignatureMismatch(self.url, self.reason)
        if self.kind is FailureKind.EXPIRED:
            raise ExpiredUrl(self.url, self.expires_at, self.reason)
        if self.kind is FailureKind.SINGLE_USE_MISMATCH:
            raise SingleUseUrlMismatch(self.url, self.reason)
        raise SingleUseUrlAlreadyUsed(self.url, self.reason)
