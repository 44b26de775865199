"""
URL Verifier
============
Checks a signed URL's signature, then its expiration, then its single-use
token. The first failing check decides the result.
"""

import hmac
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple, Union

from ..context import current_request
from ..signature import (
    EXPIRES_AT_KEY,
    SINGLE_USE_TOKEN_KEY,
    RequestParts,
    SignatureCodec,
    SingleUseToken,
    get_param,
)
from .models import FailureKind, VerificationResult

SINGLE_USE_NOT_SUPPLIED = "URL is single-use but no token was supplied."
SINGLE_USE_NOT_CARRIED = "Caller expected a single-use URL but it carries none."
SIGNATURE_MISMATCH = "URL signature mismatch."
URL_EXPIRED = "URL has expired."
URL_ALREADY_USED = "URL has already been used."


def parse_expires(value: Optional[str]) -> int:
    """Read `_expires` as an integer; anything unparseable counts as 0."""
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


class UrlVerifier:
    """Verifies signed URLs without any stored state."""
    
    def __init__(
        self,
        codec: SignatureCodec,
        clock: Callable[[], float] = time.time,
        request_provider: Callable[[], RequestParts] = current_request,
    ):
        self.codec = codec
        self.clock = clock
        self.request_provider = request_provider
    
    def verify(
        self,
        url: Union[str, RequestParts],
        single_use_token: Optional[SingleUseToken] = None,
    ) -> VerificationResult:
        """
        Verify a URL or request.
        
        Args:
            url: Raw URL string or parsed request parts
            single_use_token: The caller's current token, if the URL is
                expected to be single-use
            
        Returns:
            VerificationResult, failed with the first check that did not pass
        """
        parts, display = self._parse(url)
        result = self._check_signature_and_expiration(parts, display)
        if not result:
            return result
        
        embedded = get_param(parts.query_string, SINGLE_USE_TOKEN_KEY)
        has_embedded = bool(embedded)
        has_provided = single_use_token not in (None, "", b"")
        
        if not has_embedded and not has_provided:
            return VerificationResult.success(display)
        
        if has_embedded and not has_provided:
            return VerificationResult.failure(
                display, FailureKind.SINGLE_USE_MISMATCH, SINGLE_USE_NOT_SUPPLIED
            )
        
        if not has_embedded:
            return VerificationResult.failure(
                display, FailureKind.SINGLE_USE_MISMATCH, SINGLE_USE_NOT_CARRIED
            )
        
        expected = self.codec.hash(single_use_token)
        if not hmac.compare_digest(
            expected.encode(), embedded.encode("utf-8", errors="replace")
        ):
            return VerificationResult.failure(
                display, FailureKind.SINGLE_USE_REPLAYED, URL_ALREADY_USED
            )
        
        return VerificationResult.success(display)
    
    def verify_signature_and_expiration(
        self, url: Union[str, RequestParts]
    ) -> VerificationResult:
        """
        Check only the signature and expiration, leaving any single-use
        token to a later `verify()` by whoever holds the current token.
        """
        return self._check_signature_and_expiration(*self._parse(url))
    
    def _parse(self, url: Union[str, RequestParts]) -> Tuple[RequestParts, str]:
        if isinstance(url, RequestParts):
            return url, url.to_url()
        return RequestParts.from_url(url), url
    
    def _check_signature_and_expiration(
        self, parts: RequestParts, display: str
    ) -> VerificationResult:
        if not self.codec.check(parts):
            return VerificationResult.failure(
                display, FailureKind.SIGNATURE_MISMATCH, SIGNATURE_MISMATCH
            )
        
        expires = parse_expires(get_param(parts.query_string, EXPIRES_AT_KEY))
        if expires and self.clock() > expires:
            return VerificationResult.failure(
                display,
                FailureKind.EXPIRED,
                URL_EXPIRED,
                expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
            )
        
        return VerificationResult.success(display)
    
    def is_verified(
        self,
        url: Union[str, RequestParts],
        single_use_token: Optional[SingleUseToken] = None,
    ) -> bool:
        return self.verify(url, single_use_token).ok
    
    def verify_current(
        self, single_use_token: Optional[SingleUseToken] = None
    ) -> VerificationResult:
        """
        Verify the request currently being served.
        
        Raises:
            RequestUnavailableError: If no request is being served
        """
        return self.verify(self.request_provider(), single_use_token)
    
    def is_current_request_verified(
        self, single_use_token: Optional[SingleUseToken] = None
    ) -> bool:
        """
        Raises:
            RequestUnavailableError: If no request is being served
        """
        return self.verify_current(single_use_token).ok
