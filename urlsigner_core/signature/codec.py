"""
Signature Codec
===============
HMAC-SHA256 signing and checking of canonical URLs.

Any change to the scheme, host, path or query of a signed URL invalidates
its signature. Checking always works on the raw query string as received.
"""

import base64
import hmac
from typing import Union

from .models import RequestParts, SIGNATURE_KEY, SingleUseToken
from .query import append_param, extract_param

SIGNATURE_ALGORITHM = "sha256"


def normalize_token(token: SingleUseToken) -> str:
    """
    Resolve a single-use token to its string form.
    
    A producer is invoked exactly once; bytes are decoded as UTF-8 and any
    other value is converted with str().
    """
    value = token() if callable(token) else token
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="surrogateescape")
    return str(value)


class SignatureCodec:
    """Computes and checks keyed digests with one shared secret."""
    
    def __init__(self, secret: Union[str, bytes]):
        if not secret:
            raise ValueError("Signing secret cannot be empty")
        self._secret = secret.encode() if isinstance(secret, str) else bytes(secret)
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(secret=***)"
    
    def digest(self, message: str) -> str:
        """
        Compute base64(HMAC-SHA256(secret, message)).
        
        Args:
            message: String to authenticate
            
        Returns:
            Standard base64 encoded digest
        """
        mac = hmac.new(
            self._secret, message.encode(errors="surrogateescape"), SIGNATURE_ALGORITHM
        ).digest()
        return base64.b64encode(mac).decode()
    
    def sign(self, url: str) -> str:
        """
        Sign a fully assembled URL.
        
        Any existing signature parameter is dropped first; the new one is
        appended as the last query parameter.
        
        Args:
            url: Absolute or relative URL
            
        Returns:
            The URL with its signature parameter
        """
        parts = RequestParts.from_url(url)
        _, query = extract_param(parts.query_string, SIGNATURE_KEY)
        unsigned = parts.with_query(query)
        signature = self.digest(unsigned.canonical())
        return unsigned.with_query(
            append_param(query, SIGNATURE_KEY, signature)
        ).to_url()
    
    def check(self, url: Union[str, RequestParts]) -> bool:
        """
        Check the signature embedded in a URL or request.
        
        Returns:
            True if exactly one signature is present and matches
        """
        parts = url if isinstance(url, RequestParts) else RequestParts.from_url(url)
        signatures, query = extract_param(parts.query_string, SIGNATURE_KEY)
        if len(signatures) != 1 or not signatures[0]:
            return False
        
        expected = self.digest(parts.with_query(query).canonical())
        return hmac.compare_digest(
            expected.encode(),
            signatures[0].encode("utf-8", errors="replace"),
        )
    
    def hash(self, token: SingleUseToken) -> str:
        """base64(HMAC-SHA256(secret, token)) for a single-use token."""
        return self.digest(normalize_token(token))
