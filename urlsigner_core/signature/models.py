"""
Signature Models
================
Request representation and reserved parameter names for signed URLs.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Union
from urllib.parse import quote, urlsplit

# Reserved query parameters (wire format)
SIGNATURE_KEY = "_hash"
EXPIRES_AT_KEY = "_expires"
SINGLE_USE_TOKEN_KEY = "_token"

RESERVED_KEYS = (SIGNATURE_KEY, EXPIRES_AT_KEY, SINGLE_USE_TOKEN_KEY)

# A literal token, or a zero-argument producer evaluated at the moment of use.
# Values that are not str are normalized to str before hashing.
SingleUseToken = Union[str, bytes, Callable[[], Union[str, bytes]]]


@dataclass(frozen=True)
class RequestParts:
    """
    The parts of a request a signature is computed over.
    
    `query_string` is the raw query exactly as received: never decoded,
    never reordered.
    """
    scheme: str = ""
    host: str = ""
    base_path: str = ""
    path: str = ""
    query_string: str = ""
    fragment: str = ""
    
    @classmethod
    def from_url(cls, url: str) -> "RequestParts":
        """Split a raw URL string (absolute or relative)."""
        parts = urlsplit(url)
        return cls(
            scheme=parts.scheme,
            host=parts.netloc,
            path=parts.path,
            query_string=parts.query,
            fragment=parts.fragment,
        )
    
    @classmethod
    def from_scope(cls, scope: Dict[str, Any]) -> "RequestParts":
        """
        Adapt an ASGI HTTP scope.
        
        `raw_path` holds the request target exactly as the server received
        it, so it already includes any mount prefix.
        """
        host = ""
        for key, value in scope.get("headers", []):
            if key == b"host":
                host = value.decode("latin-1")
                break
        if not host and scope.get("server"):
            server_host, port = scope["server"]
            host = f"{server_host}:{port}" if port else server_host
        
        raw_path = scope.get("raw_path")
        if raw_path:
            base_path = ""
            path = raw_path.decode("latin-1")
            # Some servers pass the query string along in raw_path
            path = path.split("?", 1)[0]
        else:
            base_path = quote(scope.get("root_path", ""))
            path = quote(scope.get("path", ""))
        
        return cls(
            scheme=scope.get("scheme", "http"),
            host=host,
            base_path=base_path,
            path=path,
            query_string=scope.get("query_string", b"").decode("latin-1"),
        )
    
    @property
    def origin(self) -> str:
        """scheme://host, or empty for a relative URL."""
        if not self.host:
            return ""
        if not self.scheme:
            return f"//{self.host}"
        return f"{self.scheme}://{self.host}"
    
    def with_query(self, query_string: str) -> "RequestParts":
        return RequestParts(
            scheme=self.scheme,
            host=self.host,
            base_path=self.base_path,
            path=self.path,
            query_string=query_string,
            fragment=self.fragment,
        )
    
    def canonical(self) -> str:
        """The exact string a signature covers (fragment excluded)."""
        url = f"{self.origin}{self.base_path}{self.path}"
        if self.query_string:
            url += "?" + self.query_string
        return url
    
    def to_url(self) -> str:
        url = self.canonical()
        if self.fragment:
            url += "#" + self.fragment
        return url
