"""
URL Generator
=============
Embeds expiration and single-use policy into a URL and signs it.
"""

import time
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

import structlog

from ..exceptions import ReservedParameterError
from ..signature import (
    EXPIRES_AT_KEY,
    RESERVED_KEYS,
    SINGLE_USE_TOKEN_KEY,
    RequestParts,
    SignatureCodec,
    SingleUseToken,
    append_param,
    has_param,
)
from .expiration import Expiration, parse_expiration
from .routes import RouteResolver

logger = structlog.get_logger(__name__)


class UrlGenerator:
    """Produces signed URLs from raw URLs or named routes."""
    
    def __init__(
        self,
        codec: SignatureCodec,
        routes: Optional[RouteResolver] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.codec = codec
        self.routes = routes
        self.clock = clock
    
    def sign(
        self,
        url: str,
        expires: Optional[Expiration] = None,
        single_use_token: Optional[SingleUseToken] = None,
    ) -> str:
        """
        Sign a URL, embedding expiration and single-use token if given.
        
        Args:
            url: Fully rendered URL
            expires: When the URL stops being valid
            single_use_token: Token the URL is bound to
            
        Returns:
            Signed URL
            
        Raises:
            ReservedParameterError: If the URL already uses a reserved key
        """
        parts = RequestParts.from_url(url)
        for key in RESERVED_KEYS:
            if has_param(parts.query_string, key):
                raise ReservedParameterError(
                    f'"{key}" is a reserved query parameter.'
                )
        
        query = parts.query_string
        expires_at = None
        if expires is not None:
            expires_at = parse_expiration(expires, self.clock())
            query = append_param(query, EXPIRES_AT_KEY, str(expires_at))
        
        if single_use_token is not None:
            query = append_param(
                query, SINGLE_USE_TOKEN_KEY, self.codec.hash(single_use_token)
            )
        
        signed = self.codec.sign(parts.with_query(query).to_url())
        logger.debug(
            "signed_url_generated",
            path=parts.path,
            expires_at=expires_at,
            single_use=single_use_token is not None,
        )
        return signed
    
    def generate(
        self,
        name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        absolute: bool = False,
        expires: Optional[Expiration] = None,
        single_use_token: Optional[SingleUseToken] = None,
    ) -> str:
        """
        Render a named route and sign it.
        
        Args:
            name: Route name
            path_params: Values for the route's path placeholders
            query: Extra query parameters (reserved keys are rejected)
            absolute: Render scheme and host as well
            expires: When the URL stops being valid
            single_use_token: Token the URL is bound to
        """
        return self.sign(
            self.render_route(name, path_params, query, absolute),
            expires=expires,
            single_use_token=single_use_token,
        )
    
    def render_route(
        self,
        name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        absolute: bool = False,
    ) -> str:
        if self.routes is None:
            raise RuntimeError("No route resolver configured.")
        
        query = query or {}
        for key in RESERVED_KEYS:
            if key in query:
                raise ReservedParameterError(
                    f'"{key}" is a reserved query parameter.'
                )
        
        url = self.routes.url_for(name, absolute=absolute, **(path_params or {}))
        if query:
            url += ("&" if "?" in url else "?") + urlencode(query, doseq=True)
        return url
    
    def build(self, url: str) -> "SignedUrlBuilder":
        return SignedUrlBuilder(self, url)
    
    def build_route(
        self,
        name: str,
        query: Optional[Dict[str, Any]] = None,
        absolute: bool = False,
        **path_params: Any,
    ) -> "SignedUrlBuilder":
        return SignedUrlBuilder(
            self, self.render_route(name, path_params, query, absolute)
        )


class SignedUrlBuilder:
    """
    Fluent construction of a signed URL.
    
    Usage:
        url = signer.build(reset_url).expires("+1 hour").single_use(pw_hash).create()
    """
    
    def __init__(self, generator: UrlGenerator, url: str):
        self._generator = generator
        self._url = url
        self._expires: Optional[Expiration] = None
        self._single_use_token: Optional[SingleUseToken] = None
    
    def expires(self, when: Expiration) -> "SignedUrlBuilder":
        self._expires = when
        return self
    
    def single_use(self, token: SingleUseToken) -> "SignedUrlBuilder":
        self._single_use_token = token
        return self
    
    def create(self) -> str:
        return self._generator.sign(
            self._url,
            expires=self._expires,
            single_use_token=self._single_use_token,
        )
    
    def __str__(self) -> str:
        return self.create()
