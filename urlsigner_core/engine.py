"""
URL Signer
==========
One shared secret wired into a generator and a verifier.

Usage:
    signer = create_url_signer()
    
    url = signer.sign("https://example.com/reset?id=42", expires="+1 hour",
                      single_use_token=user.password_hash)
    
    result = signer.verify(url, single_use_token=user.password_hash)
    if not result:
        ...

Rotating the secret invalidates every URL issued with the old one.
"""

import time
from typing import Any, Callable, Dict, Optional, Union

import structlog

from .config import SignerConfig
from .exceptions import ConfigurationError
from .generation import Expiration, RouteResolver, SignedUrlBuilder, UrlGenerator
from .signature import RequestParts, SignatureCodec, SingleUseToken
from .verification import UrlVerifier, VerificationResult

logger = structlog.get_logger(__name__)


class UrlSigner:
    """Signs and verifies URLs. Stateless and safe to share across threads."""
    
    def __init__(
        self,
        secret: Union[str, bytes],
        routes: Optional[RouteResolver] = None,
        clock: Callable[[], float] = time.time,
        config: Optional[SignerConfig] = None,
    ):
        self.config = config if config is not None else SignerConfig(secret=secret)
        self.codec = SignatureCodec(secret)
        self.generator = UrlGenerator(self.codec, routes=routes, clock=clock)
        self.verifier = UrlVerifier(self.codec, clock=clock)
    
    def sign(
        self,
        url: str,
        expires: Optional[Expiration] = None,
        single_use_token: Optional[SingleUseToken] = None,
    ) -> str:
        return self.generator.sign(url, expires=expires, single_use_token=single_use_token)
    
    def generate(
        self,
        name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        absolute: bool = False,
        expires: Optional[Expiration] = None,
        single_use_token: Optional[SingleUseToken] = None,
    ) -> str:
        return self.generator.generate(
            name,
            path_params=path_params,
            query=query,
            absolute=absolute,
            expires=expires,
            single_use_token=single_use_token,
        )
    
    def build(self, url: str) -> SignedUrlBuilder:
        return self.generator.build(url)
    
    def verify(
        self,
        url: Union[str, RequestParts],
        single_use_token: Optional[SingleUseToken] = None,
    ) -> VerificationResult:
        return self.verifier.verify(url, single_use_token)
    
    def is_verified(
        self,
        url: Union[str, RequestParts],
        single_use_token: Optional[SingleUseToken] = None,
    ) -> bool:
        return self.verifier.is_verified(url, single_use_token)
    
    def verify_current(
        self, single_use_token: Optional[SingleUseToken] = None
    ) -> VerificationResult:
        return self.verifier.verify_current(single_use_token)
    
    def is_current_request_verified(
        self, single_use_token: Optional[SingleUseToken] = None
    ) -> bool:
        return self.verifier.is_current_request_verified(single_use_token)
    
    def hash(self, token: SingleUseToken) -> str:
        return self.codec.hash(token)


def create_url_signer(
    config: Optional[SignerConfig] = None,
    routes: Optional[RouteResolver] = None,
) -> UrlSigner:
    """
    Create a signer from configuration.
    
    Args:
        config: Signer configuration (defaults to environment)
        routes: Optional route resolver for named-route generation
        
    Raises:
        ConfigurationError: If no secret is configured
    """
    config = config or SignerConfig.from_env()
    if not config.secret:
        raise ConfigurationError("URL_SIGNER_SECRET is not configured")
    
    logger.info(
        "url_signer_created",
        route_verification=config.route_verification,
        routes=routes is not None,
    )
    return UrlSigner(config.secret, routes=routes, config=config)
