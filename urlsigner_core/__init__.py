"""
URL Signer Core
===============
Tamper-evident, optionally expiring, optionally single-use URLs.
"""

__version__ = "0.1.0"

# Signature
from urlsigner_core.signature import (
    RequestParts,
    SignatureCodec,
    SingleUseToken,
    normalize_token,
    SIGNATURE_KEY,
    EXPIRES_AT_KEY,
    SINGLE_USE_TOKEN_KEY,
)

# Verification
from urlsigner_core.verification import (
    FailureKind,
    VerificationResult,
    UrlVerifier,
)

# Generation
from urlsigner_core.generation import (
    UrlGenerator,
    SignedUrlBuilder,
    RouteResolver,
    StarletteRouteResolver,
    parse_expiration,
)

# Engine
from urlsigner_core.engine import UrlSigner, create_url_signer

# Config
from urlsigner_core.config import SignerConfig

# Context
from urlsigner_core.context import current_request, current_request_var

# Exceptions
from urlsigner_core.exceptions import (
    InvalidUrlSignature,
    UrlSignatureMismatch,
    ExpiredUrl,
    SingleUseUrlMismatch,
    SingleUseUrlAlreadyUsed,
    RequestUnavailableError,
    ReservedParameterError,
    ConfigurationError,
)

# Middleware
from urlsigner_core.middleware import SignedUrlMiddleware, require_signed_url

__all__ = [
    # Signature
    "RequestParts",
    "SignatureCodec",
    "SingleUseToken",
    "normalize_token",
    "SIGNATURE_KEY",
    "EXPIRES_AT_KEY",
    "SINGLE_USE_TOKEN_KEY",
    # Verification
    "FailureKind",
    "VerificationResult",
    "UrlVerifier",
    # Generation
    "UrlGenerator",
    "SignedUrlBuilder",
    "RouteResolver",
    "StarletteRouteResolver",
    "parse_expiration",
    # Engine
    "UrlSigner",
    "create_url_signer",
    # Config
    "SignerConfig",
    # Context
    "current_request",
    "current_request_var",
    # Exceptions
    "InvalidUrlSignature",
    "UrlSignatureMismatch",
    "ExpiredUrl",
    "SingleUseUrlMismatch",
    "SingleUseUrlAlreadyUsed",
    "RequestUnavailableError",
    "ReservedParameterError",
    "ConfigurationError",
    # Middleware
    "SignedUrlMiddleware",
    "require_signed_url",
]
