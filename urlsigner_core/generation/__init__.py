"""
Generation Module
=================
Build signed URLs from raw URLs or named routes.
"""

from .expiration import Expiration, parse_expiration
from .routes import RouteResolver, StarletteRouteResolver
from .generator import UrlGenerator, SignedUrlBuilder

__all__ = [
    # Expiration
    "Expiration",
    "parse_expiration",
    # Routes
    "RouteResolver",
    "StarletteRouteResolver",
    # Generator
    "UrlGenerator",
    "SignedUrlBuilder",
]
