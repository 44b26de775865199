"""
Route Resolution
================
Adapters that turn a route name and parameters into a URL.
"""

from typing import Any, Optional, Protocol


class RouteResolver(Protocol):
    """Anything that can render a named route to a path."""
    
    def url_for(self, name: str, absolute: bool = False, **path_params: Any) -> str:
        ...


class StarletteRouteResolver:
    """
    Resolve routes through a Starlette (or FastAPI) router.
    
    Usage:
        resolver = StarletteRouteResolver(app, base_url="https://example.com")
        resolver.url_for("reset_password", user_id=42, absolute=True)
    """
    
    def __init__(self, router: Any, base_url: Optional[str] = None):
        self.router = router
        self.base_url = base_url
    
    def url_for(self, name: str, absolute: bool = False, **path_params: Any) -> str:
        url_path = self.router.url_path_for(name, **path_params)
        if absolute:
            if not self.base_url:
                raise ValueError("base_url is required for absolute URLs")
            return str(url_path.make_absolute_url(self.base_url))
        return str(url_path)
