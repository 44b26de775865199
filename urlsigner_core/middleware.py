"""
Signed URL Middleware
=====================
Route-level verification for Starlette and FastAPI applications.

Usage:
    signer = create_url_signer()
    
    app.add_middleware(
        SignedUrlMiddleware,
        signer=signer,
        signed_paths={"/downloads/report": True, "/reset": 404},
    )
    
    @app.get("/reset")
    async def reset(result: VerificationResult = Depends(require_signed_url(signer))):
        ...
"""

from typing import Callable, Dict, Optional, Union

from fastapi import HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
import structlog

from .context import current_request_var
from .engine import UrlSigner
from .signature import RequestParts, SingleUseToken
from .verification import VerificationResult

logger = structlog.get_logger(__name__)

# True selects the default failure status; an integer selects that status
SignedRoute = Union[bool, int]


def http_status(value: int) -> int:
    """
    Raises:
        ValueError: If `value` is not an HTTP status code
    """
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
        return value
    raise ValueError(f"Invalid HTTP status code: {value!r}")


def failure_status(signed: SignedRoute, default: int) -> int:
    """
    Resolve the status a rejected request to a signed path receives.
    
    Raises:
        ValueError: If `signed` is neither True nor an HTTP status code
    """
    if signed is True:
        return default
    return http_status(signed)


class SignedUrlMiddleware(BaseHTTPMiddleware):
    """
    Publishes the current request for `verify_current()` and, when route
    verification is enabled, rejects requests to signed paths whose
    signature or expiration does not check.
    
    Single-use tokens are left to the endpoint, which knows the caller's
    current token.
    """
    
    def __init__(
        self,
        app,
        signer: UrlSigner,
        signed_paths: Dict[str, SignedRoute] = None,
        route_verification: bool = None,
        default_status: int = None,
    ):
        super().__init__(app)
        self.signer = signer
        self.route_verification = (
            route_verification if route_verification is not None
            else signer.config.route_verification
        )
        self.default_status = http_status(
            default_status if default_status is not None
            else signer.config.failure_status
        )
        self.signed_paths = {
            path: failure_status(signed, self.default_status)
            for path, signed in (signed_paths or {}).items()
        }
    
    async def dispatch(self, request: Request, call_next):
        parts = RequestParts.from_scope(request.scope)
        token = current_request_var.set(parts)
        try:
            path = request.url.path
            status_code = self.signed_paths.get(path)
            
            if self.route_verification and status_code is not None:
                result = self.signer.verifier.verify_signature_and_expiration(parts)
                if not result:
                    return self._rejected_response(result, status_code, path)
            
            return await call_next(request)
        finally:
            current_request_var.reset(token)
    
    def _rejected_response(
        self, result: VerificationResult, status_code: int, path: str
    ) -> JSONResponse:
        logger.warning(
            "signed_url_rejected",
            path=path,
            kind=result.kind.value,
            status_code=status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "error": "invalid_signed_url",
                "message": result.reason,
                "code": result.kind.value.upper(),
            },
        )


def require_signed_url(
    signer: UrlSigner,
    status_code: int = 403,
    token_provider: Optional[Callable[[Request], Optional[SingleUseToken]]] = None,
) -> Callable[[Request], VerificationResult]:
    """
    Build a FastAPI dependency that requires a valid signed URL.
    
    Args:
        signer: Signer holding the shared secret
        status_code: Status raised on failure
        token_provider: Returns the caller's current single-use token for
            the request, if the route is single-use
    """
    
    def dependency(request: Request) -> VerificationResult:
        token = token_provider(request) if token_provider else None
        result = signer.verify(RequestParts.from_scope(request.scope), token)
        if not result:
            logger.warning(
                "signed_url_rejected",
                path=request.url.path,
                kind=result.kind.value,
                status_code=status_code,
            )
            raise HTTPException(
                status_code=status_code,
                detail={
                    "error": "invalid_signed_url",
                    "message": result.reason,
                    "code": result.kind.value.upper(),
                },
            )
        return result
    
    return dependency
