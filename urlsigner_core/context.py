"""
Request Context
===============
Holds the request currently being served so it can be verified without
passing it around.
"""

from contextvars import ContextVar
from typing import Optional

from .exceptions import RequestUnavailableError
from .signature import RequestParts

current_request_var: ContextVar[Optional[RequestParts]] = ContextVar(
    "current_signed_url_request", default=None
)


def current_request() -> RequestParts:
    """
    Get the request in flight.
    
    Raises:
        RequestUnavailableError: If no request is being served
    """
    request = current_request_var.get()
    if request is None:
        raise RequestUnavailableError("Current request not available.")
    return request
