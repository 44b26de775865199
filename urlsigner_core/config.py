"""
Signer Configuration
====================
Configuration constants and environment variables.
"""

import os
from dataclasses import dataclass, field

TRUTHY_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY_VALUES


# Configuration from environment
SIGNER_SECRET = os.getenv("URL_SIGNER_SECRET", "")
ROUTE_VERIFICATION = _env_flag("URL_SIGNER_ROUTE_VERIFICATION")
FAILURE_STATUS = int(os.getenv("URL_SIGNER_FAILURE_STATUS", "403"))


@dataclass
class SignerConfig:
    """Configuration for the URL signer."""
    secret: str = field(default=SIGNER_SECRET, repr=False)
    route_verification: bool = ROUTE_VERIFICATION
    failure_status: int = FAILURE_STATUS
    
    @classmethod
    def from_env(cls) -> "SignerConfig":
        """Read configuration from the current environment."""
        return cls(
            secret=os.getenv("URL_SIGNER_SECRET", ""),
            route_verification=_env_flag("URL_SIGNER_ROUTE_VERIFICATION"),
            failure_status=int(os.getenv("URL_SIGNER_FAILURE_STATUS", "403")),
        )
