"""
accountkit-token
Account Kit access-token authentication for FastAPI applications
"""

__version__ = "0.1.0"

from .auth import AccountKitAuth, AccountKitTokenStrategy, StrategyOptions, TokenRequest
from .config import Settings

__all__ = [
    "AccountKitAuth",
    "AccountKitTokenStrategy",
    "Settings",
    "StrategyOptions",
    "TokenRequest",
    "__version__",
]
