"""Authentication shared kernel module."""

from shared_kernel.auth.observability import (
    DefaultShopSessionProbe,
    ShopSessionProbe,
)
from shared_kernel.auth.shop_session import (
    InvalidSessionTokenError,
    ShopSession,
    ShopSessionValidator,
)

__all__ = [
    "InvalidSessionTokenError",
    "ShopSession",
    "ShopSessionValidator",
    "ShopSessionProbe",
    "DefaultShopSessionProbe",
]
