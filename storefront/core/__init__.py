# Core modules

from .config import settings, get_settings
from .session import CartSessionManager, CartSession

__all__ = ["settings", "get_settings", "CartSessionManager", "CartSession"]
