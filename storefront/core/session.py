"""Cart session management"""

import uuid
import logging
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

from ..database.carts import CartStore
from ..database.storage import KeyValueStorage

logger = logging.getLogger(__name__)


@dataclass
class CartSession:
    """Browser session owning one cart"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    cart: CartStore

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class CartSessionManager:
    """
    Hands out one CartStore per session.

    The store for a session is loaded from storage once, when the
    session is first seen by this process.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str = "atlantic-leather-cart"):
        self.storage = storage
        self.storage_key = storage_key
        self.sessions: dict[str, CartSession] = {}

    def _cart_key(self, session_id: str) -> str:
        return f"{self.storage_key}:{session_id}"

    def create_session(self, session_id: Optional[str] = None) -> CartSession:
        """Create a session and rehydrate its cart from storage"""
        now = datetime.utcnow()
        session_id = session_id or str(uuid.uuid4())
        cart = CartStore(self.storage, self._cart_key(session_id))
        cart.load()
        session = CartSession(
            session_id=session_id,
            created_at=now,
            updated_at=now,
            cart=cart,
        )
        self.sessions[session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[CartSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str] = None) -> CartSession:
        """
        Get existing session or create new one.

        A well-formed id that this process has not seen yet may still have
        a persisted cart (file storage across restarts), so it is reused.
        """
        if session_id and session_id in self.sessions:
            session = self.sessions[session_id]
            session.touch()
            return session
        if session_id and _is_valid_session_id(session_id):
            return self.create_session(session_id)
        return self.create_session()

    def delete(self, session_id: str) -> bool:
        """Delete a session and its persisted cart"""
        session = self.sessions.pop(session_id, None)
        self.storage.remove_item(self._cart_key(session_id))
        return session is not None

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Forget in-memory sessions idle for longer than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        if old_sessions:
            logger.info(f"Dropped {len(old_sessions)} idle cart sessions")
        return len(old_sessions)


def _is_valid_session_id(session_id: str) -> bool:
    try:
        uuid.UUID(session_id)
    except ValueError:
        return False
    return True
