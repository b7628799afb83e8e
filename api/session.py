"""Signed session tokens and the in-memory table registry."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from blackjack_core.game import BlackjackTable
from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


class TableRegistry:
    """
    Process-local map from session to table.

    Tables are keyed by the raw session ID; callers only ever see the signed
    token, so a forged or tampered token never reaches a table.
    """

    def __init__(self, signer: SessionSigner | None = None, ttl: int | None = None) -> None:
        self._signer = signer or SessionSigner()
        self._ttl = ttl or config.session_ttl
        self._tables: dict[str, tuple[BlackjackTable, datetime]] = {}

    def create(self, table: BlackjackTable) -> str:
        """Register a table and return its signed session token."""
        session_id = str(uuid4())
        self._tables[session_id] = (table, self._expiry())
        logger.info("Session %s opened", session_id)
        return self._signer.sign(session_id)

    def replace(self, token: str, table: BlackjackTable) -> bool:
        """Swap the table behind an existing session."""
        session_id = self._resolve(token)
        if session_id is None:
            return False
        self._tables[session_id] = (table, self._expiry())
        return True

    def get(self, token: str) -> BlackjackTable | None:
        """Look up the table for a token, refreshing its expiry."""
        session_id = self._resolve(token)
        if session_id is None:
            return None
        table, _ = self._tables[session_id]
        self._tables[session_id] = (table, self._expiry())
        return table

    def delete(self, token: str) -> None:
        session_id = self._signer.unsign(token, max_age=self._ttl)
        if session_id is not None:
            self._tables.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._tables.items() if expiry < now]
        for sid in expired:
            del self._tables[sid]
        if expired:
            logger.debug("Dropped %d expired session(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._tables)

    def _resolve(self, token: str) -> str | None:
        session_id = self._signer.unsign(token, max_age=self._ttl)
        if session_id is None or session_id not in self._tables:
            return None
        _, expiry = self._tables[session_id]
        if expiry < datetime.now():
            del self._tables[session_id]
            return None
        return session_id

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)


# Global registry instance
_registry: TableRegistry | None = None


def get_registry() -> TableRegistry:
    """Get or create the table registry."""
    global _registry
    if _registry is None:
        _registry = TableRegistry()
    return _registry
