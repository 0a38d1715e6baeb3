"""In-process session store with signed session tokens."""

from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

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


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class InMemorySessionStore:
    """
    Session data kept in process memory with a per-entry expiry.

    One entry holds one player's game; nothing outlives the process.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    def create_session_id(self, signed: bool = True) -> str:
        """Create a new session ID, signed unless ``signed`` is False."""
        session_id = str(uuid4())
        if signed:
            return get_session_signer().sign(session_id)
        return session_id

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data, dropping it if expired."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        data, expiry = entry
        if expiry < datetime.now():
            await self.delete(session_id)
            return None
        return data

    async def set(
        self,
        session_id: str,
        data: dict[str, Any],
        ttl: int | None = None,
    ) -> None:
        """Set session data."""
        ttl = ttl or config.session_ttl
        self._sessions[session_id] = (data, datetime.now() + timedelta(seconds=ttl))

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        self._sessions.pop(session_id, None)

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> list[str]:
        """Remove expired sessions and return their IDs."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        return expired


# Global session store instance
_session_store: InMemorySessionStore | None = None


async def get_session_store() -> InMemorySessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


async def create_session(data: dict[str, Any] | None = None) -> str:
    """Create a new session."""
    store = await get_session_store()
    session_id = store.create_session_id()
    await store.set(session_id, data or {})
    return session_id


async def get_session(session_id: str) -> dict[str, Any] | None:
    """Get session data."""
    store = await get_session_store()
    return await store.get(session_id)


async def update_session(session_id: str, data: dict[str, Any]) -> None:
    """Update session data."""
    store = await get_session_store()
    await store.set(session_id, data)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)
