"""Cosmetic access gate: compares a password digest against a configured value.

This is not a security boundary. The expected digest and the session flag both
live on the client side of the app; the gate only keeps casual visitors out.
"""

from __future__ import annotations

import hashlib
from typing import MutableMapping, Optional

from src.core.errors import AccessUnavailableError

DEFAULT_SESSION_KEY = "expression_viewer_access"
DEFAULT_ALGORITHM = "sha256"


def hash_password(candidate: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    try:
        digest = hashlib.new(algorithm)
    except (ValueError, TypeError) as exc:
        raise AccessUnavailableError(f"El algoritmo de hash '{algorithm}' no está disponible.") from exc
    digest.update(candidate.encode("utf-8"))
    return digest.hexdigest()


class AccessGate:
    """Gate backed by a session key-value store (``st.session_state`` in the app)."""

    def __init__(
        self,
        expected_hash: Optional[str],
        session: MutableMapping[str, object],
        *,
        session_key: str = DEFAULT_SESSION_KEY,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self.expected_hash = (expected_hash or "").strip().lower() or None
        self.session = session
        self.session_key = session_key
        self.algorithm = algorithm

    @property
    def enabled(self) -> bool:
        return self.expected_hash is not None

    def is_granted(self) -> bool:
        if not self.enabled:
            return True
        return self.session.get(self.session_key) == self.expected_hash

    def unlock(self, candidate: str) -> bool:
        """Check a typed password; on success the session flag is set."""
        if not self.enabled:
            return True
        digest = hash_password((candidate or "").strip(), self.algorithm)
        if digest != self.expected_hash:
            return False
        self.session[self.session_key] = self.expected_hash
        return True

    def lock(self) -> None:
        self.session.pop(self.session_key, None)
