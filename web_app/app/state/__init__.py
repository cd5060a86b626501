"""Estado compartido de la aplicación."""

from __future__ import annotations

from .session import ViewerSessionState

__all__ = ["ViewerSessionState"]
