"""
In-memory session cache.

Sessions hold live objects (the onboarding wizard with its background tasks,
the simulator), so they stay in process memory rather than a shared cache.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SessionCache:
    def __init__(self) -> None:
        # session_id -> data
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def set_session(self, session_id: str, data: Dict[str, Any]) -> None:
        self._sessions[session_id] = dict(data)

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        return self._sessions.get(session_id)

    def update_session(self, session_id: str, updates: Dict[str, Any]) -> None:
        if session_id not in self._sessions:
            return
        self._sessions[session_id].update(updates)

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def ping(self) -> bool:
        return True
