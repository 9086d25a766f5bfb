"""
hackathon_web.sessions.state

Per-request session state.

Responsibilities:
- Behave as the mutable dict exposed as `request.session`.
- Track whether the bag changed, whether it is new, and whether its id must rotate.
"""

from __future__ import annotations

import json
from typing import Any

from hackathon_web.sessions.tokens import new_session_id


def _fingerprint(data: dict[str, Any]) -> str:
    return json.dumps(data, sort_keys=True, default=str)


class SessionState(dict):
    """
    Session bag loaded from (or about to be written to) the session store.

    Change detection compares a JSON fingerprint taken at load time, so nested
    mutations (e.g. draining a flash list) count as modifications.
    """

    def __init__(
        self,
        session_id: str,
        data: dict[str, Any] | None = None,
        *,
        is_new: bool = False,
    ) -> None:
        super().__init__(data or {})
        self.session_id = session_id
        self.is_new = is_new
        self.previous_id: str | None = None
        self._fingerprint = _fingerprint(self)

    @classmethod
    def create(cls) -> SessionState:
        return cls(new_session_id(), is_new=True)

    @property
    def modified(self) -> bool:
        return _fingerprint(self) != self._fingerprint

    @property
    def rotated(self) -> bool:
        return self.previous_id is not None

    def regenerate(self) -> None:
        """
        Move this bag to a fresh session id. Contents are kept; the old record is
        destroyed and a new cookie issued when the response is sent.
        """

        if self.previous_id is None and not self.is_new:
            self.previous_id = self.session_id
        self.session_id = new_session_id()


# --- Module Notes -----------------------------------------------------------
# Regenerating a brand-new session only swaps its id: there is no stored record to
# destroy and a cookie is issued for it anyway.
