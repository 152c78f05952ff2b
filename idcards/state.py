"""
Per-visitor client state.

Everything the browser would hold in memory between interactions lives here:
the registration flow, the object URLs for picked images, the last fetched
student list and which student has the ID-card upload panel open. Only the
bearer token is durable; it lives in the signed session cookie (see
``idcards.session``).
"""
from __future__ import annotations

import logging
import secrets
import time
from typing import Callable, MutableMapping, Optional

from idcards.drafts import DraftForm, PreviewImages
from idcards.registration import RegistrationFlow
from idcards.schemas import CollegeInfo, StudentRecord

log = logging.getLogger(__name__)

CLIENT_ID_KEY = "client_id"


class ClientState:
    def __init__(self) -> None:
        self.previews = PreviewImages()
        self.registration = RegistrationFlow(DraftForm(self.previews))
        self.students: list[StudentRecord] = []
        self.college: Optional[CollegeInfo] = None
        self.upload_target: Optional[str] = None

    def new_registration(self) -> RegistrationFlow:
        """A fresh page load: the old draft and its preview are dropped."""
        self.registration.draft.reset()
        self.registration = RegistrationFlow(DraftForm(self.previews))
        return self.registration

    def cached_student(self, student_id: str) -> Optional[StudentRecord]:
        return next((s for s in self.students if s.id == student_id), None)

    def forget_admin_data(self) -> None:
        self.students = []
        self.upload_target = None

    def discard(self) -> None:
        """Release everything held for a visitor who has gone away."""
        self.registration.draft.reset()
        self.previews.clear()
        self.forget_admin_data()


class ClientStateStore:
    """Maps the visitor id kept in the session cookie to its ClientState.

    A visitor not seen for ``ttl`` seconds is dropped along with its draft
    photo and previews; a later request from it starts from a fresh state.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._states: dict[str, ClientState] = {}
        self._last_seen: dict[str, float] = {}

    def for_session(self, session: MutableMapping) -> ClientState:
        now = self._clock()
        self.evict_idle(now)
        client_id = session.get(CLIENT_ID_KEY)
        if not client_id or client_id not in self._states:
            client_id = client_id or secrets.token_urlsafe(16)
            session[CLIENT_ID_KEY] = client_id
            self._states[client_id] = ClientState()
        self._last_seen[client_id] = now
        return self._states[client_id]

    def evict_idle(self, now: Optional[float] = None) -> int:
        if not self.ttl:
            return 0
        if now is None:
            now = self._clock()
        idle = [cid for cid, seen in self._last_seen.items() if now - seen > self.ttl]
        for client_id in idle:
            del self._last_seen[client_id]
            self._states.pop(client_id).discard()
        if idle:
            log.debug("Dropped %d idle visitor(s)", len(idle))
        return len(idle)

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self):
        return iter(self._states.values())
