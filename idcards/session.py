from __future__ import annotations

from typing import MutableMapping, Optional

from idcards.config import settings
from idcards.state import ClientState


class SessionContext:
    """Who is looking at the site: an admin holding a bearer token, or the public.

    ``storage`` is the durable client storage (the signed session cookie).
    It is read once, when the context is built. A stored token is trusted
    as-is; a stale one only shows up as a failing API call.
    """

    def __init__(self, storage: MutableMapping, client: ClientState, key: str = settings.TOKEN_STORAGE_KEY):
        self._storage = storage
        self._client = client
        self._key = key
        self.token: Optional[str] = storage.get(key) or None

    @property
    def is_admin(self) -> bool:
        return self.token is not None

    def login(self, token: str) -> None:
        self._storage[self._key] = token
        self.token = token

    def logout(self) -> None:
        self._storage.pop(self._key, None)
        self.token = None
        self._client.forget_admin_data()
