"""
Client session - the signed-in user's token and profile.

Lives in the LocalStore under "token" and "user" so it survives restarts.
Started by login/register, cleared by logout. Passed to the API client
explicitly rather than read from a global.
"""

from typing import Optional

from campusnav.client.local_store import LocalStore

TOKEN_KEY = "token"
USER_KEY = "user"


class ClientSession:
    def __init__(self, store: LocalStore):
        self.store = store

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY)

    @property
    def user(self) -> Optional[dict]:
        return self.store.get(USER_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def start(self, token: str, user: dict) -> None:
        self.store.set(TOKEN_KEY, token)
        self.store.set(USER_KEY, user)

    def clear(self) -> None:
        """Logout. The schedule draft is left alone."""
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)

    def auth_headers(self) -> dict:
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}
