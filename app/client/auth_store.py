import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

from app.client.config import client_settings

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    id: int
    email: str
    name: str


@dataclass
class AuthState:
    user: Optional[AuthUser] = None
    token: Optional[str] = None
    is_authenticated: bool = False
    is_loading: bool = False
    error: Optional[str] = None


class AuthStore:
    """Holds the signed-in user and token; persists them to a JSON file.

    Only ``user``, ``token`` and ``is_authenticated`` survive a restart.
    Pass ``storage_path=None`` to keep the state in memory only.
    """

    def __init__(self, storage_path: Optional[str | Path] = client_settings.AUTH_STORAGE_PATH):
        self.storage_path = Path(storage_path) if storage_path else None
        self.state = AuthState()
        self._restore()

    def _restore(self) -> None:
        if not self.storage_path or not self.storage_path.exists():
            return
        try:
            data = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable auth storage %s: %s", self.storage_path, e)
            return
        user = data.get("user")
        self.state.user = AuthUser(**user) if user else None
        self.state.token = data.get("token")
        self.state.is_authenticated = bool(data.get("is_authenticated"))

    def _persist(self) -> None:
        if not self.storage_path:
            return
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "user": asdict(self.state.user) if self.state.user else None,
            "token": self.state.token,
            "is_authenticated": self.state.is_authenticated,
        }
        self.storage_path.write_text(json.dumps(data), encoding="utf-8")

    def set_user(self, user: Optional[AuthUser]) -> None:
        self.state.user = user
        self.state.is_authenticated = user is not None
        self._persist()

    def set_token(self, token: Optional[str]) -> None:
        self.state.token = token
        self._persist()

    def set_is_loading(self, is_loading: bool) -> None:
        self.state.is_loading = is_loading

    def set_error(self, error: Optional[str]) -> None:
        self.state.error = error

    def login(self, user: AuthUser, token: str) -> None:
        self.state.user = user
        self.state.token = token
        self.state.is_authenticated = True
        self.state.error = None
        self._persist()

    def logout(self) -> None:
        self.state.user = None
        self.state.token = None
        self.state.is_authenticated = False
        self._persist()
