import copy
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Iterable

from app.config import settings


class RecordExists(Exception):
    """Raised by `UserStore.create` when the key is already taken."""


class UserStore:
    """Keyed document store holding one user record per phone number."""

    def get(self, key: str) -> dict | None:
        raise NotImplementedError

    def create(self, key: str, data: dict) -> None:
        raise NotImplementedError

    def update(self, key: str, changes: dict, remove: Iterable[str] = ()) -> None:
        raise NotImplementedError

    def move(self, old_key: str, new_key: str, data: dict) -> None:
        """Create `data` under `new_key` and delete `old_key` as one unit."""
        raise NotImplementedError

    def server_timestamp(self):
        raise NotImplementedError


class InMemoryUserStore(UserStore):
    """Process-local store for development runs and tests."""

    def __init__(self):
        self._documents: dict[str, dict] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict | None:
        with self._lock:
            document = self._documents.get(key)
            return copy.deepcopy(document) if document is not None else None

    def create(self, key: str, data: dict) -> None:
        with self._lock:
            if key in self._documents:
                raise RecordExists(key)
            self._documents[key] = copy.deepcopy(data)

    def update(self, key: str, changes: dict, remove: Iterable[str] = ()) -> None:
        with self._lock:
            if key not in self._documents:
                raise KeyError(f"No document for {key}")
            document = self._documents[key]
            document.update(copy.deepcopy(changes))
            for field in remove:
                document.pop(field, None)

    def move(self, old_key: str, new_key: str, data: dict) -> None:
        with self._lock:
            if new_key in self._documents:
                raise RecordExists(new_key)
            self._documents[new_key] = copy.deepcopy(data)
            self._documents.pop(old_key, None)

    def server_timestamp(self):
        return datetime.now(timezone.utc)


@lru_cache
def get_user_store() -> UserStore:
    if settings.USER_STORE_BACKEND == "memory":
        return InMemoryUserStore()
    if settings.USER_STORE_BACKEND == "firestore":
        from app.services.firebase_service import FirestoreUserStore

        return FirestoreUserStore(settings.USERS_COLLECTION)
    raise RuntimeError(f"Unknown USER_STORE_BACKEND: {settings.USER_STORE_BACKEND}")
