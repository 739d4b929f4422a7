import os
import logging
from typing import Iterable

import firebase_admin
from firebase_admin import auth, credentials, firestore
from google.api_core.exceptions import AlreadyExists

from app.config import settings
from app.database import RecordExists, UserStore

logger = logging.getLogger(__name__)

FIREBASE_CREDENTIALS_FILE = settings.FIREBASE_CREDENTIALS_FILE

firebase_app = None
if FIREBASE_CREDENTIALS_FILE and os.path.exists(FIREBASE_CREDENTIALS_FILE):
    cred = credentials.Certificate(FIREBASE_CREDENTIALS_FILE)
    firebase_app = firebase_admin.initialize_app(cred)
    logger.info("Firebase app initialized using %s", FIREBASE_CREDENTIALS_FILE)
else:
    logger.warning("Firebase credentials not configured. Firestore and custom tokens disabled.")


def _require_app():
    if not firebase_app:
        raise RuntimeError("Firebase app is not configured. Set FIREBASE_CREDENTIALS_FILE env.")
    return firebase_app


class FirestoreUserStore(UserStore):
    """User documents in a Firestore collection, document id = phone number."""

    def __init__(self, collection: str = "users"):
        self.collection_name = collection
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = firestore.client(app=_require_app())
        return self._client

    def _ref(self, key: str):
        return self.client.collection(self.collection_name).document(key)

    def get(self, key: str) -> dict | None:
        snapshot = self._ref(key).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def create(self, key: str, data: dict) -> None:
        try:
            self._ref(key).create(data)
        except AlreadyExists as exc:
            raise RecordExists(key) from exc

    def update(self, key: str, changes: dict, remove: Iterable[str] = ()) -> None:
        payload = dict(changes)
        for field in remove:
            payload[field] = firestore.DELETE_FIELD
        self._ref(key).update(payload)

    def move(self, old_key: str, new_key: str, data: dict) -> None:
        # create() fails the whole batch if new_key was taken after the caller's check
        batch = self.client.batch()
        batch.create(self._ref(new_key), data)
        batch.delete(self._ref(old_key))
        try:
            batch.commit()
        except AlreadyExists as exc:
            raise RecordExists(new_key) from exc
        logger.info("Moved user document %s -> %s", old_key, new_key)

    def server_timestamp(self):
        return firestore.SERVER_TIMESTAMP


class FirebaseTokenService:
    """Mints Firebase custom tokens bound to the phone number uid."""

    def issue(self, phone_number: str) -> str:
        token = auth.create_custom_token(phone_number, app=_require_app())
        if isinstance(token, bytes):
            token = token.decode("utf-8")
        return token
