from __future__ import annotations

import hashlib
import hmac
import secrets
import threading
import uuid
from datetime import datetime, timedelta, timezone

from trimflow.application.exceptions import AuthenticationError, ValidationError
from trimflow.application.ports.auth import AuthPort
from trimflow.domain.entities.operator import OperatorSession


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)


class MemoryAuthProvider(AuthPort):
    def __init__(self, session_ttl: timedelta = timedelta(hours=12)) -> None:
        self._users: dict[str, tuple[str, bytes, bytes]] = {}  # email -> (user_id, salt, hash)
        self._sessions: dict[str, OperatorSession] = {}
        self._session_ttl = session_ttl
        self._lock = threading.Lock()

    def sign_up(self, email: str, password: str) -> None:
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Email and password are required")
        salt = secrets.token_bytes(16)
        with self._lock:
            if email in self._users:
                raise ValidationError("User already registered")
            self._users[email] = (str(uuid.uuid4()), salt, _hash_password(password, salt))

    def sign_in(self, email: str, password: str) -> OperatorSession:
        email = (email or "").strip().lower()
        with self._lock:
            user = self._users.get(email)
        if user is None:
            raise AuthenticationError("Invalid login credentials")

        user_id, salt, expected = user
        if not hmac.compare_digest(expected, _hash_password(password or "", salt)):
            raise AuthenticationError("Invalid login credentials")

        session = OperatorSession(
            user_id=user_id,
            email=email,
            access_token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + self._session_ttl,
        )
        with self._lock:
            self._sessions[session.access_token] = session
        return session

    def sign_out(self, access_token: str) -> None:
        with self._lock:
            self._sessions.pop(access_token, None)

    def current_user(self, access_token: str) -> OperatorSession | None:
        with self._lock:
            session = self._sessions.get(access_token)
        if session is None:
            return None
        if session.is_expired(datetime.now(timezone.utc)):
            self.sign_out(access_token)
            return None
        return session
