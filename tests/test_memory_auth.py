from __future__ import annotations

from datetime import timedelta

import pytest

from trimflow.application.exceptions import AuthenticationError, ValidationError
from trimflow.infrastructure.auth.memory_auth import MemoryAuthProvider


def test_sign_up_sign_in_sign_out():
    auth = MemoryAuthProvider()
    auth.sign_up("Barber@Example.com", "hunter2")

    session = auth.sign_in("barber@example.com", "hunter2")
    assert session.email == "barber@example.com"
    assert auth.current_user(session.access_token) == session

    auth.sign_out(session.access_token)
    assert auth.current_user(session.access_token) is None


def test_bad_credentials():
    auth = MemoryAuthProvider()
    auth.sign_up("barber@example.com", "hunter2")

    with pytest.raises(AuthenticationError):
        auth.sign_in("barber@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        auth.sign_in("nobody@example.com", "hunter2")


def test_duplicate_or_empty_sign_up():
    auth = MemoryAuthProvider()
    auth.sign_up("barber@example.com", "hunter2")

    with pytest.raises(ValidationError):
        auth.sign_up("barber@example.com", "again")
    with pytest.raises(ValidationError):
        auth.sign_up("", "pw")


def test_expired_session_is_dropped():
    auth = MemoryAuthProvider(session_ttl=timedelta(seconds=-1))
    auth.sign_up("barber@example.com", "hunter2")
    session = auth.sign_in("barber@example.com", "hunter2")

    assert auth.current_user(session.access_token) is None
