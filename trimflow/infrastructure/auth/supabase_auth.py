from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from trimflow.application.exceptions import AuthenticationError, StoreError, ValidationError
from trimflow.application.ports.auth import AuthPort
from trimflow.core.config import settings
from trimflow.domain.entities.operator import OperatorSession


class SupabaseAuthProvider(AuthPort):
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_KEY
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

        if not self._base_url or not self._api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for Supabase auth")

    def sign_up(self, email: str, password: str) -> None:
        response = self._post("/auth/v1/signup", json={"email": email, "password": password})
        if response.status_code >= 400:
            raise ValidationError(_error_message(response))

    def sign_in(self, email: str, password: str) -> OperatorSession:
        response = self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code >= 500 or response.status_code == 429:
            message = _error_message(response)
            self._logger.error("Supabase sign-in failed", extra={"error": message})
            raise StoreError(f"Auth provider error: {message}")
        if response.status_code >= 400:
            raise AuthenticationError(_error_message(response))

        data = self._json(response)
        access_token = data.get("access_token")
        if not access_token:
            self._logger.error("Supabase sign-in returned no token", extra={"error": response.text})
            raise StoreError("Auth provider returned no access token")
        user = data.get("user") or {}
        expires_in = data.get("expires_in")
        return OperatorSession(
            user_id=str(user.get("id")),
            email=user.get("email") or email,
            access_token=access_token,
            expires_at=(
                datetime.now(timezone.utc) + timedelta(seconds=int(expires_in)) if expires_in else None
            ),
        )

    def sign_out(self, access_token: str) -> None:
        response = self._post("/auth/v1/logout", token=access_token)
        if response.status_code >= 400 and response.status_code != 401:
            self._logger.warning("Supabase sign-out failed", extra={"error": _error_message(response)})

    def current_user(self, access_token: str) -> OperatorSession | None:
        try:
            response = self._client.get(f"{self._base_url}/auth/v1/user", headers=self._headers(access_token))
        except httpx.HTTPError as e:
            self._logger.error("Supabase auth unavailable", extra={"error": str(e)})
            raise StoreError(f"Auth provider unavailable: {e}") from e
        if response.status_code in (401, 403):
            return None
        if response.status_code >= 400:
            message = _error_message(response)
            self._logger.error("Supabase session lookup failed", extra={"error": message})
            raise StoreError(f"Auth provider error: {message}")
        user = self._json(response)
        return OperatorSession(user_id=str(user.get("id")), email=user.get("email") or "", access_token=access_token)

    def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        token: str | None = None,
    ) -> httpx.Response:
        try:
            return self._client.post(
                f"{self._base_url}{path}",
                params=params,
                json=json,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            self._logger.error("Supabase auth unavailable", extra={"error": str(e)})
            raise StoreError(f"Auth provider unavailable: {e}") from e

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            self._logger.error("Supabase auth returned invalid JSON", extra={"error": str(e)})
            raise StoreError("Auth provider returned an invalid response") from e
        if not isinstance(data, dict):
            raise StoreError("Auth provider returned an invalid response")
        return data

    def _headers(self, token: str | None) -> dict[str, str]:
        return {"apikey": self._api_key, "Authorization": f"Bearer {token or self._api_key}"}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    return body.get("error_description") or body.get("msg") or body.get("message") or response.text
