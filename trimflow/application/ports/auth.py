from __future__ import annotations

from abc import ABC, abstractmethod

from trimflow.domain.entities.operator import OperatorSession


class AuthPort(ABC):
    @abstractmethod
    def sign_up(self, email: str, password: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def sign_in(self, email: str, password: str) -> OperatorSession:
        """Raises AuthenticationError on bad credentials."""
        raise NotImplementedError

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def current_user(self, access_token: str) -> OperatorSession | None:
        """
        Resolve an access token to its session. Returns None if unknown or expired.
        Raises StoreError when the provider itself fails.
        """
        raise NotImplementedError
