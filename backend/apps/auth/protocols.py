from __future__ import annotations

from typing import Any, Protocol


class UserRegistrationRepositoryProtocol(Protocol):
    def email_exists(self, email: str) -> bool: ...

    def create_user(self, **data: Any): ...
