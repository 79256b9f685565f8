from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model

from .protocols import UserRegistrationRepositoryProtocol


class DjangoUserRegistrationRepository(UserRegistrationRepositoryProtocol):
    def __init__(self) -> None:
        self.model = get_user_model()

    def email_exists(self, email: str) -> bool:
        return self.model.objects.filter(email__iexact=email).exists()

    def create_user(self, **data: Any):
        return self.model.objects.create_user(**data)
