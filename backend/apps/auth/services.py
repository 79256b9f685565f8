from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.api.utils import ErrorTuple
from apps.common import get_logger
from .protocols import UserRegistrationRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", service="RegistrationService")


class RegistrationService:
    def __init__(self, users: UserRegistrationRepositoryProtocol):
        self.users = users
        self.logger = logger

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    def register(self, data: Dict[str, Any]) -> Union[Dict[str, Any], ErrorTuple]:
        email = self.normalize_email(data["email"])
        name = data["name"].strip()
        self.logger.debug("Received registration request", email=email)
        if self.users.email_exists(email):
            self.logger.info("Registration rejected: email already registered", email=email)
            return ("VALIDATION_ERROR", "Email already registered", {"email": email})
        user = self.users.create_user(email=email, password=data["password"], name=name)
        self.logger.info("User registered successfully", user_id=user.id, email=user.email)
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
        }


class SessionService:
    def __init__(self):
        self.logger = get_logger(__name__).bind(component="auth", service="SessionService")

    def logout(
        self, refresh_token: Optional[str], actor_id: Optional[int]
    ) -> Optional[Tuple[str, str, Optional[Dict[str, Any]]]]:
        if not refresh_token:
            self.logger.warning("Logout rejected: missing refresh token", actor_id=actor_id)
            return ("VALIDATION_ERROR", "Invalid token", {"refresh": None})
        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
        except TokenError as exc:
            self.logger.warning(
                "Logout failed: token error",
                actor_id=actor_id,
                error=str(exc),
            )
            return ("VALIDATION_ERROR", "Invalid token", {"error": str(exc)})
        self.logger.info("User logged out", actor_id=actor_id)
        return None
