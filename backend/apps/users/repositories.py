from typing import Optional

from apps.common.repository import GenericRepository
from .models import User, Address


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.model.objects.filter(email__iexact=email).first()

    def create_user(self, **data) -> User:
        return User.objects.create_user(**data)


class AddressRepository(GenericRepository[Address]):
    def __init__(self):
        super().__init__(Address)

    def list_for_user(self, user_id: int):
        return self.list(
            user_id=user_id, order_by=("-is_default", "-created_at", "-id")
        )

    def clear_default(self, user_id: int, exclude_id: Optional[int] = None) -> int:
        qs = self.model.objects.filter(user_id=user_id, is_default=True)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return qs.update(is_default=False)

    def latest_for_user(
        self, user_id: int, exclude_id: Optional[int] = None
    ) -> Optional[Address]:
        qs = self.model.objects.filter(user_id=user_id)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return qs.order_by("-created_at", "-id").first()
