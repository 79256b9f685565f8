from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import User, Address


class UserRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]: ...

    def get_by_email(self, email: str) -> Optional["User"]: ...

    def update(self, obj: "User", **data) -> "User": ...


class AddressRepositoryProtocol(Protocol):
    def list_for_user(self, user_id: int) -> Iterable["Address"]: ...

    def get(self, **filters) -> Optional["Address"]: ...

    def exists(self, **filters) -> bool: ...

    def create(self, **data) -> "Address": ...

    def update(self, obj: "Address", **data) -> "Address": ...

    def delete(self, obj: "Address") -> None: ...

    def clear_default(self, user_id: int, exclude_id: Optional[int] = None) -> int: ...

    def latest_for_user(
        self, user_id: int, exclude_id: Optional[int] = None
    ) -> Optional["Address"]: ...
