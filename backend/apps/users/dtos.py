from dataclasses import dataclass
from typing import Optional

from .models import User, Address


@dataclass
class AddressDTO:
    id: int
    full_name: str
    address_line1: str
    address_line2: Optional[str]
    city: str
    state: str
    postal_code: str
    phone_number: str
    is_default: bool
    created_at: Optional[str]


@dataclass
class UserDTO:
    id: int
    name: str
    email: str
    date_joined: Optional[str]


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    try:
        return value.isoformat()
    except AttributeError:
        return str(value)


def address_to_dto(a: Address) -> AddressDTO:
    return AddressDTO(
        id=a.id,
        full_name=a.full_name,
        address_line1=a.address_line1,
        address_line2=a.address_line2 or None,
        city=a.city,
        state=a.state,
        postal_code=a.postal_code,
        phone_number=a.phone_number,
        is_default=bool(a.is_default),
        created_at=_iso(getattr(a, "created_at", None)),
    )


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        name=u.name or "",
        email=u.email,
        date_joined=_iso(getattr(u, "date_joined", None)),
    )
