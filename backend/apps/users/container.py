from __future__ import annotations

from .repositories import UserRepository, AddressRepository
from .services import AddressService, UserService


def build_user_service() -> UserService:
    return UserService(users=UserRepository())


def build_address_service() -> AddressService:
    return AddressService(
        users=UserRepository(),
        addresses=AddressRepository(),
    )
