from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError as DRFValidationError

from apps.api.utils import ErrorTuple
from apps.common import get_logger
from .dtos import AddressDTO, UserDTO, address_to_dto, user_to_dto
from .protocols import AddressRepositoryProtocol, UserRepositoryProtocol
from .serializers import AddressWriteSerializer, ProfileUpdateSerializer

logger = get_logger(__name__).bind(component="users", layer="service")

ADDRESS_FIELDS = (
    "full_name",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "postal_code",
    "phone_number",
)


def _user_not_found(user_id: int) -> ErrorTuple:
    return ("NOT_FOUND", "User not found", {"userId": str(user_id)})


def _address_not_found(address_id: int) -> ErrorTuple:
    return ("NOT_FOUND", "Address not found", {"addressId": str(address_id)})


class UserService:
    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="UserService")

    def get_profile(self, user_id: int) -> Tuple[Optional[UserDTO], Optional[ErrorTuple]]:
        self.logger.debug("Fetching profile", user_id=user_id)
        user = self.users.get(id=user_id)
        if not user:
            self.logger.info("Profile lookup failed: user not found", user_id=user_id)
            return None, _user_not_found(user_id)
        return user_to_dto(user), None

    def update_profile(
        self, user_id: int, data: Dict[str, Any]
    ) -> Tuple[Optional[UserDTO], Optional[ErrorTuple]]:
        """
        Update the display name and, when both passwords are supplied, the password.

        The current password must match before the new one is stored.
        """
        serializer = ProfileUpdateSerializer(data=data)
        try:
            serializer.is_valid(raise_exception=True)
        except DRFValidationError as exc:
            self.logger.warning(
                "Profile update validation failed", user_id=user_id, errors=exc.detail
            )
            return None, ("VALIDATION_ERROR", "Invalid input", exc.detail)
        payload = serializer.validated_data

        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("Profile update failed: user not found", user_id=user_id)
            return None, _user_not_found(user_id)

        current_password = payload.get("current_password")
        new_password = payload.get("new_password")
        if current_password and new_password:
            if not user.check_password(current_password):
                self.logger.warning(
                    "Profile update rejected: wrong current password", user_id=user_id
                )
                return (
                    None,
                    (
                        "VALIDATION_ERROR",
                        "Current password is incorrect",
                        {"currentPassword": "Current password is incorrect"},
                    ),
                )
            user.set_password(new_password)

        changes: Dict[str, Any] = {}
        if "name" in payload:
            changes["name"] = payload["name"].strip()
        user = self.users.update(user, **changes)
        self.logger.info(
            "Profile updated",
            user_id=user_id,
            name_changed="name" in changes,
            password_changed=bool(current_password and new_password),
        )
        return user_to_dto(user), None


class AddressService:
    def __init__(
        self, users: UserRepositoryProtocol, addresses: AddressRepositoryProtocol
    ):
        self.users = users
        self.addresses = addresses
        self.logger = logger.bind(service="AddressService")

    def _validate(
        self, data: Dict[str, Any], *, partial: bool
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ErrorTuple]]:
        serializer = AddressWriteSerializer(data=data, partial=partial)
        try:
            serializer.is_valid(raise_exception=True)
        except DRFValidationError as exc:
            self.logger.warning(
                "Address validation failed", partial=partial, errors=exc.detail
            )
            return None, ("VALIDATION_ERROR", "Invalid input", exc.detail)
        return dict(serializer.validated_data), None

    def list_addresses(
        self, user_id: int
    ) -> Tuple[Optional[List[AddressDTO]], Optional[ErrorTuple]]:
        self.logger.debug("Listing addresses", user_id=user_id)
        if not self.users.get(id=user_id):
            return None, _user_not_found(user_id)
        return [address_to_dto(a) for a in self.addresses.list_for_user(user_id)], None

    def get_address(
        self, user_id: int, address_id: int
    ) -> Tuple[Optional[AddressDTO], Optional[ErrorTuple]]:
        self.logger.debug("Fetching address", user_id=user_id, address_id=address_id)
        addr = self.addresses.get(id=address_id, user_id=user_id)
        if not addr:
            self.logger.info("Address not found", user_id=user_id, address_id=address_id)
            return None, _address_not_found(address_id)
        return address_to_dto(addr), None

    def create_address(
        self, user_id: int, data: Dict[str, Any]
    ) -> Tuple[Optional[AddressDTO], Optional[ErrorTuple]]:
        validated, error = self._validate(data, partial=False)
        if error:
            return None, error
        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("Address creation failed: user not found", user_id=user_id)
            return None, _user_not_found(user_id)

        wants_default = bool(validated.pop("is_default", False))
        with transaction.atomic():
            if wants_default:
                cleared = self.addresses.clear_default(user_id)
                self.logger.debug(
                    "Cleared previous default address", user_id=user_id, cleared=cleared
                )
            is_first = not self.addresses.exists(user_id=user_id)
            addr = self.addresses.create(
                user=user,
                is_default=wants_default or is_first,
                **{field: validated.get(field) for field in ADDRESS_FIELDS},
            )
        self.logger.info(
            "Address created",
            user_id=user_id,
            address_id=addr.id,
            is_default=addr.is_default,
        )
        return address_to_dto(addr), None

    def update_address(
        self, user_id: int, address_id: int, data: Dict[str, Any], *, partial: bool
    ) -> Tuple[Optional[AddressDTO], Optional[ErrorTuple]]:
        validated, error = self._validate(data, partial=partial)
        if error:
            return None, error
        addr = self.addresses.get(id=address_id, user_id=user_id)
        if not addr:
            self.logger.warning(
                "Address update failed: address not found",
                user_id=user_id,
                address_id=address_id,
            )
            return None, _address_not_found(address_id)

        changes = {field: validated[field] for field in ADDRESS_FIELDS if field in validated}
        with transaction.atomic():
            if "is_default" in validated:
                wants_default = bool(validated["is_default"])
                if wants_default:
                    self.addresses.clear_default(user_id, exclude_id=addr.id)
                elif addr.is_default:
                    # The user always keeps a default while any address remains.
                    successor = self.addresses.latest_for_user(user_id, exclude_id=addr.id)
                    if successor is None:
                        wants_default = True
                    else:
                        self.addresses.update(successor, is_default=True)
                        self.logger.debug(
                            "Default moved to latest address",
                            user_id=user_id,
                            address_id=successor.id,
                        )
                changes["is_default"] = wants_default
            addr = self.addresses.update(addr, **changes)
        self.logger.info(
            "Address updated",
            user_id=user_id,
            address_id=address_id,
            fields=sorted(changes.keys()),
        )
        return address_to_dto(addr), None

    def delete_address(
        self, user_id: int, address_id: int
    ) -> Tuple[bool, Optional[ErrorTuple]]:
        addr = self.addresses.get(id=address_id, user_id=user_id)
        if not addr:
            self.logger.warning(
                "Address deletion failed: address not found",
                user_id=user_id,
                address_id=address_id,
            )
            return False, _address_not_found(address_id)
        was_default = bool(addr.is_default)
        try:
            with transaction.atomic():
                self.addresses.delete(addr)
                promoted = None
                if was_default:
                    promoted = self.addresses.latest_for_user(user_id)
                    if promoted is not None:
                        self.addresses.update(promoted, is_default=True)
        except ProtectedError:
            self.logger.warning(
                "Address deletion blocked: referenced by orders",
                user_id=user_id,
                address_id=address_id,
            )
            return (
                False,
                (
                    "CONFLICT",
                    "Address is used by existing orders",
                    {"addressId": str(address_id)},
                ),
            )
        self.logger.info(
            "Address deleted",
            user_id=user_id,
            address_id=address_id,
            promoted_address_id=getattr(promoted, "id", None),
        )
        return True, None
