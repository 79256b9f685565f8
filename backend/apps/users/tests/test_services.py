import types
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from django.db.models import ProtectedError

from apps.users.services import AddressService, UserService


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeUser:
    def __init__(self, user_id, name="Alice", password="Secret123"):
        self.id = user_id
        self.name = name
        self.email = f"user{user_id}@example.com"
        self.date_joined = BASE_TIME
        self._password = password

    def check_password(self, raw):
        return raw == self._password

    def set_password(self, raw):
        self._password = raw


class FakeUserRepository:
    def __init__(self, users=None):
        self.users = {u.id: u for u in (users or [])}

    def get(self, **filters):
        return self.users.get(filters.get("id"))

    def update(self, obj, **data):
        for key, value in data.items():
            setattr(obj, key, value)
        return obj


class FakeAddressRepository:
    def __init__(self):
        self.items = []
        self._next_id = 1
        self.protected_ids = set()

    def _for_user(self, user_id):
        return [a for a in self.items if a.user.id == user_id]

    def get(self, **filters):
        for addr in self.items:
            if addr.id == filters.get("id") and addr.user.id == filters.get("user_id"):
                return addr
        return None

    def exists(self, **filters):
        return bool(self._for_user(filters["user_id"]))

    def list_for_user(self, user_id):
        return sorted(
            self._for_user(user_id),
            key=lambda a: (not a.is_default, -a.created_at.timestamp(), -a.id),
        )

    def create(self, **data):
        addr = types.SimpleNamespace(
            id=self._next_id,
            created_at=BASE_TIME + timedelta(minutes=self._next_id),
            **data,
        )
        self._next_id += 1
        self.items.append(addr)
        return addr

    def update(self, obj, **data):
        for key, value in data.items():
            setattr(obj, key, value)
        return obj

    def clear_default(self, user_id, exclude_id=None):
        cleared = 0
        for addr in self._for_user(user_id):
            if addr.is_default and addr.id != exclude_id:
                addr.is_default = False
                cleared += 1
        return cleared

    def latest_for_user(self, user_id, exclude_id=None):
        remaining = sorted(
            (a for a in self._for_user(user_id) if a.id != exclude_id),
            key=lambda a: (a.created_at, a.id),
        )
        return remaining[-1] if remaining else None

    def delete(self, obj):
        if obj.id in self.protected_ids:
            raise ProtectedError("referenced by orders", [obj])
        self.items.remove(obj)


def address_payload(**overrides):
    payload = {
        "fullName": "Alice Example",
        "addressLine1": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "postalCode": "560001",
        "phoneNumber": "+91 98765 43210",
    }
    payload.update(overrides)
    return payload


class UserServiceTests(unittest.TestCase):
    def setUp(self):
        self.user = FakeUser(1)
        self.service = UserService(users=FakeUserRepository([self.user]))

    def test_get_profile(self):
        dto, error = self.service.get_profile(1)
        self.assertIsNone(error)
        self.assertEqual(dto.email, "user1@example.com")
        self.assertEqual(dto.date_joined, BASE_TIME.isoformat())

    def test_get_profile_missing_user(self):
        dto, error = self.service.get_profile(99)
        self.assertIsNone(dto)
        self.assertEqual(error[0], "NOT_FOUND")

    def test_update_name(self):
        dto, error = self.service.update_profile(1, {"name": "  Alicia "})
        self.assertIsNone(error)
        self.assertEqual(dto.name, "Alicia")

    def test_update_password_with_correct_current(self):
        _, error = self.service.update_profile(
            1, {"currentPassword": "Secret123", "newPassword": "Another456"}
        )
        self.assertIsNone(error)
        self.assertTrue(self.user.check_password("Another456"))

    def test_update_password_wrong_current(self):
        dto, error = self.service.update_profile(
            1, {"currentPassword": "Nope12345", "newPassword": "Another456"}
        )
        self.assertIsNone(dto)
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertIn("currentPassword", error[2])
        self.assertTrue(self.user.check_password("Secret123"))

    def test_update_password_requires_both_fields(self):
        _, error = self.service.update_profile(1, {"newPassword": "Another456"})
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertIn("currentPassword", error[2])

    def test_update_password_rejects_weak_password(self):
        _, error = self.service.update_profile(
            1, {"currentPassword": "Secret123", "newPassword": "short"}
        )
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertIn("newPassword", error[2])


class AddressServiceTests(unittest.TestCase):
    def setUp(self):
        self.user = FakeUser(1)
        self.other = FakeUser(2)
        self.addresses = FakeAddressRepository()
        self.service = AddressService(
            users=FakeUserRepository([self.user, self.other]), addresses=self.addresses
        )
        self.atomic_patcher = patch(
            "apps.users.services.transaction.atomic", new=DummyAtomic()
        )
        self.atomic_patcher.start()

    def tearDown(self):
        self.atomic_patcher.stop()

    def test_first_address_becomes_default(self):
        first, error = self.service.create_address(1, address_payload())
        self.assertIsNone(error)
        self.assertTrue(first.is_default)
        second, _ = self.service.create_address(1, address_payload(city="Mysuru"))
        self.assertFalse(second.is_default)

    def test_new_default_unmarks_previous(self):
        first, _ = self.service.create_address(1, address_payload())
        second, _ = self.service.create_address(1, address_payload(isDefault=True))
        self.assertTrue(second.is_default)
        listed, _ = self.service.list_addresses(1)
        self.assertEqual([a.id for a in listed if a.is_default], [second.id])
        self.assertEqual(listed[0].id, second.id)
        self.assertIn(first.id, [a.id for a in listed])

    def test_create_rejects_missing_fields(self):
        dto, error = self.service.create_address(1, {"fullName": "Alice"})
        self.assertIsNone(dto)
        self.assertEqual(error[0], "VALIDATION_ERROR")
        self.assertIn("addressLine1", error[2])
        self.assertEqual(self.addresses.items, [])

    def test_get_address_of_other_user_is_not_found(self):
        created, _ = self.service.create_address(1, address_payload())
        dto, error = self.service.get_address(2, created.id)
        self.assertIsNone(dto)
        self.assertEqual(error[0], "NOT_FOUND")

    def test_partial_update_to_default(self):
        self.service.create_address(1, address_payload())
        second, _ = self.service.create_address(1, address_payload(city="Mysuru"))
        dto, error = self.service.update_address(
            1, second.id, {"isDefault": True}, partial=True
        )
        self.assertIsNone(error)
        self.assertTrue(dto.is_default)
        self.assertEqual(sum(1 for a in self.addresses.items if a.is_default), 1)

    def test_undefaulting_default_promotes_latest_other(self):
        first, _ = self.service.create_address(1, address_payload())
        second, _ = self.service.create_address(1, address_payload(city="Mysuru"))
        third, _ = self.service.create_address(1, address_payload(city="Chennai"))
        dto, error = self.service.update_address(
            1, first.id, {"isDefault": False}, partial=True
        )
        self.assertIsNone(error)
        self.assertFalse(dto.is_default)
        defaults = [a.id for a in self.addresses.items if a.is_default]
        self.assertEqual(defaults, [third.id])
        self.assertNotIn(second.id, defaults)

    def test_only_address_stays_default(self):
        only, _ = self.service.create_address(1, address_payload())
        dto, error = self.service.update_address(
            1, only.id, {"isDefault": False}, partial=True
        )
        self.assertIsNone(error)
        self.assertTrue(dto.is_default)

    def test_undefaulting_non_default_leaves_default(self):
        first, _ = self.service.create_address(1, address_payload())
        second, _ = self.service.create_address(1, address_payload(city="Mysuru"))
        self.service.update_address(1, second.id, {"isDefault": False}, partial=True)
        defaults = [a.id for a in self.addresses.items if a.is_default]
        self.assertEqual(defaults, [first.id])

    def test_full_update_requires_all_fields(self):
        created, _ = self.service.create_address(1, address_payload())
        _, error = self.service.update_address(
            1, created.id, {"city": "Chennai"}, partial=False
        )
        self.assertEqual(error[0], "VALIDATION_ERROR")

    def test_delete_default_promotes_latest(self):
        first, _ = self.service.create_address(1, address_payload())
        second, _ = self.service.create_address(1, address_payload(city="Mysuru"))
        third, _ = self.service.create_address(1, address_payload(city="Chennai"))
        deleted, error = self.service.delete_address(1, first.id)
        self.assertTrue(deleted)
        self.assertIsNone(error)
        defaults = [a.id for a in self.addresses.items if a.is_default]
        self.assertEqual(defaults, [third.id])
        self.assertNotEqual(second.id, third.id)

    def test_delete_last_address(self):
        only, _ = self.service.create_address(1, address_payload())
        deleted, error = self.service.delete_address(1, only.id)
        self.assertTrue(deleted)
        self.assertIsNone(error)
        self.assertEqual(self.addresses.items, [])

    def test_delete_referenced_address_conflicts(self):
        created, _ = self.service.create_address(1, address_payload())
        self.addresses.protected_ids.add(created.id)
        deleted, error = self.service.delete_address(1, created.id)
        self.assertFalse(deleted)
        self.assertEqual(error[0], "CONFLICT")
        self.assertEqual(len(self.addresses.items), 1)

    def test_delete_missing_address(self):
        deleted, error = self.service.delete_address(1, 404)
        self.assertFalse(deleted)
        self.assertEqual(error[0], "NOT_FOUND")
