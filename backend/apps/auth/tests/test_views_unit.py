import types
import unittest
from unittest.mock import Mock, patch

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.test import APIRequestFactory, force_authenticate
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.auth.serializers import (
    CustomerTokenObtainPairSerializer,
    RegisterRequestSerializer,
)
from apps.auth.views import LogoutView, MeView, RegisterView


class RegisterViewUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.payload = {"name": "Alice", "email": "alice@example.com", "password": "Secret123"}

    def test_register_success(self):
        service = Mock()
        service.register.return_value = {"id": 5, "name": "Alice", "email": "alice@example.com"}
        request = self.factory.post("/api/auth/register/", self.payload, format="json")
        with patch.object(RegisterView, "service", service):
            response = RegisterView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["id"], 5)
        service.register.assert_called_once()

    def test_register_service_error(self):
        service = Mock()
        service.register.return_value = (
            "VALIDATION_ERROR",
            "Email already registered",
            {"email": "alice@example.com"},
        )
        request = self.factory.post("/api/auth/register/", self.payload, format="json")
        with patch.object(RegisterView, "service", service):
            response = RegisterView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")

    def test_register_invalid_payload_skips_service(self):
        service = Mock()
        request = self.factory.post(
            "/api/auth/register/", {"name": " ", "email": "bad", "password": "x"}, format="json"
        )
        with patch.object(RegisterView, "service", service):
            response = RegisterView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        service.register.assert_not_called()


class SessionViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = types.SimpleNamespace(
            id=3,
            name="Alice",
            email="alice@example.com",
            last_login=None,
            date_joined="2024-01-01T00:00:00Z",
            is_authenticated=True,
        )

    def test_me_returns_profile(self):
        request = self.factory.get("/api/auth/me/")
        force_authenticate(request, user=self.user)
        response = MeView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "alice@example.com")
        self.assertEqual(response.data["name"], "Alice")

    def test_logout_success(self):
        service = Mock()
        service.logout.return_value = None
        request = self.factory.post("/api/auth/logout/", {"refresh": "abc"}, format="json")
        force_authenticate(request, user=self.user)
        with patch.object(LogoutView, "service", service):
            response = LogoutView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        service.logout.assert_called_once_with("abc", 3)

    def test_logout_error(self):
        service = Mock()
        service.logout.return_value = ("VALIDATION_ERROR", "Invalid token", {"refresh": None})
        request = self.factory.post("/api/auth/logout/", {}, format="json")
        force_authenticate(request, user=self.user)
        with patch.object(LogoutView, "service", service):
            response = LogoutView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SerializerUnitTests(unittest.TestCase):
    def test_register_serializer_rejects_password_without_digit(self):
        serializer = RegisterRequestSerializer(
            data={"name": "Alice", "email": "alice@example.com", "password": "OnlyLetters"}
        )
        self.assertFalse(serializer.is_valid())
        self.assertIn("password", serializer.errors)

    def test_register_serializer_trims_name(self):
        serializer = RegisterRequestSerializer(
            data={"name": "  Alice ", "email": "alice@example.com", "password": "Secret123"}
        )
        self.assertTrue(serializer.is_valid(), serializer.errors)
        self.assertEqual(serializer.validated_data["name"], "Alice")

    def test_customer_token_rejects_staff(self):
        staff = types.SimpleNamespace(is_staff=True, is_superuser=False)
        serializer = CustomerTokenObtainPairSerializer()
        serializer.user = staff
        with patch.object(TokenObtainPairSerializer, "validate", return_value={"access": "a"}):
            with self.assertRaises(ValidationError):
                serializer.validate({"email": "staff@example.com", "password": "x"})

    def test_customer_token_allows_customer(self):
        customer = types.SimpleNamespace(is_staff=False, is_superuser=False)
        serializer = CustomerTokenObtainPairSerializer()
        serializer.user = customer
        with patch.object(
            TokenObtainPairSerializer, "validate", return_value={"access": "a", "refresh": "r"}
        ):
            data = serializer.validate({"email": "c@example.com", "password": "x"})
        self.assertEqual(data["access"], "a")
