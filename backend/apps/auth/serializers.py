from rest_framework import serializers
from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from apps.users.validators import (
    validate_name as validate_name_rules,
    validate_password as validate_password_rules,
)


class RegisterRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_name(self, value: str) -> str:
        return validate_name_rules(value)

    def validate_password(self, value: str) -> str:
        return validate_password_rules(value)


class RegisterResponseSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()


class MeResponseSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(allow_blank=True)
    email = serializers.EmailField()
    last_login = serializers.DateTimeField(allow_null=True)
    date_joined = serializers.DateTimeField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class CustomerTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Token serializer that blocks staff/admin accounts."""

    def validate(self, attrs):
        data = super().validate(attrs)
        if getattr(self.user, "is_staff", False) or getattr(
            self.user, "is_superuser", False
        ):
            raise ValidationError(
                "Staff and admin accounts cannot sign in to the storefront."
            )
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["email"] = user.email
        token["name"] = getattr(user, "name", "")
        return token
