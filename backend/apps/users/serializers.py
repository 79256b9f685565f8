from rest_framework import serializers

from .validators import validate_password as validate_password_rules


class AddressSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    fullName = serializers.CharField(source="full_name")
    addressLine1 = serializers.CharField(source="address_line1")
    addressLine2 = serializers.CharField(source="address_line2", allow_null=True)
    city = serializers.CharField()
    state = serializers.CharField()
    postalCode = serializers.CharField(source="postal_code")
    phoneNumber = serializers.CharField(source="phone_number")
    isDefault = serializers.BooleanField(source="is_default")
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class AddressWriteSerializer(serializers.Serializer):
    fullName = serializers.CharField(source="full_name", max_length=150)
    addressLine1 = serializers.CharField(source="address_line1", max_length=255)
    addressLine2 = serializers.CharField(
        source="address_line2",
        max_length=255,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    city = serializers.CharField(max_length=100)
    state = serializers.CharField(max_length=100)
    postalCode = serializers.CharField(source="postal_code", max_length=20)
    phoneNumber = serializers.CharField(source="phone_number", max_length=30)
    isDefault = serializers.BooleanField(source="is_default", required=False)


class AccountSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(allow_blank=True)
    email = serializers.EmailField()
    dateJoined = serializers.CharField(source="date_joined", allow_null=True)


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    currentPassword = serializers.CharField(
        source="current_password", required=False, allow_blank=True, write_only=True
    )
    newPassword = serializers.CharField(
        source="new_password", required=False, allow_blank=True, write_only=True
    )

    def validate_newPassword(self, value: str) -> str:
        if not value:
            return value
        return validate_password_rules(value)

    def validate(self, attrs):
        current = attrs.get("current_password") or ""
        new = attrs.get("new_password") or ""
        if new and not current:
            raise serializers.ValidationError(
                {"currentPassword": "Current password is required to set a new password."}
            )
        if current and not new:
            raise serializers.ValidationError(
                {"newPassword": "This field is required when changing password."}
            )
        return attrs
