from rest_framework import serializers

MIN_PASSWORD_LENGTH = 8


def validate_password(value: str) -> str:
    """
    Ensures that the password is long enough and mixes letters with digits.
    """
    if value is None:
        raise serializers.ValidationError("Password is required.")
    if len(value) < MIN_PASSWORD_LENGTH:
        raise serializers.ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    if not any(ch.isalpha() for ch in value):
        raise serializers.ValidationError("Password must include at least one letter.")
    if not any(ch.isdigit() for ch in value):
        raise serializers.ValidationError("Password must include at least one number.")
    return value


def validate_name(value: str) -> str:
    trimmed = (value or "").strip()
    if not trimmed:
        raise serializers.ValidationError("Name cannot be blank.")
    return trimmed
