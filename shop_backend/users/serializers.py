# users/serializers.py

import re

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

User = get_user_model()

PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "one lowercase letter"),
    (re.compile(r"[A-Z]"), "one uppercase letter"),
    (re.compile(r"\d"), "one number"),
    (re.compile(r"[^A-Za-z0-9]"), "one symbol"),
)
PASSWORD_MIN_LENGTH = 8


def validate_strong_password(value: str) -> str:
    """
    Strong password policy:
    - at least 8 characters
    - one lowercase, one uppercase, one number, one symbol
    """
    missing = [label for pattern, label in PASSWORD_RULES if not pattern.search(value)]
    if len(value) < PASSWORD_MIN_LENGTH:
        missing.insert(0, f"{PASSWORD_MIN_LENGTH} characters")

    if missing:
        raise serializers.ValidationError(
            "Password must contain at least " + ", ".join(missing) + "."
        )
    return value


# ---------------- REGISTER ----------------
class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_strong_password],
        style={"input_type": "password"},
    )
    full_name = serializers.CharField(min_length=1, max_length=255)

    def validate_email(self, value):
        return User.objects.normalize_email(value)

    def validate(self, attrs):
        candidate = User(email=attrs["email"], full_name=attrs["full_name"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": exc.messages}) from exc
        return attrs


# ---------------- LOGIN (INPUT ONLY) ----------------
class LoginSerializer(serializers.Serializer):
    """
    Input validation only.
    Authentication is handled in the view.
    """

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )


# ---------------- USER OUTPUT ----------------
class UserSerializer(serializers.ModelSerializer):
    """
    Safe user representation for frontend consumption.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "role",
            "is_active",
        ]


class AuthResponseSerializer(UserSerializer):
    token = serializers.CharField(read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["token"]
