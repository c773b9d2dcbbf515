"""
PATH: users/models/user.py

CUSTOM USER MODEL

Identity rules:
- Email is the login identifier (stored normalized + lowercased, unique).
- full_name is required for display and role-guard messages.
- One role per user: "user" (default), "admin", "super-user".
- Inactive users cannot authenticate (enforced by the JWT layer and the
  email backend).
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models


# ---------------- ROLES ----------------
class Role(models.TextChoices):
    USER = "user", "User"
    ADMIN = "admin", "Admin"
    SUPER_USER = "super-user", "Super user"


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def normalize_email(self, email):
        return super().normalize_email((email or "").strip()).lower()

    def create_user(self, email=None, password=None, **extra_fields):
        """
        Rules:
        - email is required
        - password is hashed through Django's configured hashers
        - missing password => unusable password (seed/admin flows)
        - email uniqueness is left to the database constraint
        """
        email = self.normalize_email(email)
        if not email:
            raise ValueError("Users must have an email address")

        extra_fields.setdefault("role", Role.USER)
        extra_fields.setdefault("is_active", True)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"], validate_unique=False)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", Role.ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("full_name", "Administrator")

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        super().clean()
        self.email = self.__class__.objects.normalize_email(self.email)
        self.full_name = (self.full_name or "").strip()

        if not self.full_name:
            raise ValidationError({"full_name": "Full name is required"})

    def has_role(self, *roles) -> bool:
        return self.role in roles

    def __str__(self):
        return f"{self.email} ({self.role})"
