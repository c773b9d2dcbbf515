"""
PATH: users/auth_backends.py

AUTH BACKEND: Email login

Rules:
- The identifier is the email, matched case-insensitively.
- Inactive users never authenticate.
- Unknown email still runs the password hasher once, so response time
  does not reveal which emails are registered.

This is used by Django authenticate() and the login view.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

User = get_user_model()


class EmailBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        """
        Django convention passes "username" as the identifier;
        the login view passes email=... explicitly.
        """
        identifier = (kwargs.get("email") or username or "").strip()
        if not identifier or password is None:
            return None

        try:
            user = User.objects.get(email__iexact=identifier)
        except User.DoesNotExist:
            User().set_password(password)
            return None

        if not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
