"""
PATH: users/services.py

USER APPLICATION SERVICE

Purpose:
- Register users (uniqueness enforced by the database, not pre-checked).
- Issue SimpleJWT access tokens carrying the user id.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from users.models import User

logger = logging.getLogger(__name__)


class DuplicateEmailError(ValueError):
    pass


def register_user(*, email: str, password: str, full_name: str) -> User:
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                full_name=full_name,
            )
    except IntegrityError as exc:
        logger.info("Registration rejected: email already exists", extra={"email": email})
        raise DuplicateEmailError("The email already exists") from exc

    logger.info("User registered", extra={"user_id": str(user.id)})
    return user


def issue_access_token(user: User) -> str:
    return str(AccessToken.for_user(user))
