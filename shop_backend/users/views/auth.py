"""
USER AUTH VIEWS

- Register (anon, throttled)
- Login (anon, throttled)
- Check status (authenticated): returns the user with a fresh token

Every successful response is the user representation plus "token".
"""

from __future__ import annotations

from django.contrib.auth import authenticate
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle

from users.serializers import (
    AuthResponseSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
)
from users.services import DuplicateEmailError, issue_access_token, register_user

INVALID_CREDENTIALS = "Please, check if the email or the password is correct"


def _auth_payload(user) -> dict:
    return {**UserSerializer(user).data, "token": issue_access_token(user)}


# ---------------- THROTTLES (TARGETED) ----------------
class RegisterAnonThrottle(AnonRateThrottle):
    """
    Anonymous registration throttling.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['anon'].
    """
    scope = "anon"


class LoginAnonThrottle(AnonRateThrottle):
    scope = "anon"


class CheckStatusUserThrottle(UserRateThrottle):
    scope = "user"


# ---------------- REGISTER ----------------
class RegisterView(generics.GenericAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [RegisterAnonThrottle]

    @extend_schema(
        request=RegisterSerializer,
        responses={
            201: AuthResponseSerializer,
            400: OpenApiResponse(description="Invalid data or email already exists"),
        },
        description="Register a new user account",
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            user = register_user(
                email=data["email"],
                password=data["password"],
                full_name=data["full_name"],
            )
        except DuplicateEmailError as exc:
            raise ValidationError({"email": [str(exc)]}) from exc

        return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


# ---------------- LOGIN (JWT + EMAIL) ----------------
class LoginView(generics.GenericAPIView):
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [LoginAnonThrottle]

    @extend_schema(
        request=LoginSerializer,
        responses={
            200: AuthResponseSerializer,
            401: OpenApiResponse(description="Invalid credentials"),
        },
        description="Authenticate with email and password",
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request=request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )

        # Same message for unknown email, wrong password and inactive user.
        if not user:
            return Response(
                {"detail": INVALID_CREDENTIALS},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        return Response(_auth_payload(user), status=status.HTTP_200_OK)


# ---------------- CHECK STATUS ----------------
class CheckStatusView(generics.GenericAPIView):
    serializer_class = AuthResponseSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [CheckStatusUserThrottle]

    @extend_schema(
        responses={200: AuthResponseSerializer},
        description="Return the authenticated user with a renewed token",
    )
    def get(self, request):
        return Response(_auth_payload(request.user), status=status.HTTP_200_OK)
