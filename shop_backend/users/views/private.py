"""
PRIVATE (GUARDED) TEST ROUTES

Used to check the authentication chain end to end:
- private/                   any authenticated user, echoes raw headers
- private-guard/             admin or super-user only
- private-guard-decorator/   any authenticated user through the role guard
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.permissions import IsAdminOrSuperUser, IsAnyRole
from users.serializers import UserSerializer


class PrivateResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    email = serializers.EmailField()
    raw_headers = serializers.ListField(child=serializers.CharField())


def raw_headers(request) -> list[str]:
    """Flatten request headers into [name, value, name, value, ...]."""
    flat = []
    for name, value in request.headers.items():
        flat.extend([name, value])
    return flat


class PrivateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: PrivateResponseSerializer})
    def get(self, request):
        return Response(
            {
                "user": UserSerializer(request.user).data,
                "email": request.user.email,
                "raw_headers": raw_headers(request),
            }
        )


class PrivateGuardView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrSuperUser]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class PrivateGuardDecoratorView(APIView):
    permission_classes = [IsAuthenticated, IsAnyRole]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)
