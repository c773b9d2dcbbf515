# users/urls.py

from django.urls import path

from .views import (
    CheckStatusView,
    LoginView,
    PrivateGuardDecoratorView,
    PrivateGuardView,
    PrivateView,
    RegisterView,
)

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("check-status/", CheckStatusView.as_view(), name="check-status"),
    path("private/", PrivateView.as_view(), name="private"),
    path("private-guard/", PrivateGuardView.as_view(), name="private-guard"),
    path(
        "private-guard-decorator/",
        PrivateGuardDecoratorView.as_view(),
        name="private-guard-decorator",
    ),
]
