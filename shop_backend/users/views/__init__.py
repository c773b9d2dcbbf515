from .auth import CheckStatusView, LoginView, RegisterView
from .private import PrivateGuardDecoratorView, PrivateGuardView, PrivateView

__all__ = [
    "RegisterView",
    "LoginView",
    "CheckStatusView",
    "PrivateView",
    "PrivateGuardView",
    "PrivateGuardDecoratorView",
]
