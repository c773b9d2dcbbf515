# users/permissions.py

from rest_framework.permissions import BasePermission

from users.models import Role


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.

    An empty allowed_roles set admits any authenticated user.
    The denial message names the user and the roles required.
    """

    allowed_roles = frozenset()
    message = "You do not have permission to perform this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if not self.allowed_roles or user.role in self.allowed_roles:
            return True

        required = ", ".join(sorted(self.allowed_roles))
        self.message = f"User {user.full_name} needs a valid role: [{required}]"
        return False


# ---------------- ROLE PERMISSIONS ----------------
class IsAnyRole(HasRole):
    allowed_roles = frozenset()


class IsAdmin(HasRole):
    allowed_roles = frozenset({Role.ADMIN})


class IsAdminOrSuperUser(HasRole):
    allowed_roles = frozenset({Role.ADMIN, Role.SUPER_USER})
