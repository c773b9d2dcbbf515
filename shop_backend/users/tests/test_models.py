from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from users.models import Role

User = get_user_model()


class UserManagerTests(TestCase):

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(
            email="  Dana@Example.COM ",
            password="Velvet#Harbor42",
            full_name="Dana Ray",
        )

        self.assertEqual(user.email, "dana@example.com")
        self.assertEqual(user.role, Role.USER)
        self.assertTrue(user.is_active)

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="Velvet#Harbor42", full_name="No Mail")

    def test_full_name_is_required(self):
        with self.assertRaises(ValidationError):
            User.objects.create_user(email="blank@example.com", password="Velvet#Harbor42", full_name="  ")

    def test_missing_password_is_unusable(self):
        user = User.objects.create_user(email="seed@example.com", full_name="Seed User")

        self.assertFalse(user.has_usable_password())

    def test_create_superuser(self):
        user = User.objects.create_superuser(email="root@example.com", password="Velvet#Harbor42")

        self.assertEqual(user.role, Role.ADMIN)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)
        self.assertTrue(user.has_role(Role.ADMIN, Role.SUPER_USER))


class EmailBackendTests(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(
            email="erin@example.com",
            password="Velvet#Harbor42",
            full_name="Erin Lake",
        )

    def test_authenticates_by_email(self):
        self.assertEqual(authenticate(email="ERIN@example.com", password="Velvet#Harbor42"), self.user)

    def test_username_keyword_is_accepted(self):
        self.assertEqual(authenticate(username="erin@example.com", password="Velvet#Harbor42"), self.user)

    def test_wrong_password(self):
        self.assertIsNone(authenticate(email="erin@example.com", password="nope"))

    def test_inactive_user(self):
        self.user.is_active = False
        self.user.save()

        self.assertIsNone(authenticate(email="erin@example.com", password="Velvet#Harbor42"))
