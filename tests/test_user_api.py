import pytest
from django.urls import reverse
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import AccessToken

from cart.models import Cart
from user.auth import authorize, issue_tokens, verify
from user.models import User

pytestmark = pytest.mark.django_db


def test_register_creates_user_cart_and_token(api_client):
    response = api_client.post(
        reverse("register"),
        {"email": "new@example.com", "password": "secret123", "name": "New Person"},
        format="json",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["role"] == "CUSTOMER"
    user = User.objects.get(email="new@example.com")
    assert Cart.objects.filter(user=user).exists()
    assert verify(body["token"]).user_id == user.pk
    assert "access_token" in response.cookies


def test_register_duplicate_email(api_client, customer):
    response = api_client.post(
        reverse("register"),
        {"email": customer.email, "password": "secret123", "name": "Again"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["email"] == ["User already exists"]


def test_register_requires_fields(api_client):
    response = api_client.post(reverse("register"), {"email": "x@example.com"}, format="json")

    assert response.status_code == 400
    assert set(response.json()) >= {"password", "name"}


def test_login_returns_token(api_client, customer):
    response = api_client.post(
        reverse("login"), {"email": customer.email, "password": "secret123"}, format="json"
    )

    assert response.status_code == 200
    assert verify(response.json()["token"]).role == User.Role.CUSTOMER


def test_login_bad_password_is_401(api_client, customer):
    response = api_client.post(
        reverse("login"), {"email": customer.email, "password": "wrong-one"}, format="json"
    )

    assert response.status_code == 401


def test_cookie_authenticates_requests(api_client, customer):
    api_client.cookies["access_token"] = issue_tokens(customer)["access"]

    response = api_client.get(reverse("profile"))

    assert response.status_code == 200
    assert response.json()["email"] == customer.email


def test_profile_update_keeps_role(customer_client, customer):
    response = customer_client.patch(reverse("profile"), {"name": "Renamed", "role": "ADMIN"}, format="json")

    assert response.status_code == 200
    customer.refresh_from_db()
    assert customer.name == "Renamed"
    assert customer.role == User.Role.CUSTOMER


class TestAuthService:
    def test_token_carries_role_claim(self, admin):
        token = AccessToken(issue_tokens(admin)["access"])
        assert token["role"] == "ADMIN"

    def test_verify_uses_stored_role(self, customer):
        token = issue_tokens(customer)["access"]
        User.objects.filter(pk=customer.pk).update(role=User.Role.ADMIN)

        assert verify(token).role == User.Role.ADMIN

    def test_verify_rejects_garbage(self):
        with pytest.raises(AuthenticationFailed):
            verify("garbage")

    def test_verify_rejects_deleted_user(self, customer):
        token = issue_tokens(customer)["access"]
        customer.delete()

        with pytest.raises(AuthenticationFailed):
            verify(token)

    def test_authorize(self):
        assert authorize("ADMIN", ["ADMIN"])
        assert not authorize("CUSTOMER", ["ADMIN"])
        assert authorize("CUSTOMER", ["CUSTOMER", "ADMIN"])
