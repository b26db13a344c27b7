import pytest
from rest_framework.test import APIClient

from cart.models import Cart, CartItem
from product.models import Product
from user.auth import issue_tokens
from user.models import User


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=User.Role.CUSTOMER, email=None, name="Test User", password="secret123"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user = User.objects.create_user(email=email, name=name, password=password, role=role)
        Cart.objects.create(user=user)
        return user

    return _make_user


@pytest.fixture
def customer(make_user):
    return make_user(email="customer@example.com", name="John Doe")


@pytest.fixture
def admin(make_user):
    return make_user(role=User.Role.ADMIN, email="admin@example.com", name="Admin User")


@pytest.fixture
def make_product(db):
    def _make_product(name="Widget", price=1500, stock=5, category="gadgets", **extra):
        return Product.objects.create(name=name, price=price, stock=stock, category=category, **extra)

    return _make_product


@pytest.fixture
def add_to_cart():
    def _add_to_cart(user, product, quantity):
        cart, _ = Cart.objects.get_or_create(user=user)
        return CartItem.objects.create(cart=cart, product=product, quantity=quantity)

    return _add_to_cart


@pytest.fixture
def client_for():
    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['access']}")
        return client

    return _client_for


@pytest.fixture
def customer_client(client_for, customer):
    return client_for(customer)


@pytest.fixture
def admin_client(client_for, admin):
    return client_for(admin)
