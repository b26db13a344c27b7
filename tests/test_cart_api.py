import pytest
from django.urls import reverse

from cart.models import Cart, CartItem

pytestmark = pytest.mark.django_db


def test_get_cart_creates_it_lazily(client_for, make_user):
    user = make_user()
    Cart.objects.filter(user=user).delete()

    response = client_for(user).get(reverse("cart"))

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["total"] == 0
    assert Cart.objects.filter(user=user).exists()


def test_cart_total_uses_live_prices(customer_client, customer, make_product, add_to_cart):
    product = make_product(price=400, stock=10)
    add_to_cart(customer, product, 2)
    product.price = 500
    product.save()

    response = customer_client.get(reverse("cart"))

    assert response.json()["total"] == 1000


def test_add_merges_into_existing_item(customer_client, customer, make_product):
    product = make_product(stock=5)
    url = reverse("cart-add")

    first = customer_client.post(url, {"productId": product.pk, "quantity": 2}, format="json")
    second = customer_client.post(url, {"productId": product.pk}, format="json")

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["item"]["quantity"] == 3
    assert CartItem.objects.filter(cart__user=customer).count() == 1


def test_add_rejects_non_positive_quantity(customer_client, make_product):
    product = make_product()

    response = customer_client.post(reverse("cart-add"), {"productId": product.pk, "quantity": 0}, format="json")

    assert response.status_code == 400


def test_add_unknown_product_is_404(customer_client):
    response = customer_client.post(reverse("cart-add"), {"productId": 12345}, format="json")

    assert response.status_code == 404


def test_add_beyond_stock_is_rejected(customer_client, customer, make_product, add_to_cart):
    product = make_product(stock=3)
    add_to_cart(customer, product, 2)

    response = customer_client.post(reverse("cart-add"), {"productId": product.pk, "quantity": 2}, format="json")

    assert response.status_code == 400
    assert response.json()["code"] == "insufficient_stock"
    assert CartItem.objects.get(cart__user=customer).quantity == 2


def test_update_item_quantity(customer_client, customer, make_product, add_to_cart):
    item = add_to_cart(customer, make_product(stock=10), 1)

    response = customer_client.put(reverse("cart-item-detail", args=[item.pk]), {"quantity": 4}, format="json")

    assert response.status_code == 200
    item.refresh_from_db()
    assert item.quantity == 4


def test_update_other_users_item_is_404(client_for, make_user, make_product, add_to_cart):
    item = add_to_cart(make_user(), make_product(), 1)

    response = client_for(make_user()).put(
        reverse("cart-item-detail", args=[item.pk]), {"quantity": 2}, format="json"
    )

    assert response.status_code == 404


def test_remove_and_clear(customer_client, customer, make_product, add_to_cart):
    first = add_to_cart(customer, make_product(name="A"), 1)
    add_to_cart(customer, make_product(name="B"), 1)

    assert customer_client.delete(reverse("cart-item-detail", args=[first.pk])).status_code == 200
    assert CartItem.objects.filter(cart__user=customer).count() == 1

    assert customer_client.delete(reverse("cart-clear")).status_code == 200
    assert CartItem.objects.filter(cart__user=customer).count() == 0


def test_clear_without_cart_is_404(client_for, make_user):
    user = make_user()
    Cart.objects.filter(user=user).delete()

    response = client_for(user).delete(reverse("cart-clear"))

    assert response.status_code == 404
