import pytest
from django.urls import reverse

from order.models import Order
from order.services import OrderLifecycle

pytestmark = pytest.mark.django_db


def test_place_order_returns_created_order(customer_client, customer, make_product, add_to_cart):
    product = make_product(price=1500, stock=5)
    add_to_cart(customer, product, 3)

    response = customer_client.post(reverse("place_order"))

    assert response.status_code == 201
    body = response.json()["order"]
    assert body["status"] == "PENDING"
    assert body["total_amount"] == 4500
    assert body["items"][0]["price"] == 1500
    assert body["items"][0]["product"]["id"] == product.pk


def test_place_order_on_empty_cart_is_400(customer_client):
    response = customer_client.post(reverse("place_order"))

    assert response.status_code == 400
    assert response.json()["code"] == "empty_cart"


def test_place_order_insufficient_stock_names_product(customer_client, customer, make_product, add_to_cart):
    product = make_product(name="Kettle", stock=1)
    add_to_cart(customer, product, 2)

    response = customer_client.post(reverse("place_order"))

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "insufficient_stock"
    assert body["product_id"] == product.pk
    assert "Kettle" in body["detail"]


def test_orders_require_authentication(api_client):
    assert api_client.post(reverse("place_order")).status_code == 401
    assert api_client.get(reverse("user_orders")).status_code == 401


def test_invalid_token_is_401(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

    response = api_client.get(reverse("user_orders"))

    assert response.status_code == 401


def test_my_orders_paginates(customer_client, customer, make_product, add_to_cart):
    product = make_product(stock=10)
    for _ in range(3):
        add_to_cart(customer, product, 1)
        OrderLifecycle().place_order(customer)

    response = customer_client.get(reverse("user_orders"), {"page": 2, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert len(body["orders"]) == 1
    assert body["pagination"] == {"page": 2, "limit": 2, "totalCount": 3, "totalPages": 2}


def test_order_detail_of_other_user_is_404(client_for, make_user, make_product, add_to_cart):
    owner = make_user()
    add_to_cart(owner, make_product(), 1)
    order = OrderLifecycle().place_order(owner)

    response = client_for(make_user()).get(reverse("order_detail", args=[order.pk]))

    assert response.status_code == 404
    assert response.json()["order_id"] == order.pk


def test_cancel_twice_second_is_400(customer_client, customer, make_product, add_to_cart):
    product = make_product(stock=5)
    add_to_cart(customer, product, 3)
    order = OrderLifecycle().place_order(customer)
    url = reverse("cancel_order", args=[order.pk])

    first = customer_client.patch(url)
    second = customer_client.patch(url)

    assert first.status_code == 200
    assert first.json()["order"]["status"] == "CANCELLED"
    assert second.status_code == 400
    assert second.json()["code"] == "invalid_transition"
    product.refresh_from_db()
    assert product.stock == 5


def test_admin_lists_orders_filtered_by_status(admin_client, make_user, make_product, add_to_cart):
    product = make_product(stock=10)
    orders = []
    for _ in range(2):
        user = make_user()
        add_to_cart(user, product, 1)
        orders.append(OrderLifecycle().place_order(user))
    OrderLifecycle().set_status(orders[1].pk, "SHIPPED")

    response = admin_client.get(reverse("admin-orders-list"), {"status": "shipped"})

    assert response.status_code == 200
    body = response.json()
    assert [o["id"] for o in body["orders"]] == [orders[1].pk]
    assert body["orders"][0]["user"]["email"]


def test_admin_sets_status(admin_client, customer, make_product, add_to_cart):
    add_to_cart(customer, make_product(), 1)
    order = OrderLifecycle().place_order(customer)

    response = admin_client.patch(
        reverse("admin-orders-status", args=[order.pk]), {"status": "PROCESSING"}, format="json"
    )

    assert response.status_code == 200
    assert response.json()["order"]["status"] == "PROCESSING"
    order.refresh_from_db()
    assert order.status == Order.Status.PROCESSING


def test_admin_set_invalid_status_is_400(admin_client, customer, make_product, add_to_cart):
    add_to_cart(customer, make_product(), 1)
    order = OrderLifecycle().place_order(customer)

    response = admin_client.patch(
        reverse("admin-orders-status", args=[order.pk]), {"status": "LOST"}, format="json"
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_status"


def test_admin_set_status_missing_order_is_404(admin_client):
    response = admin_client.patch(
        reverse("admin-orders-status", args=[999]), {"status": "SHIPPED"}, format="json"
    )

    assert response.status_code == 404


def test_customer_cannot_use_admin_endpoints(customer_client, customer, make_product, add_to_cart):
    add_to_cart(customer, make_product(), 1)
    order = OrderLifecycle().place_order(customer)

    assert customer_client.get(reverse("admin-orders-list")).status_code == 403
    response = customer_client.patch(
        reverse("admin-orders-status", args=[order.pk]), {"status": "SHIPPED"}, format="json"
    )
    assert response.status_code == 403
    order.refresh_from_db()
    assert order.status == Order.Status.PENDING


@pytest.mark.parametrize("payload", [{}, {"status": ""}])
def test_admin_set_status_without_value_is_invalid_status(admin_client, customer, make_product, add_to_cart, payload):
    add_to_cart(customer, make_product(), 1)
    order = OrderLifecycle().place_order(customer)

    response = admin_client.patch(reverse("admin-orders-status", args=[order.pk]), payload, format="json")

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_status"
    order.refresh_from_db()
    assert order.status == Order.Status.PENDING


def test_my_orders_past_last_page_is_empty(customer_client, customer, make_product, add_to_cart):
    add_to_cart(customer, make_product(), 1)
    OrderLifecycle().place_order(customer)

    response = customer_client.get(reverse("user_orders"), {"page": 5, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["orders"] == []
    assert body["pagination"] == {"page": 5, "limit": 10, "totalCount": 1, "totalPages": 1}


@pytest.mark.parametrize("page", ["0", "abc"])
def test_my_orders_bad_page_falls_back_to_first(customer_client, customer, make_product, add_to_cart, page):
    add_to_cart(customer, make_product(), 1)
    order = OrderLifecycle().place_order(customer)

    body = customer_client.get(reverse("user_orders"), {"page": page}).json()

    assert [o["id"] for o in body["orders"]] == [order.pk]
    assert body["pagination"]["page"] == 1


def test_admin_orders_past_last_page_is_empty(admin_client):
    response = admin_client.get(reverse("admin-orders-list"), {"page": 3})

    assert response.status_code == 200
    assert response.json()["orders"] == []
    assert response.json()["pagination"]["totalCount"] == 0
