"""
Immutable, priced view of a user's cart at one instant.

Checkout materializes the snapshot inside its transaction with ``lock=True``
so the prices it freezes and the stock it reserves come from the same rows.
"""
from dataclasses import dataclass

from django.db import DEFAULT_DB_ALIAS

from product.models import Product
from storefront.exceptions import EmptyCart
from .models import Cart, CartItem


@dataclass(frozen=True)
class LineItem:
    product_id: int
    quantity: int
    unit_price: int

    @property
    def line_total(self):
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Snapshot:
    cart_id: int
    line_items: tuple

    @property
    def total(self):
        return sum(item.line_total for item in self.line_items)


class CartSnapshot:
    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def materialize(self, user_id, lock=False):
        """
        Price every item of ``user_id``'s cart from the current product rows.

        Raises ``EmptyCart`` when the user has no cart or the cart has no items.
        With ``lock=True`` the products are locked (``SELECT ... FOR UPDATE``)
        in ascending id order; only valid inside a transaction.
        """
        cart = Cart.objects.using(self.using).filter(user_id=user_id).first()
        if cart is None:
            raise EmptyCart()

        items = list(
            CartItem.objects.using(self.using)
            .filter(cart=cart)
            .values_list("product_id", "quantity")
            .order_by("product_id")
        )
        if not items:
            raise EmptyCart()

        products = Product.objects.using(self.using).filter(pk__in=[pid for pid, _ in items]).order_by("pk")
        if lock:
            products = products.select_for_update()
        prices = dict(products.values_list("pk", "price"))

        line_items = tuple(
            LineItem(product_id=pid, quantity=qty, unit_price=prices[pid])
            for pid, qty in items
        )
        return Snapshot(cart_id=cart.pk, line_items=line_items)
