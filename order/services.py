"""
Order lifecycle: checkout, cancellation and administrative status changes.

    PENDING -> PROCESSING -> SHIPPED -> DELIVERED   (admin, set_status)
    PENDING -> CANCELLED                             (owner, cancel_order)

Only ``cancel_order`` gives stock back. ``set_status`` may move an order to
any of the five statuses and never touches inventory.
"""
import logging

from django.db import DEFAULT_DB_ALIAS

from cart.models import CartItem
from cart.snapshot import CartSnapshot
from storefront.exceptions import EmptyCart, InvalidStatus, InvalidTransition, OrderNotFound
from .inventory import InventoryLedger
from .models import Order, OrderItem
from .transactions import unit_of_work

logger = logging.getLogger(__name__)


class OrderLifecycle:
    def __init__(self, ledger=None, snapshot=None, using=DEFAULT_DB_ALIAS):
        self.using = using
        self.ledger = ledger or InventoryLedger(using=using)
        self.snapshot = snapshot or CartSnapshot(using=using)

    def _orders(self):
        return Order.objects.using(self.using)

    def _with_items(self, qs):
        return qs.select_related("user").prefetch_related("items__product")

    # ---- checkout ----

    def place_order(self, user):
        """
        Turn ``user``'s cart into a PENDING order.

        Stock reservation, order creation and cart clearing commit together;
        ``EmptyCart`` or ``InsufficientStock`` leave products, cart and
        orders untouched.
        """
        with unit_of_work(self.using):
            try:
                snapshot = self.snapshot.materialize(user.pk, lock=True)
            except EmptyCart:
                logger.warning("Checkout refused for user %s: cart empty", user.pk)
                raise

            for line in snapshot.line_items:
                self.ledger.reserve(line.product_id, line.quantity)

            order = self._orders().create(
                user=user,
                total_amount=snapshot.total,
                status=Order.Status.PENDING,
            )
            OrderItem.objects.using(self.using).bulk_create([
                OrderItem(
                    order=order,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.unit_price,
                )
                for line in snapshot.line_items
            ])

            CartItem.objects.using(self.using).filter(cart_id=snapshot.cart_id).delete()
            order = self._with_items(self._orders()).get(pk=order.pk)

        logger.info("Order %s placed by user %s, total %s", order.pk, user.pk, order.total_amount)
        return order

    # ---- cancellation ----

    def cancel_order(self, user, order_id):
        with unit_of_work(self.using):
            # lock the order row so a concurrent cancel waits and then sees CANCELLED
            order = self._orders().select_for_update().filter(pk=order_id, user=user).first()
            if order is None:
                raise OrderNotFound(order_id)

            if not order.is_cancellable:
                logger.warning("Order %s cancel refused in status %s", order.pk, order.status)
                raise InvalidTransition(order.status, Order.Status.CANCELLED)

            order.status = Order.Status.CANCELLED
            order.save(update_fields=["status", "updated_at"])

            for product_id, quantity in order.items.values_list("product_id", "quantity"):
                self.ledger.release(product_id, quantity)

        logger.info("Order %s cancelled by user %s", order.pk, user.pk)
        return order

    # ---- admin ----

    def set_status(self, order_id, new_status):
        if new_status not in Order.Status.values:
            raise InvalidStatus(new_status)

        with unit_of_work(self.using):
            order = self._orders().select_for_update().filter(pk=order_id).first()
            if order is None:
                raise OrderNotFound(order_id)

            old_status = order.status
            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

        logger.info("Order %s status %s -> %s", order.pk, old_status, new_status)
        return self._with_items(self._orders()).get(pk=order.pk)

    # ---- reads ----

    def get_user_orders(self, user):
        return self._with_items(self._orders().filter(user=user))

    def get_order(self, user, order_id):
        order = self._with_items(self._orders().filter(pk=order_id, user=user)).first()
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def get_all_orders(self, status=None):
        qs = self._orders().all()
        if status:
            qs = qs.filter(status=status.upper())
        return self._with_items(qs)
