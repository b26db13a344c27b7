import logging

from django.db import DEFAULT_DB_ALIAS
from django.db.models import F

from product.models import Product
from storefront.exceptions import InsufficientStock

logger = logging.getLogger(__name__)


class InventoryLedger:
    """
    The only writer of ``Product.stock`` on the order path.

    Both operations are single UPDATE statements and must run inside the
    caller's transaction so a later failure undoes them.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _products(self):
        return Product.objects.using(self.using)

    def reserve(self, product_id, quantity):
        # the stock guard lives in the WHERE clause, so two concurrent
        # reservations of the last unit cannot both match the row
        updated = (
            self._products()
            .filter(pk=product_id, stock__gte=quantity)
            .update(stock=F("stock") - quantity)
        )
        if not updated:
            name = self._products().filter(pk=product_id).values_list("name", flat=True).first()
            logger.warning("Reservation of %s x %s refused", product_id, quantity)
            raise InsufficientStock(product_id, name)

    def release(self, product_id, quantity):
        self._products().filter(pk=product_id).update(stock=F("stock") + quantity)
