from django.db import models


class Product(models.Model):
    """
    Catalog entry. ``price`` is in minor currency units (cents, paise).
    ``stock`` only moves through ``order.inventory.InventoryLedger`` once
    orders exist; admins may still set it directly.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.PositiveIntegerField()
    stock = models.PositiveIntegerField(default=0)
    image_url = models.URLField(max_length=500, blank=True, default="")
    category = models.CharField(max_length=100, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=models.Q(stock__gte=0), name="product_stock_non_negative"),
            models.CheckConstraint(condition=models.Q(price__gt=0), name="product_price_positive"),
        ]

    def __str__(self):
        return self.name

    @property
    def in_stock(self):
        return self.stock > 0
