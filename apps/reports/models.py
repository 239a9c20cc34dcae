# ==========================================
# apps/reports/models.py
# ==========================================

from django.db import models
from decimal import Decimal


class Report(models.Model):
    """Immutable sales snapshot; a new row per generation, never updated."""

    sales = models.PositiveIntegerField(default=0)
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    average_order_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    # [{product_id, name, scan_code, purchase_count}], best seller first
    most_purchased_products = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reports'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Report {self.created_at:%Y-%m-%d %H:%M} ({self.sales} sales)"
