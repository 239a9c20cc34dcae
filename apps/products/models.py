# ==========================================
# apps/products/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal


class Product(models.Model):
    """Catalog entry identified by its scan code (barcode)."""

    scan_code = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    category = models.TextField(blank=True)
    ingredients = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    stock = models.PositiveIntegerField(default=0)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    average_rating = models.FloatField(default=0.0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['id']
        indexes = [
            models.Index(fields=['name'], name='products_name_3f4c1a_idx'),
        ]

    def __str__(self):
        return f"{self.scan_code} - {self.name}"

    def is_stale(self, now=None):
        """True once the entry is older than the catalog refresh window."""
        now = now or timezone.now()
        return self.updated_at < now - settings.CATALOG_SOURCE['STALE_AFTER']


class Rating(models.Model):
    """One user's score for one product, replaced on re-rating."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='ratings')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='ratings')
    score = models.FloatField(validators=[MinValueValidator(0), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_ratings'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['product', 'user'], name='unique_rating_per_user'),
        ]

    def __str__(self):
        return f"{self.user} rated {self.product.scan_code}: {self.score}"
