# ==========================================
# apps/invoices/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal


class InvoiceStatus:
    """Statuses the ledger itself writes; the processor may report others."""
    PENDING = 'PENDING'
    COMPLETED = 'COMPLETED'


class Invoice(models.Model):
    """
    Ledger entry for one payment attempt.

    Keyed by the payment processor's order id. Status is free text driven by
    the processor (PENDING, COMPLETED, DECLINED, ...).
    """

    external_order_id = models.CharField(max_length=64, unique=True)
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='invoices'
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(max_length=32, default=InvoiceStatus.PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'invoices'
        ordering = ['-created_at']

    def __str__(self):
        return f"Invoice {self.external_order_id} ({self.status})"

    def items_total(self) -> Decimal:
        return sum((item.line_total for item in self.items.all()), Decimal('0.00'))


class InvoiceItem(models.Model):
    """One invoice line; repeated scans of a code stack into its quantity."""

    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='items')
    scan_code = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = 'invoice_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.scan_code}"

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity
