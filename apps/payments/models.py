# ==========================================
# apps/payments/models.py
# ==========================================

from django.db import models
from django.utils import timezone


class PaymentState(models.TextChoices):
    """Lifecycle of one purchase attempt."""
    INITIATED = 'INITIATED', 'Initiated'
    AUTHORIZED = 'AUTHORIZED', 'Authorized'
    CAPTURED = 'CAPTURED', 'Captured'
    DENIED = 'DENIED', 'Denied'
    ABANDONED = 'ABANDONED', 'Abandoned'


class PendingCapture(models.Model):
    """
    Durable record of a capture the processor confirmed.

    Written before the ledger status update; ``applied_at`` stays empty until
    the invoice carries the captured status, so a failed ledger write can be
    retried by reconciliation.
    """

    order_id = models.CharField(max_length=64, unique=True)
    status = models.CharField(max_length=32)
    payload = models.JSONField(default=dict, blank=True)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)
    applied_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pending_captures'
        ordering = ['created_at']

    def __str__(self):
        state = 'applied' if self.is_applied else 'pending'
        return f"Capture {self.order_id} ({self.status}, {state})"

    @property
    def is_applied(self):
        return self.applied_at is not None

    def mark_applied(self):
        """Mark the capture as reflected in the ledger."""
        self.attempts += 1
        self.applied_at = timezone.now()
        self.last_error = ''
        self.save(update_fields=['attempts', 'applied_at', 'last_error', 'updated_at'])

    def mark_failed(self, error):
        """Record a failed ledger write."""
        self.attempts += 1
        self.last_error = str(error)
        self.save(update_fields=['attempts', 'last_error', 'updated_at'])
