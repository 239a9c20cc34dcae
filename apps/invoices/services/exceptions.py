"""Domain-specific exceptions for invoices services."""

from apps.core.exceptions import NotFoundError, ValidationError


class InvoiceNotFoundError(NotFoundError):
    """Raised when no invoice carries the given order id."""
    default_detail = 'Invoice not found'
    default_code = 'invoice_not_found'


class DuplicateInvoiceError(ValidationError):
    """Raised when an order id is already recorded."""
    default_detail = 'Invoice already exists'
    default_code = 'invoice_exists'
