"""Domain-specific exceptions for payments services."""

from apps.core.exceptions import PersistenceError, UpstreamError, ValidationError


class EmptyCartError(ValidationError):
    """Raised when an order is started with no scan codes."""
    default_detail = 'The "scan_codes" parameter is required.'
    default_code = 'empty_cart'


class PaymentProcessorError(UpstreamError):
    """Raised when the payment processor fails or answers garbage."""
    default_detail = 'Payment processor request failed'
    default_code = 'payment_processor_error'


class CaptureNotRecordedError(PersistenceError):
    """Raised when a confirmed capture could not be written to the ledger."""
    default_detail = 'Payment captured but the invoice could not be updated; it will be reconciled'
    default_code = 'capture_not_recorded'
