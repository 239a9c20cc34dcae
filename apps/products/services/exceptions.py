"""Domain-specific exceptions for products services."""

from apps.core.exceptions import NotFoundError, UpstreamError, ValidationError


class ProductNotFoundError(NotFoundError):
    """Raised when a scan code matches neither the catalog nor the catalog source."""
    default_detail = 'Product not found'
    default_code = 'product_not_found'


class DuplicateProductError(ValidationError):
    """Raised when creating a product whose scan code already exists."""
    default_detail = 'Product already exists'
    default_code = 'product_exists'


class InvalidRatingError(ValidationError):
    """Raised when a score is not a number in [0, 5]."""
    default_detail = 'Invalid rating value'
    default_code = 'invalid_rating'


class CatalogSourceError(UpstreamError):
    """Raised when the external catalog source fails or answers garbage."""
    default_detail = 'Catalog source unavailable'
    default_code = 'catalog_source_error'
