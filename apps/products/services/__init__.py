"""Services for products business logic."""

from .exceptions import (
    ProductNotFoundError,
    DuplicateProductError,
    InvalidRatingError,
    CatalogSourceError,
)
from .catalog_source import CatalogEntry, OpenFoodFactsClient
from .pricing import generate_price, price_band
from .product_management import (
    get_product,
    get_or_refresh_product,
    refresh_if_stale,
    list_products,
    create_product,
    update_product,
    delete_product,
)
from .product_search import search_products_by_name
from .rating_aggregation import rate_product
from .purchased_products import list_purchased_products

__all__ = [
    # Exceptions
    'ProductNotFoundError',
    'DuplicateProductError',
    'InvalidRatingError',
    'CatalogSourceError',
    # Catalog source
    'CatalogEntry',
    'OpenFoodFactsClient',
    # Pricing
    'generate_price',
    'price_band',
    # Product Management
    'get_product',
    'get_or_refresh_product',
    'refresh_if_stale',
    'list_products',
    'create_product',
    'update_product',
    'delete_product',
    # Search
    'search_products_by_name',
    # Ratings
    'rate_product',
    'list_purchased_products',
]
