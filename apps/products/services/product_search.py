"""Product search by name."""

from django.db.models import QuerySet

from ..models import Product
from .exceptions import ProductNotFoundError


def search_products_by_name(*, query: str) -> QuerySet[Product]:
    """
    Case-insensitive substring search on product names.

    An empty query matches every product.

    Raises:
        ProductNotFoundError: If nothing matches
    """
    products = Product.objects.filter(name__icontains=query or '').order_by('name')
    if not products.exists():
        raise ProductNotFoundError("No products found for the query")
    return products
