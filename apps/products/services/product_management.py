"""Product lookup, lazy refresh from the catalog source, and admin CRUD."""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from django.db import transaction

from ..models import Product
from .catalog_source import CatalogEntry, OpenFoodFactsClient
from .exceptions import CatalogSourceError, DuplicateProductError, ProductNotFoundError
from .pricing import generate_price

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'category', 'ingredients', 'image_url', 'stock', 'price')


def get_product(*, scan_code: str) -> Product:
    """Plain catalog lookup, never calls the catalog source."""
    try:
        return Product.objects.get(scan_code=scan_code)
    except Product.DoesNotExist:
        raise ProductNotFoundError()


def _apply_entry(product: Product, entry: CatalogEntry, rng=None) -> None:
    product.name = entry.name
    product.description = entry.description
    product.category = entry.category
    product.ingredients = entry.ingredients
    product.image_url = entry.image_url
    product.price = generate_price(entry.category, rng=rng)


def refresh_if_stale(product: Product, *, client=None, now=None, rng=None) -> Product:
    """
    Re-fetch a stale product and overwrite its descriptive fields and price.

    Ratings are left untouched. A fresh product is returned as is, without a
    write. When the catalog source fails or no longer knows the code, the
    cached product is served.
    """
    if not product.is_stale(now):
        return product

    client = client or OpenFoodFactsClient.from_settings()
    try:
        entry = client.fetch(product.scan_code)
    except CatalogSourceError:
        logger.warning("Serving stale product %s, catalog source unavailable", product.scan_code)
        return product

    if entry is None:
        logger.info("Catalog source no longer knows %s, keeping cached entry", product.scan_code)
        return product

    _apply_entry(product, entry, rng=rng)
    product.save()
    logger.info("Refreshed product %s from catalog source", product.scan_code)
    return product


def get_or_refresh_product(*, scan_code: str, client=None, now=None, rng=None) -> Product:
    """
    Resolve a scan code to a catalog product.

    Args:
        scan_code: Barcode to resolve
        client: Catalog source client, built from settings when None
        now: Reference time for the staleness check
        rng: Random source for price generation

    Returns:
        Stored Product, created or refreshed as needed

    Raises:
        ProductNotFoundError: Unknown code the catalog source does not know
        CatalogSourceError: Unknown code and the catalog source failed
    """
    product = Product.objects.filter(scan_code=scan_code).first()
    if product is not None:
        return refresh_if_stale(product, client=client, now=now, rng=rng)

    client = client or OpenFoodFactsClient.from_settings()
    entry = client.fetch(scan_code)
    if entry is None:
        raise ProductNotFoundError()

    product = Product(scan_code=scan_code)
    _apply_entry(product, entry, rng=rng)
    product, created = Product.objects.get_or_create(
        scan_code=scan_code,
        defaults={field: getattr(product, field) for field in UPDATABLE_FIELDS},
    )
    if created:
        logger.info("Created product %s from catalog source", scan_code)
    return product


def list_products(*, limit: int = 25, offset: int = 0, client=None, now=None) -> list:
    """
    Page through the catalog, refreshing stale entries on the way.

    Returns:
        List of Product instances
    """
    products = list(Product.objects.order_by('id')[offset:offset + limit])
    if any(product.is_stale(now) for product in products):
        client = client or OpenFoodFactsClient.from_settings()
        products = [refresh_if_stale(product, client=client, now=now) for product in products]
    return products


@transaction.atomic
def create_product(
    *,
    scan_code: str,
    name: str,
    description: str = '',
    category: str = '',
    ingredients: Optional[list] = None,
    image_url: str = '',
    stock: int = 0,
    price: Optional[Decimal] = None,
    rng=None
) -> Product:
    """
    Create a product by hand.

    Raises:
        DuplicateProductError: If the scan code is already in the catalog
    """
    if Product.objects.filter(scan_code=scan_code).exists():
        raise DuplicateProductError()

    if price is None:
        price = generate_price(category, rng=rng)

    product = Product.objects.create(
        scan_code=scan_code,
        name=name,
        description=description,
        category=category,
        ingredients=ingredients or [],
        image_url=image_url,
        stock=stock,
        price=price,
    )
    logger.info("Created product %s by hand", scan_code)
    return product


@transaction.atomic
def update_product(*, scan_code: str, data: Dict[str, Any]) -> Product:
    """
    Overwrite descriptive fields, stock or price of a product.

    Raises:
        ProductNotFoundError: If the scan code is unknown
    """
    try:
        product = Product.objects.select_for_update().get(scan_code=scan_code)
    except Product.DoesNotExist:
        raise ProductNotFoundError()

    for field in UPDATABLE_FIELDS:
        if field in data:
            setattr(product, field, data[field])

    product.save()
    return product


def delete_product(*, scan_code: str) -> None:
    deleted, _ = Product.objects.filter(scan_code=scan_code).delete()
    if not deleted:
        raise ProductNotFoundError()
    logger.info("Deleted product %s", scan_code)
