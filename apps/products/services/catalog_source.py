"""
Client for the external catalog source (Open Food Facts).

The source only describes products; it carries no price or stock.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

import requests
from django.conf import settings

from .exceptions import CatalogSourceError

logger = logging.getLogger(__name__)


@dataclass
class CatalogEntry:
    """Descriptive fields of one product as the catalog source knows it."""
    name: str
    description: str = ''
    category: str = ''
    ingredients: list = field(default_factory=list)
    image_url: str = ''


def split_ingredients(text) -> list:
    if not text:
        return []
    return [part.strip() for part in str(text).split(',') if part.strip()]


class OpenFoodFactsClient:
    """Looks scan codes up in the Open Food Facts product API."""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls):
        config = settings.CATALOG_SOURCE
        return cls(base_url=config['API_BASE'], timeout=config['TIMEOUT'])

    def fetch(self, scan_code: str) -> Optional[CatalogEntry]:
        """
        Fetch one product.

        Args:
            scan_code: Barcode to look up

        Returns:
            CatalogEntry, or None when the source has no such product

        Raises:
            CatalogSourceError: On network failure, HTTP error or malformed payload
        """
        url = f"{self.base_url}/api/v0/product/{scan_code}.json"
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Catalog source request for %s failed: %s", scan_code, e)
            raise CatalogSourceError(f"Catalog source request failed: {e}")
        except ValueError:
            logger.warning("Catalog source returned non-JSON for %s", scan_code)
            raise CatalogSourceError("Catalog source returned a malformed response")

        if not isinstance(data, dict):
            raise CatalogSourceError("Catalog source returned a malformed response")

        if data.get('status') != 1:
            return None

        product = data.get('product')
        if not isinstance(product, dict):
            raise CatalogSourceError("Catalog source returned a malformed response")

        return CatalogEntry(
            name=product.get('product_name') or '',
            description=product.get('generic_name') or '',
            category=product.get('categories') or '',
            ingredients=split_ingredients(
                product.get('ingredients_text_fr') or product.get('ingredients_text')
            ),
            image_url=product.get('image_url') or '',
        )
