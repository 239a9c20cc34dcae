"""Category-bucketed price generation; the catalog source carries no prices."""

import random
from decimal import Decimal, ROUND_HALF_UP

# First keyword found in the category string wins
PRICE_BANDS = (
    ('Boissons', Decimal('1.00'), Decimal('5.00')),
    ('Snacks', Decimal('0.50'), Decimal('3.00')),
    ('Produits frais', Decimal('2.00'), Decimal('10.00')),
)
DEFAULT_BAND = (Decimal('1.00'), Decimal('20.00'))

CENT = Decimal('0.01')


def price_band(category) -> tuple:
    """Return the (min, max) price range for a category string."""
    if category:
        for keyword, low, high in PRICE_BANDS:
            if keyword in category:
                return low, high
    return DEFAULT_BAND


def generate_price(category, rng=None) -> Decimal:
    """
    Draw a price uniformly from the category's band.

    Args:
        category: Category text from the catalog source, may be empty
        rng: Object with a ``uniform(a, b)`` method, defaults to ``random``

    Returns:
        Decimal price rounded to cents, inside the band
    """
    low, high = price_band(category)
    rng = rng or random
    value = Decimal(str(rng.uniform(float(low), float(high))))
    return min(max(value.quantize(CENT, rounding=ROUND_HALF_UP), low), high)
