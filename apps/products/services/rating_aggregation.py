"""Rating upsert with average recomputation under a row lock."""

import math

from django.db import transaction
from django.db.models import Avg

from ..models import Product, Rating
from .exceptions import InvalidRatingError, ProductNotFoundError


def _validate_score(score) -> float:
    if isinstance(score, bool):
        raise InvalidRatingError()
    try:
        value = float(score)
    except (TypeError, ValueError):
        raise InvalidRatingError()
    if math.isnan(value) or not 0 <= value <= 5:
        raise InvalidRatingError()
    return value


@transaction.atomic
def rate_product(*, scan_code: str, user, score, comment: str = '') -> Product:
    """
    Record the caller's rating and recompute the product average.

    The product row stays locked from the upsert to the average write, so two
    concurrent ratings cannot overwrite each other's average.

    Args:
        scan_code: Product barcode
        user: Rating author; a second rating replaces the first
        score: Number in [0, 5]
        comment: Optional free text

    Returns:
        Updated Product instance

    Raises:
        ProductNotFoundError: If the scan code is unknown
        InvalidRatingError: If score is not a number in [0, 5]
    """
    try:
        product = (
            Product.objects
            .select_for_update()
            .get(scan_code=scan_code)
        )
    except Product.DoesNotExist:
        raise ProductNotFoundError()

    value = _validate_score(score)

    Rating.objects.update_or_create(
        product=product,
        user=user,
        defaults={'score': value, 'comment': comment or ''},
    )

    aggregates = product.ratings.aggregate(avg=Avg('score'))
    product.average_rating = aggregates['avg'] or 0.0
    product.save(update_fields=['average_rating', 'updated_at'])

    return product
