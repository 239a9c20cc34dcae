"""Products a user has bought, with the user's own rating."""

from django.db.models import FloatField, OuterRef, QuerySet, Subquery, Value
from django.db.models.functions import Coalesce

from apps.invoices.models import InvoiceItem
from ..models import Product, Rating


def list_purchased_products(*, user) -> QuerySet[Product]:
    """
    Return products whose scan codes appear on the user's invoices.

    Each product carries ``user_rating``: the user's own score, 0 if unrated.
    """
    scan_codes = (
        InvoiceItem.objects
        .filter(invoice__owner=user)
        .values('scan_code')
    )
    own_rating = (
        Rating.objects
        .filter(product=OuterRef('pk'), user=user)
        .values('score')[:1]
    )
    return (
        Product.objects
        .filter(scan_code__in=scan_codes)
        .annotate(user_rating=Coalesce(Subquery(own_rating), Value(0.0), output_field=FloatField()))
        .order_by('name')
    )
