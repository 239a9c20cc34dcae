import pytest
from apps.accounts.models import User


@pytest.fixture
def inactive_user(db):
    """Create and return a deactivated account."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='Sup3rSecret!',
        username='inactive',
        is_active=False,
    )
