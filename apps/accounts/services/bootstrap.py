"""Start-up provisioning of the bootstrap admin account."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from ..models import Role

logger = logging.getLogger(__name__)

User = get_user_model()


@transaction.atomic
def ensure_bootstrap_admin():
    """
    Create the bootstrap admin when no admin account exists yet.

    Returns:
        Tuple of (admin User or None, created flag)
    """
    config = settings.BOOTSTRAP_ADMIN
    existing = User.objects.filter(role=Role.ADMIN).first()
    if existing is not None:
        if not User.objects.filter(email=config['EMAIL'].lower()).exists():
            logger.warning(
                "No account holds the protected admin email %s; every admin can be deleted",
                config['EMAIL'],
            )
        return existing, False

    admin = User.objects.create_superuser(
        email=config['EMAIL'],
        password=config['PASSWORD'],
        username=config['USERNAME'],
    )
    logger.info("Created bootstrap admin %s", admin.email)
    return admin, True
