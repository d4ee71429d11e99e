"""Best-effort activity recording.

`record_activity` is called after a mutating operation succeeded. It writes
inside its own savepoint so a failing insert neither raises into the caller
nor breaks the caller's transaction.
"""

import logging

from django.db import transaction

from .models import Activity

logger = logging.getLogger(__name__)


def record_activity(activity_type, description, *, user=None, business=None,
                    review=None, category=None, metadata=None) -> None:
    """Append one Activity; failures are logged and swallowed."""
    try:
        with transaction.atomic():
            Activity.objects.create(
                type=activity_type,
                description=description,
                user=user if user is not None and user.is_authenticated else None,
                business=business,
                review=review,
                category=category,
                metadata=metadata or {},
            )
    except Exception:
        logger.exception("Could not record activity %s (%s)", activity_type, description)
