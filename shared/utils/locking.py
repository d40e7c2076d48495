# shared/utils/locking.py
"""
Scheduling locks. One SchedulingLock row per scope, locked FOR UPDATE for the
lifetime of the surrounding transaction.
"""
import logging
from contextlib import contextmanager

from django.apps import apps
from django.db import transaction

logger = logging.getLogger(__name__)


def lock_scope(*parts) -> str:
    """Build a lock scope key, e.g. lock_scope('allocate', '2025', '10')."""
    return ':'.join(str(part) for part in parts)


@contextmanager
def scheduling_lock(scope: str):
    """
    Hold an exclusive lock on `scope` until the current transaction ends.

    Must be used inside transaction.atomic(). Two holders of the same scope
    serialize; different scopes never block each other.
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("scheduling_lock() requires an atomic block")

    SchedulingLock = apps.get_model('core', 'SchedulingLock')
    SchedulingLock.objects.get_or_create(scope=scope)
    lock = SchedulingLock.objects.select_for_update().get(scope=scope)
    lock.touch()
    logger.debug(f"Acquired scheduling lock {scope}")
    yield lock
