# Background refresh of the monthly storage ledger.
import logging

from celery import shared_task
from django.db import transaction

from .services.storage_history import update_storage_history

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def update_storage_history_task():
    """Best effort: a failed snapshot only reaches the log."""
    try:
        record = update_storage_history()
    except Exception:
        logger.exception("storage history update failed")
        return None
    return record.record_month


def schedule_storage_history_update(using=None):
    """
    Queue a ledger refresh once the surrounding transaction commits.
    Never raises into the caller.
    """
    transaction.on_commit(lambda: update_storage_history_task.delay(), using=using, robust=True)
