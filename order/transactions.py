import logging
from contextlib import contextmanager

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction

from storefront.exceptions import TransactionAborted

logger = logging.getLogger(__name__)

# PostgreSQL: serialization failure, deadlock, lock not available
# SQLite reports contention by message only; shared-cache test databases say "table is locked"
RETRYABLE_PGCODES = {"40001", "40P01", "55P03"}
RETRYABLE_MESSAGES = (
    "deadlock detected",
    "could not serialize access",
    "could not obtain lock",
    "database is locked",
    "database table is locked",
    "database schema is locked",
)


def _pgcode_from(exc):
    return getattr(exc, "pgcode", None) or getattr(getattr(exc, "__cause__", None), "pgcode", None)


def is_retryable(exc):
    code = _pgcode_from(exc)
    if code and code in RETRYABLE_PGCODES:
        return True
    msg = str(exc).lower()
    return any(k in msg for k in RETRYABLE_MESSAGES)


@contextmanager
def unit_of_work(using=DEFAULT_DB_ALIAS):
    """
    All-or-nothing block: commits on normal exit, rolls back on any exception.

    Database conflicts that leave nothing persisted are re-raised as
    ``TransactionAborted`` so callers can tell a retryable failure apart
    from a business error.
    """
    try:
        with transaction.atomic(using=using):
            yield
    except DatabaseError as exc:
        if is_retryable(exc):
            logger.warning("Transaction aborted on %s: %s", using, exc)
            raise TransactionAborted() from exc
        raise
