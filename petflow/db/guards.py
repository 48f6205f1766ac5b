import functools
import logging

from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


def read_or_default(default_factory=list):
    """Turn an unavailable database into an empty result for read helpers.

    Only wraps reads. Writes let ``OperationalError`` propagate so the caller
    gets a hard failure.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(db, *args, **kwargs):
            try:
                return func(db, *args, **kwargs)
            except OperationalError as exc:
                logger.warning("Database unavailable in %s: %s", func.__name__, exc)
                db.rollback()
                return default_factory()

        return wrapper

    return decorator
