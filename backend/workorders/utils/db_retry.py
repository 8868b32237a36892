"""Retry helpers for transient database failures using tenacity."""

from dataclasses import dataclass

from sqlalchemy.exc import DBAPIError, OperationalError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from workorders.config import settings


def is_transient_db_error(exc: BaseException) -> bool:
    """Connection loss, lock timeouts and deadlocks are worth another try."""
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


@dataclass
class DbRetryConfig:
    """Configuration for database retries with exponential backoff."""

    max_attempts: int = settings.db_retry_attempts
    min_wait: float = 0.1
    max_wait: float = 2.0
    multiplier: float = 0.2


def get_db_retrying(config: DbRetryConfig | None = None) -> AsyncRetrying:
    """Get configured AsyncRetrying for transient database errors.

    The whole unit of work must be inside the attempt, and the session must be
    rolled back before the next one:

        async for attempt in get_db_retrying():
            with attempt:
                work_order = await service.create_work_order(draft)

    Args:
        config: Optional retry configuration. Uses defaults if not provided.

    Returns:
        AsyncRetrying instance re-raising the last error when attempts run out.
    """
    cfg = config or DbRetryConfig()
    return AsyncRetrying(
        retry=retry_if_exception(is_transient_db_error),
        stop=stop_after_attempt(cfg.max_attempts),
        wait=wait_exponential(
            multiplier=cfg.multiplier,
            min=cfg.min_wait,
            max=cfg.max_wait,
        ),
        reraise=True,
    )
