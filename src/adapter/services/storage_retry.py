"""
Bounded retry for storage calls.

Repositories decorate their methods with ``storage_retry``. Connection-level
faults are retried with exponential backoff; the session is rolled back before
each new attempt so the connection can be re-established. When the attempts
run out the fault surfaces as TransientStorageError and the original driver
message stays in the logs.
"""

import functools
import logging

from sqlalchemy.exc import InterfaceError, OperationalError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import ApplicationConfig
from src.domain.errors import TransientStorageError

logger = logging.getLogger(__name__)

TRANSIENT_STORAGE_ERRORS = (OperationalError, InterfaceError)


def storage_retry(func):
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        retrying = AsyncRetrying(
            stop=stop_after_attempt(ApplicationConfig.STORAGE_RETRY_ATTEMPTS),
            wait=wait_exponential(
                multiplier=ApplicationConfig.STORAGE_RETRY_BACKOFF_SECONDS,
                max=ApplicationConfig.STORAGE_RETRY_MAX_WAIT_SECONDS,
            ),
            retry=retry_if_exception_type(TRANSIENT_STORAGE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        await self.session.rollback()
                    return await func(self, *args, **kwargs)
        except TRANSIENT_STORAGE_ERRORS as exc:
            logger.error(f"Storage call {func.__qualname__} failed after retries: {exc}")
            raise TransientStorageError("Storage temporarily unavailable") from exc

    return wrapper
