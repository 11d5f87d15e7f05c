"""
Module: sinks/retry.py
Description: Retry policy for remote appends.

An append rejected for a stale sequence token is retried exactly once,
after the caller has refreshed the token. Every other failure propagates
on the first attempt.
"""

from tenacity import retry, retry_if_exception_type, stop_after_attempt

from app_logger.errors import StaleTokenError
from app_logger.utils.logger import get_logger

logger = get_logger(__name__)


def _log_stale_retry(retry_state):
    error = retry_state.outcome.exception()
    logger.warning(
        "Sequence token was stale, retrying append",
        attempt=retry_state.attempt_number,
        destination=getattr(error, "destination", None)
    )


stale_token_retry = retry(
    stop=stop_after_attempt(2),
    retry=retry_if_exception_type(StaleTokenError),
    before_sleep=_log_stale_retry,
    reraise=True
)
