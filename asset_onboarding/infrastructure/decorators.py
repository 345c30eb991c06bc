"""
Retry policy for calls to the catalog server.

Create requests are not idempotent, so only failures that happen before the
request leaves this process are retried. Once the attempts are used up the
last connection error is re-raised to the adapter.
"""

import logging

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

logger = logging.getLogger(__name__)

_CONNECT_ATTEMPTS = 3
_MIN_WAIT_SECONDS = 1
_MAX_WAIT_SECONDS = 10


def _log_connect_retry(retry_state):
    """Log which endpoint could not be reached and when the next try runs."""
    exception = retry_state.outcome.exception()
    target = getattr(retry_state.args[0], "base_url", "catalog server")
    logger.warning(
        f"Could not connect to {target} ({type(exception).__name__}), "
        f"attempt {retry_state.attempt_number} of {_CONNECT_ATTEMPTS}; "
        f"retrying in {retry_state.next_action.sleep:.2f}s..."
    )


retry_on_connect_error = retry(
    stop=stop_after_attempt(_CONNECT_ATTEMPTS),
    wait=wait_exponential(
        multiplier=1, min=_MIN_WAIT_SECONDS, max=_MAX_WAIT_SECONDS
    ),
    retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
    before_sleep=_log_connect_retry,
    reraise=True,
)
