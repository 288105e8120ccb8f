"""Fixed-interval retry policy for rate-limited requests."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

import httpx
from pydantic import BaseModel

from gh_activity.errors.exceptions import NetworkError, RequestFailed, UnknownIdentity

logger = logging.getLogger(__name__)

RATE_LIMITED = 403
NOT_FOUND = 404


class RetryPhase(Enum):
    """States of a single logical fetch."""

    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RetryState(BaseModel):
    """Progress of one fetch. Created per call, never shared."""

    attempts_remaining: int
    delay_ms: int
    attempts_made: int = 0
    phase: RetryPhase = RetryPhase.ATTEMPTING

    @property
    def retries_used(self) -> int:
        return max(self.attempts_made - 1, 0)


class RetryPolicy:
    """Retries a GET on HTTP 403 with a fixed delay between attempts.

    Only the rate-limit status is retried. Any other non-200 status fails at
    once, and transport errors are raised as NetworkError without retrying.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        delay_ms: int = 5000,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.max_attempts = max_attempts
        self.delay_ms = delay_ms
        self._sleep = sleep

    def new_state(self) -> RetryState:
        return RetryState(attempts_remaining=self.max_attempts, delay_ms=self.delay_ms)

    async def fetch(
        self,
        client: httpx.AsyncClient,
        url: str,
        state: RetryState | None = None,
    ) -> bytes:
        """GET url, retrying while rate limited.

        Args:
            client: HTTP client used for every attempt
            url: Absolute or client-relative URL
            state: Optional state object to observe progress; a fresh one is
                created when omitted

        Returns:
            The body of the first 200 response

        Raises:
            NetworkError: The request could not be sent or answered
            UnknownIdentity: The API answered 404
            RequestFailed: Any other non-200 answer, or 403 with no retries left
        """
        state = state or self.new_state()

        while True:
            state.phase = RetryPhase.ATTEMPTING
            state.attempts_made += 1
            logger.debug(f"GET {url} (attempt {state.attempts_made})")

            try:
                response = await client.get(url)
            except httpx.TransportError as e:
                state.phase = RetryPhase.FAILED
                logger.error(f"Network error for {url}: {e}")
                raise NetworkError(url, e) from e

            status = response.status_code
            if status == 200:
                state.phase = RetryPhase.SUCCEEDED
                return response.content

            if status == RATE_LIMITED and state.attempts_remaining > 0:
                state.phase = RetryPhase.WAITING
                logger.warning(
                    f"Rate limited on {url}, retrying in {state.delay_ms}ms "
                    f"({state.attempts_remaining} attempts left)"
                )
                await self._sleep(state.delay_ms / 1000)
                state.attempts_remaining -= 1
                continue

            state.phase = RetryPhase.FAILED
            logger.error(f"Request to {url} failed with status {status}")
            if status == NOT_FOUND:
                raise UnknownIdentity(url)
            raise RequestFailed(status, url)
