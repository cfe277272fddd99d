"""Retry policy for one logical request (a page fetch or the submit call).

Two budgets are tracked separately. HTTP 429 draws on the rate-limit budget
and backs off longer on every hit; anything else draws on the general budget.
A run of 429s therefore never uses up the retries meant for server errors.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Type

import requests

from .errors import (
    RateLimitExceeded,
    RequestFailed,
    ServerErrorExhausted,
    TransientRequestError,
)

logger = logging.getLogger(__name__)

RATE_LIMITED = 429
SERVER_ERRORS = (500, 502, 503)


@dataclass(frozen=True)
class RetryState:
    # attempt is the 1-based number of the current general attempt
    attempt: int = 1
    rate_limit_attempts: int = 0


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    state: RetryState
    delay: float = 0.0
    error: Optional[Type[RequestFailed]] = None
    reason: str = ""


def status_of(exc) -> Optional[int]:
    response = getattr(exc, "response", None)
    if response is None:
        return None
    return getattr(response, "status_code", None)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    max_rate_limit_retries: int = 8
    server_error_backoff: float = 1.0
    rate_limit_backoff: float = 3.0

    @classmethod
    def from_settings(cls, settings):
        return cls(
            max_retries=settings.max_retries,
            max_rate_limit_retries=settings.max_rate_limit_retries,
            server_error_backoff=settings.server_error_backoff,
            rate_limit_backoff=settings.rate_limit_backoff,
        )

    def decide(self, state: RetryState, status: Optional[int]) -> RetryDecision:
        """Decide what to do after a failed attempt that ended with ``status``."""
        if status == RATE_LIMITED:
            hits = state.rate_limit_attempts + 1
            if hits > self.max_rate_limit_retries:
                return RetryDecision(
                    False,
                    replace(state, rate_limit_attempts=hits),
                    error=RateLimitExceeded,
                    reason=f"rate limited {self.max_rate_limit_retries} times",
                )
            return RetryDecision(
                True,
                replace(state, rate_limit_attempts=hits),
                delay=self.rate_limit_backoff * hits,
                reason=f"rate limited ({hits}/{self.max_rate_limit_retries})",
            )

        state = replace(state, rate_limit_attempts=0)

        if status in SERVER_ERRORS:
            if state.attempt >= self.max_retries:
                return RetryDecision(
                    False,
                    state,
                    error=ServerErrorExhausted,
                    reason=f"server error {status} after {self.max_retries} attempts",
                )
            return RetryDecision(
                True,
                replace(state, attempt=state.attempt + 1),
                delay=self.server_error_backoff * state.attempt,
                reason=f"server error {status} ({state.attempt}/{self.max_retries})",
            )

        if state.attempt >= self.max_retries:
            return RetryDecision(
                False,
                state,
                error=TransientRequestError,
                reason=f"request failed after {self.max_retries} attempts",
            )
        return RetryDecision(
            True,
            replace(state, attempt=state.attempt + 1),
            reason=f"request failed with status {status} ({state.attempt}/{self.max_retries})",
        )

    def run(self, send: Callable, label="request", sleep=time.sleep):
        """Call ``send()`` until it returns, sleeping between failed attempts.

        Raises a RequestFailed subclass once a budget is exhausted.
        """
        state = RetryState()
        while True:
            try:
                return send()
            except requests.RequestException as exc:
                status = status_of(exc)
                decision = self.decide(state, status)
                if not decision.retry:
                    logger.error("%s: %s", label, decision.reason)
                    raise decision.error(f"{label}: {decision.reason}", status=status) from exc
                if decision.delay:
                    logger.info("%s: %s, waiting %.1fs", label, decision.reason, decision.delay)
                    sleep(decision.delay)
                else:
                    logger.info("%s: %s, retrying", label, decision.reason)
                state = decision.state
