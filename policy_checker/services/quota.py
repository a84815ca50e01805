"""
Free-check allowance used to gate policy checks and exports.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from policy_checker.config.settings import DEFAULT_FREE_CHECKS
from policy_checker.storage.quota import JsonQuotaStore

logger = logging.getLogger("policy_checker.services.quota")


@dataclass(frozen=True, slots=True)
class QuotaResult:
    """Outcome of a consume attempt."""

    allowed: bool
    remaining: int


class QuotaService:
    """
    Counts down a persisted allowance of free checks.

    The counter is initialised to `limit` the first time the store is read
    and never drops below zero.
    """

    def __init__(self, store: JsonQuotaStore, limit: int = DEFAULT_FREE_CHECKS):
        self.store = store
        self.limit = limit
        self._lock = threading.Lock()

    def _current(self) -> int:
        stored = self.store.read()
        if stored is None:
            self.store.write(self.limit)
            return self.limit
        return max(stored, 0)

    def remaining(self) -> int:
        with self._lock:
            return self._current()

    def consume(self) -> QuotaResult:
        with self._lock:
            current = self._current()
            if current <= 0:
                logger.info("Quota exhausted", extra={"remaining": 0})
                return QuotaResult(allowed=False, remaining=0)
            current -= 1
            self.store.write(current)
        logger.info("Quota consumed", extra={"remaining": current})
        return QuotaResult(allowed=True, remaining=current)


__all__ = ["QuotaResult", "QuotaService"]
