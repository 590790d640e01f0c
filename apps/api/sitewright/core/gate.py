"""Process-wide single-permit gate for build sessions."""

import logging
import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator

from .exceptions import GateBusyError


logger = logging.getLogger(__name__)


class RequestGate:
    """
    Fail-fast mutual exclusion around a build session.

    Callers that find the permit taken are rejected immediately with
    GateBusyError. Nobody waits, nothing is queued.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    def ensure_available(self) -> None:
        """Raise GateBusyError if a session is in flight. Does not acquire."""
        if self.busy:
            raise GateBusyError()

    @asynccontextmanager
    async def session(self) -> AsyncIterator["RequestGate"]:
        """Hold the permit for the duration of the block."""
        if not self.try_acquire():
            logger.warning("Rejected build session: gate is busy")
            raise GateBusyError()
        logger.debug("Gate acquired")
        try:
            yield self
        finally:
            self.release()
            logger.debug("Gate released")


gate = RequestGate()


def require_idle_gate() -> None:
    """FastAPI dependency that rejects requests while a session runs."""
    gate.ensure_available()
