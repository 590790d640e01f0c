"""
Tests for the process-wide request gate.
"""

import pytest

from sitewright.core.exceptions import GateBusyError
from sitewright.core.gate import RequestGate


class TestRequestGate:

    def test_starts_free(self):
        assert RequestGate().busy is False

    def test_try_acquire_is_single_permit(self):
        gate = RequestGate()

        assert gate.try_acquire() is True
        assert gate.busy is True
        assert gate.try_acquire() is False

        gate.release()
        assert gate.busy is False

    def test_ensure_available_does_not_acquire(self):
        gate = RequestGate()

        gate.ensure_available()
        assert gate.busy is False

    def test_ensure_available_rejects_when_held(self):
        gate = RequestGate()
        gate.try_acquire()

        with pytest.raises(GateBusyError):
            gate.ensure_available()

        gate.release()


@pytest.mark.asyncio
class TestGateSession:

    async def test_session_holds_and_releases(self):
        gate = RequestGate()

        async with gate.session():
            assert gate.busy is True

        assert gate.busy is False

    async def test_session_releases_on_error(self):
        gate = RequestGate()

        with pytest.raises(RuntimeError):
            async with gate.session():
                raise RuntimeError("boom")

        assert gate.busy is False

    async def test_nested_session_rejected_immediately(self):
        gate = RequestGate()

        async with gate.session():
            with pytest.raises(GateBusyError):
                async with gate.session():
                    pass
            assert gate.busy is True

        assert gate.busy is False
