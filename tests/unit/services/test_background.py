import asyncio
import logging

import pytest

from src.app.services.background import BestEffortRunner


@pytest.mark.asyncio
async def test_failures_are_logged_not_raised(caplog):
    runner = BestEffortRunner()

    async def boom():
        raise RuntimeError("provider down")

    with caplog.at_level(logging.ERROR):
        runner.submit(boom(), "reset email")
        await runner.drain()

    assert runner.pending == 0
    assert "Best-effort task failed: reset email" in caplog.text


@pytest.mark.asyncio
async def test_submit_does_not_wait_for_the_work():
    runner = BestEffortRunner()
    done = asyncio.Event()

    async def slow():
        await asyncio.sleep(0.01)
        done.set()

    runner.submit(slow(), "slow")
    assert not done.is_set()
    assert runner.pending == 1

    await runner.drain()
    assert done.is_set()
    assert runner.pending == 0
