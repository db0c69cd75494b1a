from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.rate_limiter import FixedWindowRateLimiter, window_bounds
from src.domain.entities import RateLimitWindow


class InMemoryRateLimitWindows:
    def __init__(self):
        self.rows = {}

    async def get(self, identity, action, window_start):
        return self.rows.get((identity, action, window_start))

    async def create(self, window):
        key = (window.identity, window.action, window.window_start)
        if key in self.rows:
            return None
        window.id = window.id or uuid4()
        self.rows[key] = window
        return window

    async def increment(self, window_id):
        for row in self.rows.values():
            if row.id == window_id:
                row.request_count += 1

    async def delete_before(self, action, window_start):
        stale = [
            key for key in self.rows if key[1] == action and key[2] < window_start
        ]
        for key in stale:
            del self.rows[key]
        return len(stale)


class RacingRateLimitWindows(InMemoryRateLimitWindows):
    """The first lookup misses a row another request has just created."""

    def __init__(self):
        super().__init__()
        self.missed = False

    async def get(self, identity, action, window_start):
        if not self.missed:
            self.missed = True
            return None
        return await super().get(identity, action, window_start)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rate_limit_windows = InMemoryRateLimitWindows()
    return uow


def test_window_bounds_align_to_epoch():
    start, end = window_bounds(datetime(2024, 5, 1, 10, 7, 30), 900)

    assert start == datetime(2024, 5, 1, 10, 0, 0)
    assert end == datetime(2024, 5, 1, 10, 15, 0)


@pytest.mark.asyncio
async def test_request_over_limit_is_rejected_until_next_window(uow):
    clock = Clock(datetime(2024, 5, 1, 10, 0, 1))
    limiter = FixedWindowRateLimiter(uow, clock=clock)

    results = [await limiter.check("203.0.113.7", "login", 3, 900) for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert results[-1].reset == datetime(2024, 5, 1, 10, 15, 0)

    clock.now = datetime(2024, 5, 1, 10, 15, 0)
    next_window = await limiter.check("203.0.113.7", "login", 3, 900)

    assert next_window.allowed
    assert next_window.remaining == 2


@pytest.mark.asyncio
async def test_identities_and_actions_are_counted_separately(uow):
    limiter = FixedWindowRateLimiter(uow, clock=Clock(datetime(2024, 5, 1, 10, 0, 0)))

    assert (await limiter.check("ip-1", "login", 1, 900)).allowed
    assert not (await limiter.check("ip-1", "login", 1, 900)).allowed
    assert (await limiter.check("ip-2", "login", 1, 900)).allowed
    assert (await limiter.check("ip-1", "signup", 1, 900)).allowed


@pytest.mark.asyncio
async def test_rejection_does_not_commit(uow):
    limiter = FixedWindowRateLimiter(uow, clock=Clock(datetime(2024, 5, 1, 10, 0, 0)))

    await limiter.check("key", "api", 1, 3600)
    uow.commit.reset_mock()
    await limiter.check("key", "api", 1, 3600)

    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_headers(uow):
    limiter = FixedWindowRateLimiter(uow, clock=Clock(datetime(2024, 5, 1, 10, 30, 0)))

    result = await limiter.check("key", "api", 1000, 3600)

    assert result.headers() == {
        "X-RateLimit-Limit": "1000",
        "X-RateLimit-Remaining": "999",
        "X-RateLimit-Reset": "2024-05-01T11:00:00.000Z",
    }


@pytest.mark.asyncio
async def test_losing_the_create_race_counts_against_the_existing_window(uow):
    window_start = datetime(2024, 5, 1, 10, 0, 0)
    windows = RacingRateLimitWindows()
    await windows.create(
        RateLimitWindow(
            identity="203.0.113.7", action="login", window_start=window_start, request_count=1
        )
    )
    uow.rate_limit_windows = windows
    limiter = FixedWindowRateLimiter(uow, clock=Clock(datetime(2024, 5, 1, 10, 0, 5)))

    result = await limiter.check("203.0.113.7", "login", 3, 900)

    assert result.allowed
    assert result.remaining == 1
    assert len(windows.rows) == 1
    assert windows.rows[("203.0.113.7", "login", window_start)].request_count == 2


@pytest.mark.asyncio
async def test_losing_the_create_race_still_rejects_a_full_window(uow):
    window_start = datetime(2024, 5, 1, 10, 0, 0)
    windows = RacingRateLimitWindows()
    await windows.create(
        RateLimitWindow(identity="key", action="api", window_start=window_start, request_count=1)
    )
    uow.rate_limit_windows = windows
    limiter = FixedWindowRateLimiter(uow, clock=Clock(datetime(2024, 5, 1, 10, 30, 0)))

    result = await limiter.check("key", "api", 1, 3600)

    assert not result.allowed
    uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_opening_a_window_prunes_earlier_windows_of_the_action(uow):
    clock = Clock(datetime(2024, 5, 1, 10, 0, 0))
    limiter = FixedWindowRateLimiter(uow, clock=clock)
    await limiter.check("ip-1", "login", 5, 900)
    await limiter.check("ip-2", "login", 5, 900)
    await limiter.check("ip-1", "signup", 5, 900)

    clock.now = datetime(2024, 5, 1, 10, 20, 0)
    await limiter.check("ip-3", "login", 5, 900)

    assert sorted(uow.rate_limit_windows.rows) == [
        ("ip-1", "signup", datetime(2024, 5, 1, 10, 0, 0)),
        ("ip-3", "login", datetime(2024, 5, 1, 10, 15, 0)),
    ]
