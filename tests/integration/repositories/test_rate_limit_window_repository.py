from datetime import datetime

import pytest

from src.adapter.repositories.rate_limit_window_repository import RateLimitWindowRepository
from src.domain.entities import RateLimitWindow


def _window(identity: str, action: str, window_start: datetime) -> RateLimitWindow:
    return RateLimitWindow(
        identity=identity, action=action, window_start=window_start, request_count=1
    )


@pytest.mark.asyncio
async def test_second_create_for_the_same_window_returns_none(session_factory):
    window_start = datetime(2024, 5, 1, 10, 0, 0)

    async with session_factory() as session:
        repo = RateLimitWindowRepository(session)
        assert await repo.create(_window("203.0.113.7", "login", window_start)) is not None
        await session.commit()

    async with session_factory() as session:
        repo = RateLimitWindowRepository(session)
        assert await repo.create(_window("203.0.113.7", "login", window_start)) is None

        existing = await repo.get("203.0.113.7", "login", window_start)
        await repo.increment(existing.id)
        await session.commit()

    async with session_factory() as session:
        existing = await RateLimitWindowRepository(session).get(
            "203.0.113.7", "login", window_start
        )
        assert existing.request_count == 2


@pytest.mark.asyncio
async def test_delete_before_only_removes_earlier_windows_of_the_action(session_factory):
    old = datetime(2024, 5, 1, 10, 0, 0)
    current = datetime(2024, 5, 1, 10, 15, 0)

    async with session_factory() as session:
        repo = RateLimitWindowRepository(session)
        await repo.create(_window("ip-1", "login", old))
        await repo.create(_window("ip-2", "login", current))
        await repo.create(_window("ip-1", "signup", old))
        await session.commit()

        assert await repo.delete_before("login", current) == 1
        await session.commit()

        assert await repo.get("ip-1", "login", old) is None
        assert await repo.get("ip-2", "login", current) is not None
        assert await repo.get("ip-1", "signup", old) is not None
