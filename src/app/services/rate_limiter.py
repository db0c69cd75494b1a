"""
Fixed-window rate limiter.

Counters live in the database, one row per (identity, action, window).
Windows are aligned to multiples of the window size since the epoch, so a
burst straddling a boundary can briefly see up to twice the nominal rate.
A unique index allows one row per window. A request that loses the race to
create it counts against the winner's row. Opening a window deletes the
action's rows from earlier windows.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import RateLimitWindow

_EPOCH = datetime(1970, 1, 1)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset: datetime

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": self.reset.isoformat(timespec="milliseconds") + "Z",
        }


def window_bounds(now: datetime, window_seconds: int):
    """Start and end of the fixed window containing ``now``."""
    elapsed = int((now - _EPOCH).total_seconds())
    start = _EPOCH + timedelta(seconds=(elapsed // window_seconds) * window_seconds)
    return start, start + timedelta(seconds=window_seconds)


class FixedWindowRateLimiter:
    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def check(
        self, identity: str, action: str, limit: int, window_seconds: int
    ) -> RateLimitResult:
        """Count one request for (identity, action) and say whether it may proceed."""
        window_start, window_end = window_bounds(self.clock(), window_seconds)

        async with self.uow:
            windows = self.uow.rate_limit_windows
            existing = await windows.get(identity, action, window_start)

            if existing is None:
                created = await windows.create(
                    RateLimitWindow(
                        identity=identity,
                        action=action,
                        window_start=window_start,
                        request_count=1,
                    )
                )
                if created is not None:
                    # First request of a new window, earlier windows are dead
                    await windows.delete_before(action, window_start)
                    await self.uow.commit()
                    return RateLimitResult(
                        allowed=True,
                        limit=limit,
                        remaining=max(limit - 1, 0),
                        reset=window_end,
                    )

                # Lost the race to create the window
                existing = await windows.get(identity, action, window_start)

            if existing.request_count >= limit:
                return RateLimitResult(
                    allowed=False, limit=limit, remaining=0, reset=window_end
                )

            count = existing.request_count + 1
            await windows.increment(existing.id)
            await self.uow.commit()
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=max(limit - count, 0),
                reset=window_end,
            )
