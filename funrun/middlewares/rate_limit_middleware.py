"""
Rate-limiting middleware.

Limits how many updates a single Telegram user can send within a rolling
time window.  Users over the limit get a throttle notice and the update is
dropped.
"""
from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict

from aiogram import BaseMiddleware
from aiogram.exceptions import TelegramAPIError
from aiogram.types import TelegramObject

logger = logging.getLogger(__name__)

THROTTLE_TEXT = "⏳ Terlalu banyak permintaan. Tunggu sebentar lalu coba lagi."


class RateLimitMiddleware(BaseMiddleware):
    """
    Sliding-window rate limiter.

    Parameters
    ----------
    rate   : maximum number of updates allowed per user per window
    period : window size in seconds
    """

    def __init__(self, rate: int = 30, period: float = 60.0) -> None:
        self._rate   = rate
        self._period = period
        # user_id → timestamps inside the window, oldest first
        self._history: Dict[int, Deque[float]] = defaultdict(deque)
        self._last_sweep = 0.0

    def hit(self, user_id: int, now: float | None = None) -> bool:
        """Record one update; False when the user is over the limit."""
        now = time.monotonic() if now is None else now
        if now - self._last_sweep > self._period:
            self._sweep(now)
        window = self._history[user_id]
        while window and now - window[0] > self._period:
            window.popleft()
        if len(window) >= self._rate:
            return False
        window.append(now)
        return True

    def _sweep(self, now: float) -> None:
        """Forget users whose whole window has expired."""
        stale = [
            user_id for user_id, window in self._history.items()
            if not window or now - window[-1] > self._period
        ]
        for user_id in stale:
            del self._history[user_id]
        self._last_sweep = now

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user = data.get("event_from_user")
        if user is None or self.hit(user.id):
            return await handler(event, data)

        logger.info("Throttled user %s", user.id)
        await self._throttle_response(data)
        return None

    @staticmethod
    async def _throttle_response(data: Dict[str, Any]) -> None:
        update = data.get("event_update")
        if update is None:
            return
        try:
            if update.callback_query:
                await update.callback_query.answer(THROTTLE_TEXT, show_alert=True)
            elif update.message:
                await update.message.answer(THROTTLE_TEXT)
        except TelegramAPIError as exc:
            logger.warning("Failed to send throttle notice: %s", exc)
