"""
Fun Run registration bot.
Entry point: creates the bot, registers routers + middleware, handles graceful shutdown.
"""
import asyncio
import logging
import signal
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent

from funrun.config import settings
from funrun.middlewares import RateLimitMiddleware

# ── Handlers ──────────────────────────────────────────────────────────────────
from funrun.handlers.common import router as common_router
from funrun.handlers.registration import router as registration_router
from funrun.handlers.fallback import router as fallback_router

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )


def build_dispatcher() -> Dispatcher:
    # Drafts live only here: MemoryStorage is the whole "session"
    dp = Dispatcher(storage=MemoryStorage())

    # ── Global error handler - ensures callbacks are always answered ──────────
    @dp.errors()
    async def handle_error(event: ErrorEvent) -> None:
        logger.exception("Unhandled error: %s", event.exception)
        update = event.update
        if update.callback_query:
            try:
                await update.callback_query.answer(
                    "⚠️ Terjadi kesalahan. Silakan coba lagi.", show_alert=True
                )
            except TelegramAPIError:
                pass

    # ── Global middlewares ────────────────────────────────────────────────────
    dp.update.middleware(
        RateLimitMiddleware(rate=settings.RATE_LIMIT, period=settings.RATE_PERIOD)
    )

    # ── Routers - order matters for handler priority ──────────────────────────
    dp.include_router(common_router)
    dp.include_router(registration_router)

    # !! Must be last - catches any callback not handled above !!
    dp.include_router(fallback_router)

    return dp


async def main() -> None:
    setup_logging()
    logger.info("Starting %s registration bot…", settings.EVENT_NAME)

    bot = Bot(
        token=settings.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher()

    # ── Graceful shutdown on SIGTERM (Docker / systemd) ───────────────────────
    loop = asyncio.get_running_loop()
    polling: asyncio.Task | None = None

    def _handle_signal() -> None:
        logger.info("Received shutdown signal, stopping…")
        if polling is not None:
            polling.cancel()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _handle_signal)
        except NotImplementedError:
            # Windows does not support add_signal_handler
            pass

    try:
        logger.info("Bot is running. Press Ctrl+C to stop.")
        polling = asyncio.create_task(
            dp.start_polling(
                bot,
                allowed_updates=dp.resolve_used_update_types(),
                handle_signals=False,
            )
        )
        await polling
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("Shutting down…")
        await bot.session.close()
        logger.info("Shutdown complete.")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
