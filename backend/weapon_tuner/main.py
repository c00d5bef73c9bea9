"""
WEAPON STAT TUNER - host process
Game engine + tuning plugin (+ optional Telegram admin bot)
"""
import os
import asyncio
import logging
import signal
from contextlib import asynccontextmanager
from typing import Optional

from .game.engine import GameEngine
from .game.permissions import PermissionManager
from .tuning.plugin import WeaponStatTuner
from .tuning.store import OverrideStore, TUNER_CONFIG_PATH

BOT_TOKEN = os.getenv("BOT_TOKEN", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(config_path: str = TUNER_CONFIG_PATH, bot_token: str = BOT_TOKEN):
    """Startup and shutdown of everything the tuner needs"""
    # Startup
    store = OverrideStore.load(config_path)
    engine = GameEngine()
    permissions = PermissionManager.from_env()
    tuner = WeaponStatTuner(engine, store, permissions)
    tuner.load()
    await engine.start()

    # Telegram bot polling as background task
    bot_task: Optional[asyncio.Task] = None
    bot = dp = None
    if bot_token:
        from .bot.bot import create_bot, create_dispatcher
        from .bot.polling import start_polling
        bot = create_bot(bot_token)
        dp = create_dispatcher(tuner)
        bot_task = asyncio.create_task(start_polling(bot, dp))
        logger.info("[Bot] Polling task started")
    else:
        logger.info("[Bot] No BOT_TOKEN, skipping bot startup")

    try:
        yield tuner
    finally:
        # Shutdown
        try:
            if bot_task:
                from .bot.polling import stop_polling
                await stop_polling(bot, dp)
                bot_task.cancel()
                try:
                    await bot_task
                except asyncio.CancelledError:
                    pass
                except Exception as e:
                    logger.error(f"[Bot] Polling task failed: {e}")
                logger.info("[Bot] Stopped")
        finally:
            await engine.stop()
            tuner.unload()


async def serve():
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows: KeyboardInterrupt ends asyncio.run instead
            pass

    async with lifespan():
        logger.info("[Server] Running, Ctrl+C to stop")
        await stop.wait()


def main():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
