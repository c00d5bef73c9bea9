"""
Start bot polling as background asyncio task.
"""
import logging
from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand, BotCommandScopeChat

from .handlers import ADMIN_TELEGRAM_ID

logger = logging.getLogger(__name__)


async def set_bot_commands(bot: Bot):
    """Show /tune in the admin's private chat."""
    if not ADMIN_TELEGRAM_ID:
        logger.warning("[Bot] ADMIN_TELEGRAM_ID not set, nobody can use /tune")
        return
    try:
        commands = [
            BotCommand(command="tune", description="Weapon tuning: list, reset, resetall, <weapon> <stat> <value>"),
        ]
        await bot.set_my_commands(commands, scope=BotCommandScopeChat(chat_id=ADMIN_TELEGRAM_ID))
    except Exception as e:
        logger.warning(f"[Bot] Could not set admin commands: {e}")


async def start_polling(bot: Bot, dp: Dispatcher):
    """Run long polling until stopped."""
    logger.info("[Bot] Starting polling...")
    await bot.delete_webhook(drop_pending_updates=True)
    await set_bot_commands(bot)
    logger.info("[Bot] Commands registered, polling started")
    await dp.start_polling(bot, handle_signals=False)


async def stop_polling(bot: Bot, dp: Dispatcher):
    """Stop polling."""
    logger.info("[Bot] Stopping polling...")
    try:
        await dp.stop_polling()
    except RuntimeError as e:
        logger.info(f"[Bot] Polling was not running: {e}")
    await bot.session.close()
