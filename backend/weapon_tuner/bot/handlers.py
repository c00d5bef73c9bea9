"""
Bot command handlers: /tune for the server admin.
"""
import logging
import os
from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from ..tuning.commands import DENIED

logger = logging.getLogger(__name__)

ADMIN_TELEGRAM_ID = int(os.getenv("ADMIN_TELEGRAM_ID") or 0)

admin_router = Router()


def is_admin(user_id: int, admin_id: int = None) -> bool:
    admin_id = ADMIN_TELEGRAM_ID if admin_id is None else admin_id
    return bool(admin_id) and user_id == admin_id


# ========== /tune ==========

@admin_router.message(Command("tune"))
async def cmd_tune(message: Message, command: CommandObject, tuner):
    if message.from_user is None or not is_admin(message.from_user.id):
        await message.reply(DENIED)
        return

    args = (command.args or "").split()
    logger.info(f"[Bot] Admin {message.from_user.id}: /tune {' '.join(args)}")
    await message.reply(tuner.run_command(args))
