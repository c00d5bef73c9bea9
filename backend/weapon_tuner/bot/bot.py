"""
Telegram bot for remote weapon tuning (optional, needs BOT_TOKEN).
"""
import os
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

BOT_TOKEN = os.getenv("BOT_TOKEN", "")


def create_bot(token: str = BOT_TOKEN) -> Bot:
    # Plain text replies: stat listings contain '<weapon>' placeholders
    return Bot(token=token, default=DefaultBotProperties(parse_mode=None))


def create_dispatcher(tuner) -> Dispatcher:
    """Dispatcher with tune routes; `tuner` reaches handlers as workflow data."""
    from .handlers import admin_router

    dp = Dispatcher(tuner=tuner)
    dp.include_router(admin_router)
    return dp
