"""Bot lifecycle hooks."""

import logging

from telegram.error import TelegramError
from telegram.ext import Application

from heimdall.config import Settings

logger = logging.getLogger(__name__)


async def announce_startup(application: Application):
    """Post the default message once to the announcement chat, if configured."""
    settings: Settings = application.bot_data["settings"]
    if settings.announce_chat_id is None:
        return

    text = (
        f"🏔️ {settings.details.name} bot is online!\n\n"
        f"{settings.automated_response.default_message}"
    )
    try:
        await application.bot.send_message(chat_id=settings.announce_chat_id, text=text)
        logger.info("Posted startup message to chat %s", settings.announce_chat_id)
    except TelegramError:
        logger.exception("Failed to post startup message")


async def log_error(update: object, context):
    """Application-wide error handler: log and keep polling."""
    logger.error("Unhandled error while processing %r", update, exc_info=context.error)
