"""Chat message handler — answers messages that mention the bot."""

import logging

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from heimdall.dispatcher import CommandDispatcher
from heimdall.security import bot_mentions

logger = logging.getLogger(__name__)


async def handle_mention(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Reply in the same chat with the dispatcher's answer."""
    message = update.message
    if not message or not message.text:
        return

    dispatcher: CommandDispatcher = context.bot_data["dispatcher"]
    logger.info(
        "Bot mentioned by %s in %s: %s",
        message.from_user.username if message.from_user else "unknown",
        message.chat.title or "private chat",
        message.text,
    )

    response = await dispatcher.handle_mention(message.text, bot_mentions(message))

    try:
        await message.reply_text(response)
    except TelegramError:
        logger.exception("Failed to send response message")
