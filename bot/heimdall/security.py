"""Mention gate: the bot only ever answers messages that address it."""

import logging

from telegram import Message, MessageEntity
from telegram.ext import filters

logger = logging.getLogger(__name__)


def bot_mentions(message: Message) -> list[str]:
    """Return the text of every entity in ``message`` that mentions the bot.

    Covers the plain ``@username`` form and text mentions, which display the
    bot's name instead of its username.
    """
    bot = message.get_bot()
    username = f"@{bot.username}".lower()
    found = []
    for entity, text in message.parse_entities(
        [MessageEntity.MENTION, MessageEntity.TEXT_MENTION]
    ).items():
        if entity.type == MessageEntity.MENTION and text.lower() == username:
            found.append(text)
        elif entity.type == MessageEntity.TEXT_MENTION and entity.user and entity.user.id == bot.id:
            found.append(text)
    return found


class MentionFilter(filters.MessageFilter):
    """Filter that only passes text messages from people that mention the bot."""

    def filter(self, message: Message) -> bool:
        # Channel posts and anonymous group admins carry no user
        if message.sender_chat is not None:
            return False

        user = message.from_user
        if user is None or user.is_bot:
            return False

        if not message.text:
            return False

        return bool(bot_mentions(message))
