"""Heimdall bot entrypoint — wires everything together."""

import logging
import sys

from pydantic import ValidationError
from telegram.ext import ApplicationBuilder, MessageHandler

from heimdall.config import Settings
from heimdall.dispatcher import CommandDispatcher
from heimdall.handlers.admin import announce_startup, log_error
from heimdall.handlers.chat import handle_mention
from heimdall.prober import ServerProber
from heimdall.security import MentionFilter

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    level=logging.INFO,
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def build_dispatcher(settings: Settings) -> CommandDispatcher:
    return CommandDispatcher(
        prober=ServerProber.from_settings(settings.server),
        responses=settings.automated_response.command_responses,
        default_message=settings.automated_response.default_message,
        details=settings.details,
    )


def main():
    try:
        settings = Settings()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    if not settings.enabled:
        logger.info("Bot is disabled in configuration")
        return

    logger.info(
        "Starting Heimdall bot (process=%s, port=%d)",
        settings.server.process_name,
        settings.server.port,
    )

    app = (
        ApplicationBuilder()
        .token(settings.telegram_bot_token)
        .post_init(announce_startup)
        .build()
    )
    app.bot_data["settings"] = settings
    app.bot_data["dispatcher"] = build_dispatcher(settings)

    if settings.automated_response.enabled:
        app.add_handler(MessageHandler(MentionFilter(), handle_mention))
    else:
        logger.info("Automated responses are disabled; the bot will stay silent")
    app.add_error_handler(log_error)

    logger.info("Bot is ready — polling for updates")
    app.run_polling(allowed_updates=["message"])


if __name__ == "__main__":
    main()
