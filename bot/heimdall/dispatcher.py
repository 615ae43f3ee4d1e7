"""Turns text addressed to the bot into a reply.

Only the first recognised keyword counts; any other words are ignored, so
"help status" answers with help. There is no argument parsing.
"""

import logging
import re
from collections.abc import Iterable, Mapping

from heimdall.config import ServerDetails
from heimdall.prober import ServerProber
from heimdall.report import format_server_status

logger = logging.getLogger(__name__)

STATUS_COMMAND = "status"
UNKNOWN_PREAMBLE = "❓ Unknown command. Try one of these:\n\n"
STATUS_UNKNOWN = "Server status unknown."


def strip_mentions(text: str, mentions: Iterable[str]) -> str:
    """Remove every mention form from ``text``, then trim and lower-case it."""
    for mention in mentions:
        if mention:
            # Whole mentions only: "@bot" must not eat the start of "@botinfo"
            pattern = rf"(?<!\w){re.escape(mention)}(?!\w)"
            text = re.sub(pattern, "", text, flags=re.IGNORECASE)
    return text.strip().lower()


class CommandDispatcher:
    """Classifies mention text and produces the reply.

    ``responses`` maps lower-case keywords to canned replies. ``status`` is
    always recognised and answered from a live probe.
    """

    def __init__(
        self,
        prober: ServerProber,
        responses: Mapping[str, str],
        default_message: str,
        details: ServerDetails,
    ):
        self.prober = prober
        self.responses = responses
        self.default_message = default_message
        self.details = details

    def extract_command(self, content: str) -> str | None:
        """Return the first word that is a known command, if any."""
        for word in content.split():
            word = word.lower()
            if word == STATUS_COMMAND or word in self.responses:
                return word
        return None

    async def handle_mention(self, raw_text: str, mentions: Iterable[str] = ()) -> str:
        content = strip_mentions(raw_text, mentions)
        if not content:
            return self.default_message

        command = self.extract_command(content)
        if command == STATUS_COMMAND:
            return await self.status_reply()
        if command is not None:
            return self.responses[command]

        logger.debug("No known command in %r", content)
        help_text = self.responses.get("help", self.default_message)
        return f"{UNKNOWN_PREAMBLE}{help_text}"

    async def status_reply(self) -> str:
        try:
            status = await self.prober.check_status()
            return format_server_status(status, self.details)
        except Exception:
            logger.exception("Status check failed unexpectedly")
            return self.responses.get(STATUS_COMMAND, STATUS_UNKNOWN)
