"""Configuration loader using pydantic-settings."""

import logging

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings

DEFAULT_MESSAGE = (
    "🏔️ Valheim Server Bot 🏔️\n\n"
    "I'm here to help you with Valheim server information!\n\n"
    "Available commands:\n"
    "• @bot status - Get server status\n"
    "• @bot help - Show this help message\n"
    "• @bot info - Get server information"
)

DEFAULT_COMMAND_RESPONSES = {
    "status": "🟢 Server Status: Online and ready for Vikings!\n🌍 World: Midgard",
    "help": (
        "🏔️ Valheim Server Commands 🏔️\n\n"
        "• status - Check server status\n"
        "• info - Get server details\n"
        "• help - Show this message"
    ),
    "info": (
        "⚔️ Valheim Server Information ⚔️\n\n"
        "🏷️ Name: The Thatch Hut\n"
        "🌍 World: Midgard\n"
        "👥 Max Players: 10\n"
        "🔒 Password Protected: Yes"
    ),
}


class ServerSettings(BaseModel):
    """The locally hosted game server to probe."""

    process_name: str = "valheim_server"
    host: str = "127.0.0.1"
    port: int = 2456
    udp_timeout: float = 1.0
    tcp_timeout: float = 2.0


class ServerDetails(BaseModel):
    """Metadata shown in the rendered status report."""

    name: str = "The Thatch Hut"
    world: str = "Midgard"
    password: str | None = None
    mods: str | None = None


class AutomatedResponseSettings(BaseModel):
    """Replies sent when the bot is mentioned."""

    enabled: bool = True
    default_message: str = DEFAULT_MESSAGE
    command_responses: dict[str, str] = DEFAULT_COMMAND_RESPONSES

    @field_validator("command_responses")
    @classmethod
    def lowercase_keywords(cls, value: dict[str, str]) -> dict[str, str]:
        return {key.strip().lower(): text for key, text in value.items()}


class Settings(BaseSettings):
    """Bot configuration loaded from environment variables."""

    telegram_bot_token: str
    enabled: bool = True

    # Chat that receives the one-off "bot is online" post. Unset disables it.
    announce_chat_id: int | None = None
    log_level: str = "INFO"

    server: ServerSettings = ServerSettings()
    details: ServerDetails = ServerDetails()
    automated_response: AutomatedResponseSettings = AutomatedResponseSettings()

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value!r}")
        return level

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }
