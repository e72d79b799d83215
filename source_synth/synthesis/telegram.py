"""Deterministic config builder for Telegram channels."""

from source_synth.synthesis.schemas import (
    TelegramCommonConfig,
    TelegramSettings,
    TelegramSourceConfig,
)

_LINK_PREFIXES = ("https://t.me/", "http://t.me/", "t.me/")


def extract_username(identifier: str) -> str:
    """Reduce a ``t.me`` link or ``@handle`` to the bare username.

    Examples:
        https://t.me/channel_news_test -> channel_news_test
        @foo -> foo
        foo -> foo
    """
    username = identifier.strip()
    for prefix in _LINK_PREFIXES:
        if username.startswith(prefix):
            username = username[len(prefix):]
            break
    return username.removeprefix("@").strip()


def build_telegram_config(identifier: str) -> TelegramSourceConfig:
    """Build the config for a Telegram source.

    Telegram sources have a fully known shape, so this is pure string
    handling over defaults and never fails.
    """
    return TelegramSourceConfig(
        common=TelegramCommonConfig(),
        telegram=TelegramSettings(username=extract_username(identifier)),
    )
