"""Platform detection for raw source identifiers."""

from source_synth.synthesis.schemas import Platform

TELEGRAM_LINK_MARKER = "t.me/"
TELEGRAM_HANDLE_PREFIX = "@"


def classify(identifier: str) -> Platform:
    """Classify an identifier as a Telegram entity or a website.

    Heuristic, not a URL grammar check: anything containing ``t.me/`` or
    starting with ``@`` is Telegram, everything else is a website. Never
    raises, so malformed input is simply classified as a website.
    """
    if TELEGRAM_LINK_MARKER in identifier or identifier.startswith(TELEGRAM_HANDLE_PREFIX):
        return Platform.TELEGRAM
    return Platform.WEBSITE
