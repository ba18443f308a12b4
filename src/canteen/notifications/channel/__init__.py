"""Email channel registry.

Uses the in-memory fake adapter unless ``EMAIL_BACKEND=smtp`` is set, in
which case an SMTP adapter is built from the ``EMAIL_*`` environment
variables. Tests swap adapters with ``set_channel``.
"""

import os

from canteen.config import get_settings
from canteen.notifications.channel.email_port import EmailPort

_channel: EmailPort | None = None


def get_channel() -> EmailPort:
    """Return the configured email adapter (process-wide singleton)."""
    global _channel
    if _channel is None:
        if os.getenv("EMAIL_BACKEND", "fake").lower() == "smtp":
            from canteen.notifications.channel.smtp_email import SmtpEmailAdapter

            _channel = SmtpEmailAdapter.from_env(sender=get_settings().mail_from)
        else:
            from canteen.notifications.channel.fake_email import FakeEmailAdapter

            _channel = FakeEmailAdapter()
    return _channel


def set_channel(adapter: EmailPort) -> None:
    global _channel
    _channel = adapter


def reset_channels():
    """Drop the singleton so the next ``get_channel`` builds a fresh adapter."""
    global _channel
    _channel = None
