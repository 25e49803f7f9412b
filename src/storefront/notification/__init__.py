"""Notification channel registry.

Provides singleton access to the email adapter. The fake adapter is used by
default; a real provider adapter can be registered with ``set_email_channel``
at application startup.
"""

from storefront.notification.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the configured email adapter, creating the fake one on first use."""
    global _email_channel
    if _email_channel is None:
        from storefront.notification.fake_email import FakeEmailAdapter

        _email_channel = FakeEmailAdapter()
    return _email_channel


def set_email_channel(adapter: EmailPort) -> None:
    global _email_channel
    _email_channel = adapter


def reset_channels():
    """Drop the adapter singleton (useful for testing)."""
    global _email_channel
    _email_channel = None
