"""Port for outbound email."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Delivers one plain-text message.

    Adapters report delivery problems in the returned dict rather than raising.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> dict:
        """Return ``{"message_id", "status": "sent" | "failed", "error"}``."""
