"""In-memory email adapter used in development and tests."""

import time
from dataclasses import dataclass
from uuid import uuid4

from storefront.notification.email_port import EmailPort


@dataclass
class SentEmail:
    message_id: str
    to: str
    subject: str
    body: str


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.outbox: list[SentEmail] = []
        self.failure: str | None = None
        self.latency = 0.0

    def fail_with(self, reason: str = "Email delivery failed") -> None:
        """Make every following send report ``reason`` as a delivery failure."""
        self.failure = reason

    def slow_down(self, seconds: float) -> None:
        """Block each send for ``seconds`` before answering."""
        self.latency = seconds

    def send(self, to: str, subject: str, body: str) -> dict:
        if self.latency:
            time.sleep(self.latency)

        if self.failure is not None:
            return {"message_id": None, "status": "failed", "error": self.failure}

        email = SentEmail(message_id=f"email-{uuid4().hex[:12]}", to=to, subject=subject, body=body)
        self.outbox.append(email)
        return {"message_id": email.message_id, "status": "sent", "error": None}
