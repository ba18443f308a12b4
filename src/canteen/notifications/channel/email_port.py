"""Outgoing canteen email: order receipts, pickup notices and reset links."""

from abc import ABC, abstractmethod

SENT = "sent"
FAILED = "failed"


def failed(error: str) -> dict:
    return {"message_id": None, "status": FAILED, "error": error}


class EmailPort(ABC):
    """Delivers one rendered email.

    Adapters report delivery problems in the returned dict rather than
    raising: ``{"message_id", "status": SENT | FAILED, "error"?}``.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict: ...

    def deliver(self, to: str | None, content: dict) -> dict:
        """Send what a template's ``render()`` returned.

        ``content`` holds ``subject`` and ``body`` and may hold ``html_body``.
        A blank recipient fails without reaching the adapter.
        """
        if not to or not to.strip():
            return failed("Recipient address is missing")
        return self.send(
            to=to.strip(),
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
