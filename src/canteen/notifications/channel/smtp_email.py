"""SMTP email adapter for deployments with a real mail relay."""

import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from canteen.notifications.channel.email_port import SENT, EmailPort, failed

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(self, host, port=587, username=None, password=None, sender=None, use_tls=True, timeout=10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_env(cls, sender):
        return cls(
            host=os.environ["EMAIL_HOST"],
            port=int(os.getenv("EMAIL_PORT", "587")),
            username=os.getenv("EMAIL_USERNAME"),
            password=os.getenv("EMAIL_PASSWORD"),
            sender=sender,
            use_tls=os.getenv("EMAIL_USE_TLS", "true").lower() == "true",
        )

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(message)
        except (OSError, smtplib.SMTPException) as exc:
            logger.warning("SMTP delivery failed", to=to, error=str(exc))
            return failed(str(exc))

        return {"message_id": message["Message-ID"], "status": SENT}
