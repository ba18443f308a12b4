"""Render a template and hand it to the configured email channel."""

import structlog

from canteen.notifications.channel import get_channel
from canteen.notifications.channel.email_port import SENT
from canteen.notifications.templates import get_template

logger = structlog.get_logger(__name__)


def send_templated_email(to: str, template_name: str, context: dict) -> dict:
    """Send one email and return the adapter's result dict.

    Adapter failures come back as ``{"status": "failed", ...}``; exceptions
    raised by the adapter propagate to the caller.
    """
    content = get_template(template_name).render(context)
    result = get_channel().deliver(to, content)

    if result.get("status") == SENT:
        logger.info("Email sent", template=template_name, message_id=result.get("message_id"))
    else:
        logger.warning("Email not sent", template=template_name, error=result.get("error"))
    return result
