"""Tests for email templates and the mailer."""

import pytest
from canteen.notifications.mailer import send_templated_email
from canteen.notifications.templates import get_template


class TestTemplates:
    def test_order_confirmation_lists_lines(self):
        content = get_template("order_confirmation").render(
            {
                "name": "Asha",
                "order_id": "ord-1",
                "items": [{"name": "Tea", "quantity": 2, "subtotal": 40.0}],
                "total_amount": 40.0,
                "estimated_ready_time": "12:30",
            }
        )
        assert content["subject"] == "Order Confirmation - ord-1"
        assert "2 x Tea" in content["body"]
        assert "Estimated ready time: 12:30" in content["body"]

    def test_ready_update_mentions_pickup(self):
        content = get_template("order_status_update").render({"order_id": "ord-1", "status": "Ready"})
        assert "ready for pickup" in content["body"]

    @pytest.mark.parametrize(
        "template_name, context",
        [
            ("order_confirmation", {"order_id": "ord-1", "items": [], "total_amount": 0}),
            ("order_status_update", {"order_id": "ord-1", "status": "Ready"}),
            ("password_reset", {"reset_url": "http://localhost:3000/reset-password/abc"}),
        ],
    )
    def test_every_template_has_an_html_part(self, template_name, context):
        content = get_template(template_name).render({"name": "Asha", **context})
        assert content["html_body"].startswith("<")
        assert "Asha" in content["html_body"]

    def test_html_part_escapes_user_text(self):
        content = get_template("order_confirmation").render(
            {
                "name": "<b>Asha</b>",
                "order_id": "ord-1",
                "items": [{"name": "Fish & Chips", "quantity": 1, "subtotal": 90.0}],
                "total_amount": 90.0,
            }
        )
        assert "&lt;b&gt;Asha&lt;/b&gt;" in content["html_body"]
        assert "Fish &amp; Chips" in content["html_body"]
        assert "1 x Fish & Chips" in content["body"]

    def test_unknown_template(self):
        with pytest.raises(ValueError):
            get_template("newsletter")


class TestMailer:
    def test_returns_adapter_result(self, email_outbox):
        result = send_templated_email("a@campus.edu", "order_status_update", {"order_id": "o1", "status": "Ready"})
        assert result["status"] == "sent"
        assert email_outbox.emails_to("a@campus.edu")[0]["subject"] == "Order Update - o1"

    def test_failed_delivery_is_reported(self, email_outbox):
        email_outbox.configure(should_succeed=False, failure_reason="mailbox full")
        result = send_templated_email("a@campus.edu", "order_status_update", {"order_id": "o1", "status": "Ready"})
        assert result == {"message_id": None, "status": "failed", "error": "mailbox full"}

    def test_html_part_reaches_the_channel(self, email_outbox):
        send_templated_email("a@campus.edu", "order_status_update", {"order_id": "o1", "status": "Ready"})
        sent = email_outbox.emails_to("a@campus.edu")[0]
        assert "<strong>Ready</strong>" in sent["html_body"]

    def test_blank_recipient_is_not_handed_to_the_adapter(self, email_outbox):
        result = send_templated_email("  ", "order_status_update", {"order_id": "o1", "status": "Ready"})
        assert result == {"message_id": None, "status": "failed", "error": "Recipient address is missing"}
        assert email_outbox.sent_emails == []
