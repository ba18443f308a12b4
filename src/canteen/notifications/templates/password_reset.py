"""Password reset template: carries the one-time reset link."""

from html import escape


class PasswordResetTemplate:
    name = "password_reset"

    @staticmethod
    def render(context: dict) -> dict:
        user_name = context.get("name", "there")
        reset_url = context["reset_url"]
        minutes = context.get("expires_in_minutes", 60)
        return {
            "subject": "Password Reset Request",
            "body": (
                f"Hi {user_name},\n\n"
                "You requested a password reset. Use the link below to choose a new password:\n\n"
                f"{reset_url}\n\n"
                f"This link expires in {minutes} minutes. "
                "If you did not request a reset, you can ignore this email."
            ),
            "html_body": (
                f"<p>Hi {escape(str(user_name))},</p>"
                "<p>You requested a password reset. Click the link below to choose a new password:</p>"
                f'<p><a href="{escape(reset_url)}">Reset password</a></p>'
                f"<p>This link expires in {minutes} minutes.</p>"
            ),
        }
