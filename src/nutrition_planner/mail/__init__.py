"""Menu email delivery."""

from nutrition_planner.mail.sender import MailSender

__all__ = ["MailSender"]
