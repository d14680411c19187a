"""Outbound email."""

from .mailer import Mailer, MailerConfig

__all__ = ["Mailer", "MailerConfig"]
