"""Notifier adapters - Email delivery implementations."""

from .console import ConsoleNotifier
from .sender import SmtpNotifier

__all__ = ["ConsoleNotifier", "SmtpNotifier"]
