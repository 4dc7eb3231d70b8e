"""
User-facing notifications for mutation outcomes.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from .http import ApiRequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    kind: Literal["success", "error"]
    title: str
    message: Optional[str] = None


class Notifier:
    """Collects notifications and logs them; UIs subclass and override ``emit``."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if notification.kind == "error":
            logger.warning(f"{notification.title}: {notification.message}")
        else:
            logger.info(f"{notification.title}: {notification.message}")

    def success(self, title: str, message: Optional[str] = None) -> None:
        self.emit(Notification("success", title, message))

    def error(self, error: Exception, fallback: str) -> None:
        """Report a failed mutation, preferring the server's error text."""
        if isinstance(error, ApiRequestError) and error.error:
            message = error.error
        else:
            message = fallback
        self.emit(Notification("error", fallback, message))
