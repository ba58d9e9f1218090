"""Non-fatal user notifications raised by the dashboard view models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Variant = Literal["default", "destructive"]


@dataclass(frozen=True, slots=True)
class Notification:
    title: str
    description: str
    variant: Variant = "default"
    details: tuple[str, ...] = ()


@dataclass(slots=True)
class NotificationLog:
    """Ordered record of notifications shown to the user."""

    items: list[Notification] = field(default_factory=list)

    def success(self, title: str, description: str) -> Notification:
        return self._push(Notification(title, description))

    def error(self, title: str, description: str, details: tuple[str, ...] = ()) -> Notification:
        return self._push(Notification(title, description, "destructive", details))

    def _push(self, notification: Notification) -> Notification:
        self.items.append(notification)
        return notification

    @property
    def last(self) -> Notification | None:
        return self.items[-1] if self.items else None

    def clear(self) -> None:
        self.items.clear()
