"""Transient, dismissible messages shown after user actions."""

import enum

from pydantic import BaseModel

from app.core.logging_config import get_logger

logger = get_logger(__name__)


class NotificationKind(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    message: str
    kind: NotificationKind
    duration_ms: int = 3000
    action: str = "Close"

    @property
    def css_class(self) -> str:
        return f"{self.kind.value}-snackbar"


class Notifier:
    """Notifications raised while handling one request, drained by whoever renders them."""

    def __init__(self, duration_ms: int = 3000):
        self.duration_ms = duration_ms
        self._pending: list[Notification] = []

    def show(self, message: str, kind: NotificationKind, duration_ms: int | None = None) -> None:
        logger.debug(f"Notification ({kind.value}): {message}")
        self._pending.append(Notification(
            message=message,
            kind=kind,
            duration_ms=duration_ms if duration_ms is not None else self.duration_ms,
        ))

    def success(self, message: str, duration_ms: int | None = None) -> None:
        self.show(message, NotificationKind.SUCCESS, duration_ms)

    def error(self, message: str, duration_ms: int | None = None) -> None:
        self.show(message, NotificationKind.ERROR, duration_ms)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        drained, self._pending = self._pending, []
        return drained


# ── Carrying notifications across a redirect ────────────────

FLASH_SESSION_KEY = "flashed_notifications"


def flash(session: dict, path: str, notifications: list[Notification]) -> None:
    """Hold notifications in the requester's session for the next render of ``path``."""
    if not notifications:
        return
    held = session.get(FLASH_SESSION_KEY)
    items = held["items"] if held and held.get("path") == path else []
    items.extend(n.model_dump(mode="json") for n in notifications)
    session[FLASH_SESSION_KEY] = {"path": path, "items": items}


def take_flashed(session: dict, path: str) -> list[Notification]:
    """Pop held notifications. They are discarded unless rendered on the page they were sent to."""
    held = session.pop(FLASH_SESSION_KEY, None)
    if not held or held.get("path") != path:
        return []
    return [Notification.model_validate(item) for item in held.get("items", [])]
