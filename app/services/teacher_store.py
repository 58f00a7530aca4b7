"""Observable cache of the teacher list and the loading flag.

Owned by the API client, which is the only writer. Views subscribe to it and
must release their subscription when they are torn down.
"""

from dataclasses import dataclass, replace
from typing import Callable

from app.core.logging_config import get_logger
from app.schemas.teacher import Teacher

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    teachers: tuple[Teacher, ...] = ()
    loading: bool = False
    version: int = 0  # bumped on every list refresh


Observer = Callable[[StoreSnapshot], None]


class Subscription:
    """Handle returned by ``TeacherStore.subscribe``. Release is idempotent."""

    def __init__(self, store: "TeacherStore", observer: Observer):
        self._store = store
        self._observer = observer
        self.active = True

    def release(self) -> None:
        if self.active:
            self._store._detach(self._observer)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class TeacherStore:
    def __init__(self):
        self._snapshot = StoreSnapshot()
        self._observers: list[Observer] = []

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer) -> Subscription:
        """Register an observer and immediately hand it the current snapshot."""
        self._observers.append(observer)
        self._notify_one(observer, self._snapshot)
        return Subscription(self, observer)

    def set_teachers(self, teachers: list[Teacher]) -> None:
        self._publish(replace(
            self._snapshot,
            teachers=tuple(teachers),
            version=self._snapshot.version + 1,
        ))

    def set_loading(self, loading: bool) -> None:
        if loading != self._snapshot.loading:
            self._publish(replace(self._snapshot, loading=loading))

    def _detach(self, observer: Observer) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def _publish(self, snapshot: StoreSnapshot) -> None:
        self._snapshot = snapshot
        # Copy so observers may release themselves while being notified
        for observer in list(self._observers):
            self._notify_one(observer, snapshot)

    def _notify_one(self, observer: Observer, snapshot: StoreSnapshot) -> None:
        try:
            observer(snapshot)
        except Exception:
            logger.exception("Teacher store observer failed")
