from app.services.notifications import Notifier
from app.services.teacher_api import TeacherApiClient
from app.services.teacher_store import Observer, Subscription
from app.views.navigation import Navigator


class View:
    """Shared wiring for the page view models.

    A view lives for one page render. ``close()`` releases every store
    subscription it took, so store updates published after that (for
    example by a refresh still in flight) are never observed. In-flight calls
    are not cancelled.
    """

    notification_ms: int | None = None

    def __init__(
        self,
        client: TeacherApiClient,
        notifier: Notifier | None = None,
        navigator: Navigator | None = None,
    ):
        self.client = client
        self.notifier = notifier or Notifier()
        self.navigator = navigator or Navigator()
        self._subscriptions: list[Subscription] = []

    def notify_success(self, message: str) -> None:
        self.notifier.success(message, self.notification_ms)

    def notify_error(self, message: str) -> None:
        self.notifier.error(message, self.notification_ms)

    def watch(self, observer: Observer) -> Subscription:
        subscription = self.client.store.subscribe(observer)
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.release()
        self._subscriptions.clear()
