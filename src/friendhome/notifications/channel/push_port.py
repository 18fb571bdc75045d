"""Push notification channel port — abstract interface for web-push dispatch."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for push notification dispatch adapters."""

    @abstractmethod
    def send(
        self,
        subscription: dict,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Send a push notification to one browser subscription.

        Args:
            subscription: dict with endpoint, p256dh and auth keys.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
