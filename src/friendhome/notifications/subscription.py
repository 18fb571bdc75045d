"""Browser push subscriptions — aggregate, commands and handler.

A user may be subscribed from several browsers; each browser is identified by
its push service ``endpoint``. Re-subscribing from the same browser replaces
the stored keys instead of creating a duplicate.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from friendhome.domain import friendhome

logger = structlog.get_logger(__name__)


@friendhome.aggregate
class PushSubscription:
    user_id = Identifier(required=True)
    endpoint = String(required=True, max_length=1024)
    p256dh = String(required=True, max_length=255)
    auth = String(required=True, max_length=255)
    created_at = DateTime()

    def as_payload(self) -> dict:
        return {"endpoint": self.endpoint, "p256dh": self.p256dh, "auth": self.auth}


@friendhome.command(part_of="PushSubscription")
class SubscribePush:
    user_id = Identifier(required=True)
    endpoint = String(required=True, max_length=1024)
    p256dh = String(required=True, max_length=255)
    auth = String(required=True, max_length=255)


@friendhome.command(part_of="PushSubscription")
class UnsubscribePush:
    user_id = Identifier(required=True)


def subscriptions_for(user_id) -> list:
    repo = current_domain.repository_for(PushSubscription)
    return repo._dao.query.filter(user_id=str(user_id)).all().items


@friendhome.command_handler(part_of=PushSubscription)
class ManagePushSubscriptionsHandler:
    @handle(SubscribePush)
    def subscribe(self, command):
        repo = current_domain.repository_for(PushSubscription)
        existing = repo._dao.query.filter(endpoint=command.endpoint).all().items
        if existing:
            subscription = existing[0]
            subscription.user_id = command.user_id
            subscription.p256dh = command.p256dh
            subscription.auth = command.auth
        else:
            subscription = PushSubscription(
                user_id=command.user_id,
                endpoint=command.endpoint,
                p256dh=command.p256dh,
                auth=command.auth,
                created_at=datetime.now(UTC),
            )
        repo.add(subscription)
        logger.info("Push subscription saved", user_id=str(command.user_id), replaced=bool(existing))
        return str(subscription.id)

    @handle(UnsubscribePush)
    def unsubscribe(self, command):
        repo = current_domain.repository_for(PushSubscription)
        removed = 0
        for subscription in subscriptions_for(command.user_id):
            repo._dao.delete(subscription)
            removed += 1
        logger.info("Push subscriptions removed", user_id=str(command.user_id), count=removed)
        return removed
