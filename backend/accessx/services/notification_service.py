"""Best-effort session listing notifications over Redis pub/sub."""
import json
import logging
from datetime import datetime
from typing import Iterator, Optional

import redis

logger = logging.getLogger(__name__)


class SessionEventPublisher:
    """Publishes session lifecycle events for live dashboards.

    A failed publish is logged and otherwise ignored; issuance and
    redemption never depend on it.
    """

    def __init__(self, client: Optional[redis.Redis] = None, channel: str = 'accessx:sessions'):
        self.client = client
        self.channel = channel

    @classmethod
    def from_url(cls, redis_url: Optional[str], channel: str = 'accessx:sessions') -> 'SessionEventPublisher':
        if not redis_url:
            return cls(None, channel)
        return cls(redis.Redis.from_url(redis_url), channel)

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def publish(self, event: str, data: dict) -> bool:
        if not self.enabled:
            return False

        message = json.dumps({
            'event': event,
            'data': data,
            'sent_at': datetime.utcnow().isoformat()
        })
        try:
            self.client.publish(self.channel, message)
            return True
        except redis.RedisError as e:
            logger.warning("Could not publish %s event: %s", event, e)
            return False

    def session_created(self, session) -> bool:
        return self.publish('session.created', session.to_dict())

    def session_deleted(self, session_id: str) -> bool:
        return self.publish('session.deleted', {'sessionId': session_id})

    def stream(self) -> Iterator[str]:
        """Yield server-sent event frames for every message on the channel."""
        pubsub = self.client.pubsub(ignore_subscribe_messages=True)
        pubsub.subscribe(self.channel)
        try:
            for message in pubsub.listen():
                payload = message.get('data')
                if isinstance(payload, bytes):
                    payload = payload.decode()
                yield f"data: {payload}\n\n"
        except redis.RedisError as e:
            logger.warning("Session event stream interrupted: %s", e)
        finally:
            pubsub.close()
