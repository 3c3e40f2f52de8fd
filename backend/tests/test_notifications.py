"""Session event publisher tests."""
import json
import logging
from unittest import mock

import redis

from accessx.services import build_services
from accessx.services.notification_service import SessionEventPublisher
from accessx.store import MemoryRecordStore


def test_disabled_without_url():
    publisher = SessionEventPublisher.from_url(None)
    assert not publisher.enabled
    assert publisher.publish('session.created', {}) is False


def test_session_created_is_published():
    client = mock.MagicMock()
    services = build_services(MemoryRecordStore(), publisher=SessionEventPublisher(client, 'test:sessions'))

    session = services.sessions.create_session('CS101', '2025-01-10')

    channel, message = client.publish.call_args[0]
    assert channel == 'test:sessions'
    event = json.loads(message)
    assert event['event'] == 'session.created'
    assert event['data']['sessionId'] == session.session_id


def test_publish_failure_does_not_break_issuance(caplog):
    client = mock.MagicMock()
    client.publish.side_effect = redis.ConnectionError('down')
    services = build_services(MemoryRecordStore(), publisher=SessionEventPublisher(client))

    with caplog.at_level(logging.WARNING, logger='accessx'):
        session = services.sessions.create_session('CS101', '2025-01-10')
        services.sessions.delete_session(session.session_id, None)

    assert 'Could not publish session.created' in caplog.text
    assert services.sessions.list_sessions() == []


def test_stream_formats_server_sent_events():
    pubsub = mock.MagicMock()
    pubsub.listen.return_value = iter([{'type': 'message', 'data': b'{"event": "session.created"}'}])
    client = mock.MagicMock()
    client.pubsub.return_value = pubsub

    frames = list(SessionEventPublisher(client, 'test:sessions').stream())

    assert frames == ['data: {"event": "session.created"}\n\n']
    pubsub.subscribe.assert_called_once_with('test:sessions')
    pubsub.close.assert_called_once()
