"""Message router: always persist, then deliver or drop."""
import asyncio

import pytest

from messaging.events import SendMessage
from messaging.exceptions import PersistenceFailure
from messaging.router import MessageRouter, RouteOutcome


class FakeStore:
    def __init__(self, fail=False):
        self.fail = fail
        self.saved = []

    async def __call__(self, text, sender_id, chat_id, receiver_id=None):
        if self.fail:
            raise RuntimeError('database is down')
        record = {'id': len(self.saved) + 1, 'text': text, 'senderId': sender_id, 'chatId': chat_id}
        self.saved.append(record)
        return record


class FakeTransport:
    def __init__(self):
        self.sent = []

    async def __call__(self, connection_id, payload):
        self.sent.append((connection_id, payload))


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def transport():
    return FakeTransport()


def hi(sender='alice', receiver='bob'):
    return SendMessage(sender_id=sender, receiver_id=receiver, text='hi', chat_id='c1')


@pytest.mark.asyncio
async def test_offline_recipient_is_stored_not_delivered(registry, store, transport):
    registry.add_user('alice', 's1')
    router = MessageRouter(registry, store, transport)

    outcome = await router.route(hi())

    assert outcome is RouteOutcome.DROPPED
    assert len(store.saved) == 1
    assert store.saved[0]['chatId'] == 'c1'
    assert transport.sent == []


@pytest.mark.asyncio
async def test_online_recipient_gets_one_delivery(registry, store, transport):
    registry.add_user('bob', 's2')
    router = MessageRouter(registry, store, transport)

    outcome = await router.route(hi())

    assert outcome is RouteOutcome.DELIVERED
    assert len(store.saved) == 1
    assert len(transport.sent) == 1
    connection_id, payload = transport.sent[0]
    assert connection_id == 's2'
    assert payload['text'] == 'hi'
    assert payload['senderId'] == 'alice'
    assert payload['message'] == store.saved[0]


@pytest.mark.asyncio
async def test_recipient_that_disconnected_is_dropped(registry, store, transport):
    registry.add_user('alice', 's1')
    registry.remove_user('s1')
    router = MessageRouter(registry, store, transport)

    outcome = await router.route(hi(sender='bob', receiver='alice'))

    assert outcome is RouteOutcome.DROPPED
    assert len(store.saved) == 1
    assert transport.sent == []


@pytest.mark.asyncio
async def test_persistence_failure_skips_delivery(registry, transport):
    registry.add_user('bob', 's2')
    registry.add_user('alice', 's1')
    before = registry.online_user_ids()
    router = MessageRouter(registry, FakeStore(fail=True), transport)

    with pytest.raises(PersistenceFailure) as excinfo:
        await router.route(hi())

    assert isinstance(excinfo.value.original, RuntimeError)
    assert transport.sent == []
    assert registry.online_user_ids() == before
    assert registry.get_user('bob').connection_id == 's2'


@pytest.mark.asyncio
async def test_slow_persistence_times_out(registry, transport):
    registry.add_user('bob', 's2')

    async def slow(text, sender_id, chat_id, receiver_id=None):
        await asyncio.sleep(1)
        return {'id': 1}

    router = MessageRouter(registry, slow, transport, timeout=0.01)

    with pytest.raises(PersistenceFailure) as excinfo:
        await router.route(hi())

    assert 'timed out' in excinfo.value.reason
    assert transport.sent == []


@pytest.mark.asyncio
async def test_disconnect_during_save_falls_through_to_drop(registry, transport):
    registry.add_user('bob', 's2')

    async def save_while_bob_leaves(text, sender_id, chat_id, receiver_id=None):
        registry.remove_user('s2')
        return {'id': 1, 'text': text}

    router = MessageRouter(registry, save_while_bob_leaves, transport)

    assert await router.route(hi()) is RouteOutcome.DROPPED
    assert transport.sent == []


@pytest.mark.asyncio
async def test_failed_emit_does_not_raise(registry, store):
    registry.add_user('bob', 's2')

    async def broken(connection_id, payload):
        raise ConnectionError('socket gone')

    router = MessageRouter(registry, store, broken)

    assert await router.route(hi()) is RouteOutcome.DROPPED
    assert len(store.saved) == 1


@pytest.mark.asyncio
async def test_receiver_is_passed_to_the_store(registry, transport):
    seen = {}

    async def store(text, sender_id, chat_id, receiver_id=None):
        seen['receiver_id'] = receiver_id
        return {'id': 1}

    await MessageRouter(registry, store, transport).route(hi())
    assert seen['receiver_id'] == 'bob'
