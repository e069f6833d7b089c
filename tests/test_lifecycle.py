"""Connection lifecycle: Connected -> Announced -> Disconnected."""
from messaging.lifecycle import ConnectionLifecycle, ConnectionState


def test_connect_does_not_touch_registry(registry):
    lifecycle = ConnectionLifecycle(registry, 's1')
    assert lifecycle.state is ConnectionState.CONNECTED
    assert len(registry) == 0


def test_announce_registers_presence(registry):
    lifecycle = ConnectionLifecycle(registry, 's1')
    assert lifecycle.announce('alice') is True

    assert lifecycle.state is ConnectionState.ANNOUNCED
    assert lifecycle.user_id == 'alice'
    assert registry.get_user('alice').connection_id == 's1'


def test_disconnect_releases_presence(registry):
    lifecycle = ConnectionLifecycle(registry, 's1')
    lifecycle.announce('alice')
    lifecycle.disconnect()

    assert lifecycle.state is ConnectionState.DISCONNECTED
    assert registry.get_user('alice') is None


def test_disconnect_without_announcement(registry):
    registry.add_user('bob', 's2')
    lifecycle = ConnectionLifecycle(registry, 's1')
    lifecycle.disconnect()

    assert lifecycle.is_closed
    assert registry.get_user('bob').connection_id == 's2'


def test_second_socket_for_same_user_is_not_registered(registry):
    first = ConnectionLifecycle(registry, 's1')
    second = ConnectionLifecycle(registry, 's2')
    first.announce('alice')

    assert second.announce('alice') is False
    assert second.state is ConnectionState.ANNOUNCED

    second.disconnect()
    assert registry.get_user('alice').connection_id == 's1'


def test_events_after_disconnect_are_ignored(registry):
    lifecycle = ConnectionLifecycle(registry, 's1')
    lifecycle.disconnect()

    assert lifecycle.announce('alice') is False
    assert registry.get_user('alice') is None

    # Closing twice is harmless
    lifecycle.disconnect()
    assert lifecycle.is_closed


def test_consumer_takes_registry_from_as_asgi(registry):
    from messaging.consumers import ChatConsumer
    consumer = ChatConsumer(registry=registry)
    assert consumer.registry is registry
    assert ChatConsumer.registry is None
