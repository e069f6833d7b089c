import pytest

from messaging.presence import PresenceRegistry


PASSWORD = 'Chat-relay-pass-42'


@pytest.fixture
def registry():
    """A fresh registry, independent of the one owned by the app."""
    return PresenceRegistry()


@pytest.fixture
def make_user(django_user_model):
    def _make(email, first_name='Test', last_name='User'):
        return django_user_model.objects.create_user(
            email=email, password=PASSWORD, first_name=first_name, last_name=last_name,
        )
    return _make


@pytest.fixture
def alice(make_user):
    return make_user('alice@example.com', first_name='Alice')


@pytest.fixture
def bob(make_user):
    return make_user('bob@example.com', first_name='Bob')


@pytest.fixture
def chat(alice, bob):
    from messaging.services import get_or_create_chat
    chat, _ = get_or_create_chat([alice, bob])
    return chat


@pytest.fixture
def carol(make_user):
    return make_user('carol@example.com', first_name='Carol')
