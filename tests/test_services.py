import pytest
from django.core.exceptions import PermissionDenied

from messaging.models import Chat, Message
from messaging.services import create_message, get_or_create_chat


@pytest.mark.django_db
def test_create_message_updates_chat(alice, chat):
    message = create_message('hello there', alice.pk, chat.pk)

    chat.refresh_from_db()
    assert chat.last_message == 'hello there'
    assert message.chat == chat
    assert message.sender == alice

    record = message.to_dict()
    assert record['text'] == 'hello there'
    assert record['senderId'] == str(alice.pk)
    assert record['chatId'] == str(chat.pk)
    assert record['timestamp']


@pytest.mark.django_db
def test_create_message_accepts_string_ids(alice, chat):
    message = create_message('hi', str(alice.pk), str(chat.pk))
    assert message.chat_id == chat.pk


@pytest.mark.django_db
def test_create_message_in_unknown_chat_fails(alice):
    with pytest.raises(Chat.DoesNotExist):
        create_message('hi', alice.pk, 424242)
    assert Message.objects.count() == 0


@pytest.mark.django_db
def test_create_message_from_unknown_sender_fails(chat, django_user_model):
    with pytest.raises(django_user_model.DoesNotExist):
        create_message('hi', 424242, chat.pk)
    assert Message.objects.count() == 0
    chat.refresh_from_db()
    assert chat.last_message == ''


@pytest.mark.django_db
def test_get_or_create_chat_reuses_existing(alice, bob, carol):
    chat, created = get_or_create_chat([alice, bob])
    assert created

    again, created = get_or_create_chat([bob, alice])
    assert not created
    assert again == chat

    group, created = get_or_create_chat([alice, bob, carol])
    assert created
    assert group != chat


@pytest.mark.django_db
def test_messages_come_back_in_arrival_order(alice, bob, chat):
    create_message('one', alice.pk, chat.pk)
    create_message('two', bob.pk, chat.pk)
    create_message('three', alice.pk, chat.pk)

    assert [m.text for m in chat.messages.all()] == ['one', 'two', 'three']


@pytest.mark.django_db
def test_sender_outside_the_chat_is_refused(carol, chat):
    with pytest.raises(PermissionDenied):
        create_message('hi', carol.pk, chat.pk)
    assert Message.objects.count() == 0


@pytest.mark.django_db
def test_receiver_outside_the_chat_is_refused(alice, carol, chat):
    with pytest.raises(PermissionDenied):
        create_message('hi', alice.pk, chat.pk, receiver_id=carol.pk)
    assert Message.objects.count() == 0
    chat.refresh_from_db()
    assert chat.last_message == ''


@pytest.mark.django_db
def test_receiver_in_the_chat_is_accepted(alice, bob, chat):
    message = create_message('hi', alice.pk, chat.pk, receiver_id=str(bob.pk))
    assert message.chat_id == chat.pk
