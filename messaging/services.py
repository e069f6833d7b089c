# messaging/services.py

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.db.models import Count
from django.utils import timezone
from channels.db import database_sync_to_async

from .models import Chat, Message

User = get_user_model()


def create_message(text, sender_id, chat_id, receiver_id=None):
    """
    Saves a message in chat_id on behalf of sender_id and bumps the
    chat's last activity. Raises if the chat or the sender is unknown,
    and PermissionDenied if the sender or receiver_id is not part of
    the chat.
    """
    with transaction.atomic():
        chat = Chat.objects.select_for_update().get(pk=chat_id)
        sender = User.objects.get(pk=sender_id)

        participant_ids = {str(pk) for pk in chat.participants.values_list('pk', flat=True)}
        if str(sender.pk) not in participant_ids:
            raise PermissionDenied(f"User {sender.pk} is not in chat {chat.pk}")
        if receiver_id is not None and str(receiver_id) not in participant_ids:
            raise PermissionDenied(f"User {receiver_id} is not in chat {chat.pk}")

        message = Message.objects.create(chat=chat, sender=sender, text=text)
        chat.last_message = text
        chat.updated_at = timezone.now()
        chat.save(update_fields=['last_message', 'updated_at'])
    return message


@database_sync_to_async
def persist_message(text, sender_id, chat_id, receiver_id=None):
    # Async entry point used by the chat router
    return create_message(text, sender_id, chat_id, receiver_id).to_dict()


def get_or_create_chat(participants):
    """
    Returns (chat, created) for the chat made up of exactly these users.
    """
    chats = Chat.objects.annotate(
        num_participants=Count('participants')
    ).filter(num_participants=len(participants))

    for participant in participants:
        chats = chats.filter(participants=participant)

    chat = chats.first()
    if chat is not None:
        return chat, False

    chat = Chat.objects.create()
    chat.participants.set(participants)
    return chat, True
