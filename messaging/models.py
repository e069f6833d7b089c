# messaging/models.py

from django.db import models
from django.conf import settings

"""
A conversation between two or more users. 'last_message' and
'updated_at' are refreshed every time a message is saved, which
keeps the chat list sorted by latest activity.
"""
class Chat(models.Model):
    participants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name='chats')
    last_message = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Chat {self.pk} between {self.participants.count()} users"

"""
A single text message inside a Chat. Messages are written once
when they are sent and never edited afterwards.
RT: One of these is created for every 'sendMessage' frame, whether
or not the recipient is online.
"""
class Message(models.Model):
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='messages')
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Message from {self.sender_id} in chat {self.chat_id}"

    def to_dict(self):
        return {
            'id': self.pk,
            'text': self.text,
            'senderId': str(self.sender_id),
            'chatId': str(self.chat_id),
            'timestamp': self.created_at.isoformat(),
        }
