# messaging/urls.py

from django.urls import path
from .views import chat_list_view, chat_detail_view

urlpatterns = [
    # List my chats, or open one with another user
    path('', chat_list_view, name='chat_list'),

    # A single chat with its stored messages
    path('<int:chat_id>/', chat_detail_view, name='chat_detail'),
]
