# messaging/views.py

from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods

from core.decorators import api_login_required
from core.utils import get_online_user_ids, read_json
from .models import Chat
from .services import get_or_create_chat

User = get_user_model()


def serialize_chat(chat, user, online_ids):
    others = [p for p in chat.participants.all() if p.pk != user.pk]
    return {
        'id': chat.pk,
        'lastMessage': chat.last_message,
        'updatedAt': chat.updated_at.isoformat(),
        'participants': [
            {'id': p.pk, 'firstName': p.first_name, 'online': str(p.pk) in online_ids}
            for p in others
        ],
    }


@api_login_required
@require_http_methods(['GET', 'POST'])
def chat_list_view(request):
    online_ids = get_online_user_ids()

    if request.method == 'GET':
        chats = request.user.chats.prefetch_related('participants').order_by('-updated_at')
        return JsonResponse({'chats': [serialize_chat(c, request.user, online_ids) for c in chats]})

    data = read_json(request)
    if data is None or not data.get('receiverId'):
        return JsonResponse({'error': "'receiverId' is required"}, status=400)
    try:
        receiver = User.objects.get(pk=data['receiverId'])
    except (User.DoesNotExist, ValueError, TypeError):
        return JsonResponse({'error': 'Receiver not found'}, status=404)
    if receiver == request.user:
        return JsonResponse({'error': 'Cannot open a chat with yourself'}, status=400)

    chat, created = get_or_create_chat([request.user, receiver])
    return JsonResponse(serialize_chat(chat, request.user, online_ids), status=201 if created else 200)


@api_login_required
@require_GET
def chat_detail_view(request, chat_id):
    chat = get_object_or_404(Chat, pk=chat_id)
    if not chat.participants.filter(pk=request.user.pk).exists():
        return JsonResponse({'error': 'Not a participant of this chat'}, status=403)

    data = serialize_chat(chat, request.user, get_online_user_ids())
    data['messages'] = [m.to_dict() for m in chat.messages.all()]
    return JsonResponse(data)
