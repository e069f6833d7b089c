# accounts/views.py

import logging

from django.contrib.auth import authenticate, get_user_model, login, logout, update_session_auth_hash
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from core.decorators import api_login_required
from core.utils import disconnect_user, get_online_user_ids, read_json
from .forms import LoginForm, SignupForm, UserUpdateForm

logger = logging.getLogger(__name__)

User = get_user_model()


def form_errors(form):
    return JsonResponse({'errors': form.errors.get_json_data()}, status=400)


# --- Auth ---

@require_GET
@ensure_csrf_cookie
def csrf_view(request):
    return JsonResponse({'detail': 'CSRF cookie set'})


@require_POST
def register_view(request):
    data = read_json(request)
    if data is None:
        return JsonResponse({'error': 'Invalid JSON body'}, status=400)

    form = SignupForm(data)
    if not form.is_valid():
        return form_errors(form)

    user = form.save()
    logger.info("Registered user %s", user.pk)
    return JsonResponse(user.to_dict(), status=201)


@require_POST
def login_view(request):
    data = read_json(request)
    if data is None:
        return JsonResponse({'error': 'Invalid JSON body'}, status=400)

    form = LoginForm(data)
    if not form.is_valid():
        return form_errors(form)

    user = authenticate(request, email=form.cleaned_data['email'].lower(),
                        password=form.cleaned_data['password'])
    if user is None:
        return JsonResponse({'error': 'Invalid credentials'}, status=401)

    login(request, user)
    return JsonResponse(user.to_dict())


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({'detail': 'Logged out'})


# --- Users ---

@api_login_required
@require_GET
def user_list_view(request):
    users = User.objects.filter(is_active=True).order_by('first_name', 'last_name')
    return JsonResponse({'users': [u.to_dict() for u in users]})


@api_login_required
@require_GET
def online_users_view(request):
    # Registry ids are strings
    return JsonResponse({'online': sorted(get_online_user_ids())})


@api_login_required
@require_http_methods(['GET', 'POST'])
def user_detail_view(request, pk):
    user = get_object_or_404(User, pk=pk, is_active=True)

    if request.method == 'GET':
        return JsonResponse(user.to_dict())

    if user != request.user:
        return JsonResponse({'error': 'You can only update your own account'}, status=403)

    if request.content_type == 'application/json':
        data = read_json(request)
        if data is None:
            return JsonResponse({'error': 'Invalid JSON body'}, status=400)
        form = UserUpdateForm(data, instance=user)
    else:
        form = UserUpdateForm(request.POST, request.FILES, instance=user)

    if not form.is_valid():
        return form_errors(form)

    user = form.save()
    if form.cleaned_data.get('password'):
        # Keep this session valid after the password change
        update_session_auth_hash(request, user)
    return JsonResponse(user.to_dict())


@api_login_required
@require_POST
def delete_user_view(request, pk):
    user = get_object_or_404(User, pk=pk)
    if user != request.user:
        return JsonResponse({'error': 'You can only delete your own account'}, status=403)

    logout(request)
    # The account is gone, so is its live chat socket
    disconnect_user(user.pk)
    user.delete()
    logger.info("Deleted user %s", pk)
    return JsonResponse({'detail': 'Account deleted'})
