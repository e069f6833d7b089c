# core/decorators.py

from functools import wraps

from django.http import JsonResponse

"""
JSON flavour of Django's login_required. API clients get a 401
with an error body instead of a redirect to a login page.
"""
def api_login_required(view_func):
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'error': 'Not authenticated'}, status=401)
        return view_func(request, *args, **kwargs)
    return wrapper
