# config/views.py

from django.http import HttpResponse

"""
Answers the root URL so that a browser or load balancer can see
the API is up.
"""
def home_view(request):
    return HttpResponse("API is running!", content_type="text/plain")
