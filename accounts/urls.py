# accounts/urls.py

from django.urls import path
from .views import (
    csrf_view, register_view, login_view, logout_view,
    user_list_view, online_users_view, user_detail_view, delete_user_view,
)

auth_urlpatterns = [
    path('csrf/', csrf_view, name='csrf'),
    path('register/', register_view, name='register'),
    path('login/', login_view, name='login'),
    path('logout/', logout_view, name='logout'),
]

user_urlpatterns = [
    path('', user_list_view, name='user_list'),
    path('online/', online_users_view, name='online_users'),
    path('<int:pk>/', user_detail_view, name='user_detail'),
    path('<int:pk>/delete/', delete_user_view, name='delete_user'),
]
