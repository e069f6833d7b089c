# accounts/apps.py

from django.apps import AppConfig

"""
This class tells Django how to treat the "accounts" app, which
holds the email-based user model and the JSON auth endpoints.
"""
class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
