# core/apps.py

from django.apps import AppConfig

"""
Project-wide helpers that don't belong to a single feature like
'accounts' or 'messaging'.
"""
class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
