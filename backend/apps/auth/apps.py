from django.apps import AppConfig


class AuthConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.auth'
    # Distinct label so it does not collide with django.contrib.auth
    label = 'freshmart_auth'
