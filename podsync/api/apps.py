from django.apps import AppConfig


class ApiConfig(AppConfig):
    name = 'podsync.api'
    verbose_name = "gpodder API"
