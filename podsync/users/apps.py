from django.apps import AppConfig


class UsersConfig(AppConfig):
    name = 'podsync.users'
    verbose_name = "Users and Devices"
