from django.urls import path, re_path

from . import views


urlpatterns = [
    path('index.php/login/v2', views.nextcloud_login, name='nextcloud-login'),
    path('index.php/login/v2/poll', views.nextcloud_poll, name='nextcloud-poll'),
    path(
        'index.php/apps/gpoddersync/<path:endpoint>',
        views.nextcloud_api,
        name='nextcloud-api',
    ),
    re_path(
        r'^(?P<target>(?:suggestions|subscriptions|toplist|api)/.*)$',
        views.dispatch,
        name='api',
    ),
]
