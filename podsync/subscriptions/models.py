from django.db import models
from django.conf import settings

from podsync.core.models import DeleteableModel, ChangeTrackingModel


class SubscriptionQuerySet(models.QuerySet):

    def for_user(self, user):
        return self.filter(user=user)

    def active(self):
        return self.filter(deleted=False)

    def changed_since(self, since):
        return self.filter(changed__gte=since)

    def urls(self):
        return list(self.order_by('id').values_list('url', flat=True))


class SubscriptionManager(models.Manager.from_queryset(SubscriptionQuerySet)):
    """ Manages subscriptions """

    def add(self, user, url, now):
        """ Subscribes the user to url, overwriting any previous state """
        subscription, _ = self.update_or_create(
            user=user, url=url, defaults={'changed': now, 'deleted': False})
        return subscription

    def remove(self, user, url, now):
        """ Marks the subscription as deleted, creating it if necessary """
        subscription, _ = self.update_or_create(
            user=user, url=url, defaults={'changed': now, 'deleted': True})
        return subscription

    def add_if_missing(self, user, url, now):
        """ Subscribes the user to url unless a row already exists """
        return self.get_or_create(user=user, url=url,
                                  defaults={'changed': now})


class Subscription(DeleteableModel, ChangeTrackingModel):
    """ A subscription of a user to a podcast feed """

    # the user that subscribed to a podcast
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, db_index=True, on_delete=models.CASCADE
    )

    # the normalized feed URL
    url = models.CharField(max_length=2048)

    objects = SubscriptionManager()

    class Meta:
        unique_together = [['user', 'url']]

        indexes = [
            models.Index(fields=['user', 'changed'], name='subscription_user_changed'),
        ]

    def __str__(self):
        return '{user} subscribed to {url}'.format(user=self.user, url=self.url)
