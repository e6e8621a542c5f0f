from django.db import models
from django.conf import settings

from podsync.core.models import ChangeTrackingModel
from podsync.subscriptions.models import Subscription
from podsync.utils import format_timestamp

import logging

logger = logging.getLogger(__name__)


class EpisodeAction(ChangeTrackingModel):
    """ An entry in the append-only episode action log of a user

    "changed" holds the time at which the event happened, as provided by the
    client, or the time at which it was uploaded. """

    DOWNLOAD = 'download'
    PLAY = 'play'
    DELETE = 'delete'
    NEW = 'new'
    FLATTR = 'flattr'
    EPISODE_ACTIONS = (
        (DOWNLOAD, 'downloaded'),
        (PLAY, 'played'),
        (DELETE, 'deleted'),
        (NEW, 'marked as new'),
        (FLATTR, 'flattr\'d'),
    )

    # the user which caused / triggered the event
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, db_index=True, on_delete=models.CASCADE
    )

    # the podcast of the episode
    subscription = models.ForeignKey(Subscription, on_delete=models.CASCADE)

    # the normalized episode URL
    url = models.CharField(max_length=2048)

    # free-form, but conventionally one of EPISODE_ACTIONS
    action = models.CharField(max_length=64)

    # any other fields the client sent, e.g. position, started, total
    data = models.JSONField(default=dict)

    class Meta:
        ordering = ['changed', 'id']

        indexes = [
            models.Index(fields=['user', 'changed'], name='episodeaction_user_changed'),
        ]

        verbose_name_plural = "Episode Actions"

    def as_dict(self):
        """ The extra data, overridden by the fields of the log row """
        return dict(
            self.data,
            episode=self.url,
            action=self.action,
            podcast=self.subscription.url,
            timestamp=format_timestamp(self.changed),
        )

    def __str__(self):
        return '{user} {action} {url}'.format(
            user=self.user_id, action=self.action, url=self.url)
