import re

from django.core.validators import RegexValidator
from django.db import models
from django.conf import settings

from podsync.utils import merge_patch

import logging
logger = logging.getLogger(__name__)


# device IDs are stored in a column of this width
DEVICE_UID_MAX_LENGTH = 64

RE_DEVICE_UID = re.compile(r'^[\w.-]{1,%d}\Z' % DEVICE_UID_MAX_LENGTH, re.ASCII)


class UIDValidator(RegexValidator):
    """ Validates that the Device UID conforms to the given regex """
    regex = RE_DEVICE_UID
    message = 'Invalid Device ID'
    code = 'invalid-uid'


def is_valid_device_uid(uid):
    """ Returns True if uid can be used as a device ID

    >>> is_valid_device_uid('gpodder_abcdef123')
    True

    >>> is_valid_device_uid('phone.v2-beta')
    True

    >>> is_valid_device_uid('gpodder@abcdef123')
    False

    >>> is_valid_device_uid('laptop\\n')
    False

    >>> is_valid_device_uid('')
    False

    >>> is_valid_device_uid('x' * 65)
    False
    """
    return bool(uid) and RE_DEVICE_UID.match(uid) is not None


class Device(models.Model):
    """ A client device of a user, with client-defined metadata """

    # the counter key that is reset on every update
    SUBSCRIPTIONS_KEY = 'subscriptions'

    user = models.ForeignKey(settings.AUTH_USER_MODEL,
                             on_delete=models.CASCADE)

    deviceid = models.CharField(max_length=DEVICE_UID_MAX_LENGTH,
                                validators=[UIDValidator()])

    data = models.JSONField(default=dict)

    class Meta:
        unique_together = [['user', 'deviceid']]

    def update_data(self, patch):
        """ Merges patch into the device data, resetting the counter key """
        data = merge_patch(self.data, patch)
        self.data = merge_patch(data, {self.SUBSCRIPTIONS_KEY: 0})
        return self.data

    def as_dict(self):
        """ The device data, overridden by the columns of the row """
        return dict(self.data, id=self.pk, user=self.user_id,
                    deviceid=self.deviceid)

    def __str__(self):
        return '{user}/{deviceid}'.format(user=self.user,
                                          deviceid=self.deviceid)
