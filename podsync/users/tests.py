from django.core.exceptions import ValidationError
from django.test import TestCase

from podsync.test import create_user
from podsync.users.models import Device


class DeviceTests(TestCase):

    def setUp(self):
        self.user, _ = create_user()

    def test_update_data_resets_subscriptions(self):
        device = Device(user=self.user, deviceid='phone')
        device.update_data({'caption': 'Phone', 'subscriptions': 42})
        self.assertEqual(device.data, {'caption': 'Phone', 'subscriptions': 0})

    def test_update_data_merges(self):
        device = Device.objects.create(user=self.user, deviceid='phone',
                                       data={'caption': 'Phone', 'type': 'mobile',
                                             'extra': {'a': 1, 'b': 2}})
        device.update_data({'type': None, 'extra': {'b': None, 'c': 3}})
        device.save()

        device.refresh_from_db()
        self.assertEqual(device.data, {'caption': 'Phone', 'extra': {'a': 1, 'c': 3},
                                       'subscriptions': 0})

    def test_as_dict(self):
        device = Device.objects.create(user=self.user, deviceid='phone',
                                       data={'deviceid': 'spoofed', 'type': 'mobile'})
        self.assertEqual(device.as_dict(), {
            'id': device.pk,
            'user': self.user.pk,
            'deviceid': 'phone',
            'type': 'mobile',
        })

    def test_invalid_uid(self):
        device = Device(user=self.user, deviceid='my phone')
        with self.assertRaises(ValidationError):
            device.full_clean()
