from django.test import TestCase

from podsync.subscriptions.models import Subscription
from podsync.test import create_user


class SubscriptionManagerTests(TestCase):
    """ Tests the upserts of the subscription manager """

    URL = 'http://example.com/feed.rss'

    def setUp(self):
        self.user, _ = create_user()

    def test_add_remove(self):
        sub = Subscription.objects.add(self.user, self.URL, 100)
        self.assertFalse(sub.deleted)

        removed = Subscription.objects.remove(self.user, self.URL, 200)
        self.assertEqual(removed.pk, sub.pk)
        self.assertTrue(removed.deleted)
        self.assertEqual(removed.changed, 200)

        self.assertEqual(Subscription.objects.count(), 1)

    def test_remove_unknown(self):
        Subscription.objects.remove(self.user, self.URL, 100)

        sub = Subscription.objects.get(user=self.user, url=self.URL)
        self.assertTrue(sub.deleted)
        self.assertEqual(Subscription.objects.for_user(self.user).active().urls(), [])

    def test_add_if_missing(self):
        Subscription.objects.remove(self.user, self.URL, 100)

        sub, created = Subscription.objects.add_if_missing(self.user, self.URL, 200)
        self.assertFalse(created)
        self.assertTrue(sub.deleted)
        self.assertEqual(sub.changed, 100)

        other, created = Subscription.objects.add_if_missing(
            self.user, 'http://example.com/other.rss', 300)
        self.assertTrue(created)
        self.assertFalse(other.deleted)

    def test_changed_since(self):
        Subscription.objects.add(self.user, 'http://example.com/a.rss', 100)
        Subscription.objects.add(self.user, 'http://example.com/b.rss', 200)

        changed = Subscription.objects.for_user(self.user).changed_since(200)
        self.assertEqual(changed.urls(), ['http://example.com/b.rss'])

    def test_users_are_separate(self):
        other, _ = create_user()
        Subscription.objects.add(self.user, self.URL, 100)
        Subscription.objects.remove(other, self.URL, 200)

        self.assertEqual(Subscription.objects.for_user(self.user).active().urls(),
                         [self.URL])
        self.assertEqual(Subscription.objects.for_user(other).active().urls(), [])
