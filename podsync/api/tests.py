import gzip
import json
import unittest.mock

from django.contrib.sessions.models import Session
from django.test import TestCase
from django.test.client import Client

from podsync.api import nextcloud
from podsync.history.models import EpisodeAction
from podsync.subscriptions.models import Subscription
from podsync.test import create_auth_string, create_user
from podsync.users.models import Device


class APITestCase(TestCase):
    """ Base class for tests that talk to the API with a logged in client """

    def setUp(self):
        self.user, self.password = create_user()
        self.username = self.user.username
        self.client = Client()
        self.extra = {
            'HTTP_AUTHORIZATION': create_auth_string(self.username, self.password)
        }

    def login(self):
        response = self.client.post(
            '/api/2/auth/{}/login.json'.format(self.username), **self.extra)
        self.assertEqual(response.status_code, 200, response.content)
        return response

    def get_json(self, url, data=None, status=200):
        response = self.client.get(url, data or {})
        self.assertEqual(response.status_code, status, response.content)
        return json.loads(response.content.decode('utf-8'))

    def post_json(self, url, obj, status=200, **extra):
        response = self.client.post(
            url, json.dumps(obj), content_type='application/json', **extra)
        self.assertEqual(response.status_code, status, response.content)
        return json.loads(response.content.decode('utf-8')) if response.content else None

    def assertError(self, response, code):
        self.assertEqual(response.status_code, code, response.content)
        body = json.loads(response.content.decode('utf-8'))
        self.assertEqual(body['code'], code)
        self.assertTrue(body['message'])
        return body


class AuthTests(APITestCase):
    """ Tests login, logout and the session check """

    def test_login_and_fetch(self):
        """ A fresh user gets a session cookie and an empty list """
        response = self.login()
        self.assertIn('sessionid', response.cookies)
        self.assertEqual(json.loads(response.content)['message'], 'Logged in!')

        obj = self.get_json('/api/2/subscriptions/{}/dev1.json'.format(self.username))
        self.assertEqual(obj['add'], [])
        self.assertEqual(obj['remove'], [])
        self.assertEqual(obj['update_urls'], [])
        self.assertIsInstance(obj['timestamp'], int)

    def test_login_without_credentials(self):
        response = self.client.post('/api/2/auth/{}/login.json'.format(self.username))
        self.assertError(response, 401)

    def test_login_wrong_password(self):
        extra = {'HTTP_AUTHORIZATION': create_auth_string(self.username, 'wrong')}
        response = self.client.post(
            '/api/2/auth/{}/login.json'.format(self.username), **extra)
        body = self.assertError(response, 401)
        self.assertEqual(body['message'], 'Invalid username/password')

    def test_login_unknown_user(self):
        extra = {'HTTP_AUTHORIZATION': create_auth_string('nobody-here', 'pw')}
        response = self.client.post('/api/2/auth/nobody-here/login.json', **extra)
        body = self.assertError(response, 401)
        self.assertEqual(body['message'], 'Invalid username')

    def test_login_requires_post(self):
        response = self.client.get(
            '/api/2/auth/{}/login.json'.format(self.username), **self.extra)
        self.assertError(response, 405)

    def test_unknown_auth_action(self):
        response = self.client.post(
            '/api/2/auth/{}/register.json'.format(self.username), **self.extra)
        self.assertError(response, 404)

    def test_logout(self):
        self.login()
        response = self.client.post('/api/2/auth/{}/logout.json'.format(self.username))
        self.assertEqual(response.status_code, 200, response.content)

        response = self.client.get('/api/2/subscriptions/{}/dev1.json'.format(self.username))
        self.assertError(response, 401)

    def test_logout_without_session(self):
        response = self.client.post('/api/2/auth/{}/logout.json'.format(self.username))
        self.assertEqual(response.status_code, 200, response.content)

    def test_unauth_request(self):
        """ Tests that a request without session cookie gives a 401 response """
        response = self.client.get('/api/2/subscriptions/{}/dev1.json'.format(self.username))
        self.assertError(response, 401)

    def test_invalid_session_cookie(self):
        self.client.cookies['sessionid'] = 'not-a-session-of-ours'
        response = self.client.get('/api/2/episodes/{}.json'.format(self.username))
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'Invalid sessionid cookie')

    def test_deleted_user(self):
        self.login()
        self.user.delete()
        response = self.client.get('/api/2/episodes/{}.json'.format(self.username))
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'User does not exist')


class RouterTests(APITestCase):
    """ Tests the handling of formats and stubbed resources """

    def setUp(self):
        super().setUp()
        self.login()

    def test_unimplemented_format(self):
        response = self.client.get('/api/2/subscriptions/{}/dev1.xml'.format(self.username))
        self.assertError(response, 501)

    def test_jsonp_format(self):
        response = self.client.get('/api/2/episodes/{}.jsonp'.format(self.username))
        self.assertError(response, 501)

    def test_missing_format(self):
        response = self.client.get('/api/2/episodes/{}'.format(self.username))
        self.assertError(response, 501)

    def test_format_is_checked_before_session(self):
        client = Client()
        response = client.get('/api/2/subscriptions/{}/dev1.xml'.format(self.username))
        self.assertError(response, 501)

    def test_unknown_resource(self):
        response = self.client.get('/api/3/subscriptions/{}/dev1.json'.format(self.username))
        self.assertError(response, 404)

    def test_stubbed_resources(self):
        for url in ('/api/2/tags/10.json', '/api/2/tag/news/10.json',
                    '/api/2/data/podcast.json', '/toplist/50.json',
                    '/suggestions/10.json',
                    '/api/2/favorites/{}.json'.format(self.username)):
            self.assertEqual(self.get_json(url), [], url)

    def test_unavailable_resources(self):
        for url in ('/api/2/settings/{}/account.json',
                    '/api/2/lists/{}.json',
                    '/api/2/sync-devices/{}.json'):
            response = self.client.get(url.format(self.username))
            self.assertError(response, 503)

    def test_updates_not_implemented(self):
        response = self.client.get('/api/2/updates/{}/dev1.json'.format(self.username))
        self.assertError(response, 501)

    def test_opml_only_for_subscriptions(self):
        response = self.client.get('/api/2/episodes/{}.opml'.format(self.username))
        self.assertError(response, 501)

    def test_cors_header(self):
        response = self.client.get('/api/2/tags/10.json')
        self.assertEqual(response['Access-Control-Allow-Origin'], '*')


class SubscriptionAPITests(APITestCase):
    """ Tests the Subscription API """

    def setUp(self):
        super().setUp()
        self.login()
        self.url = '/api/2/subscriptions/{}/test-device.json'.format(self.username)
        self.legacy_url = '/subscriptions/{}.json'.format(self.username)

    def upload(self, add=(), remove=(), now=None):
        with unittest.mock.patch('podsync.api.subscriptions.time') as mock_time:
            mock_time.time.return_value = now
            return self.post_json(self.url, {'add': list(add), 'remove': list(remove)})

    def test_set_get_subscriptions(self):
        """ Tests that an upload subscription is returned back correctly """
        obj = self.post_json(self.url, {'add': ['http://example.com/podcast.rss']})
        self.assertEqual(obj['update_urls'], [])

        obj = self.get_json(self.url, {'since': '0'})
        self.assertEqual(obj['add'], ['http://example.com/podcast.rss'])
        self.assertEqual(obj['remove'], [])

    def test_diff(self):
        """ A removal after the add shows up in remove only """
        obj = self.upload(add=['http://example.com/a.rss'], now=1000)
        self.assertEqual(obj['timestamp'], 1000)

        obj = self.get_json(self.url, {'since': '900'})
        self.assertEqual(obj['add'], ['http://example.com/a.rss'])

        self.upload(remove=['http://example.com/a.rss'], now=2000)

        obj = self.get_json(self.url, {'since': '1500'})
        self.assertEqual(obj['add'], [])
        self.assertEqual(obj['remove'], ['http://example.com/a.rss'])

        obj = self.get_json(self.url, {'since': '2001'})
        self.assertEqual(obj['add'], [])
        self.assertEqual(obj['remove'], [])

    def test_last_write_wins(self):
        """ An upload overwrites the row regardless of its timestamp """
        self.upload(remove=['http://example.com/a.rss'], now=2000)
        self.upload(add=['http://example.com/a.rss'], now=1000)

        subscription = Subscription.objects.get(user=self.user)
        self.assertEqual(subscription.changed, 1000)
        self.assertFalse(subscription.deleted)

    def test_put_then_legacy_get(self):
        response = self.client.put(
            self.url, json.dumps(['http://x/feed']), content_type='application/json')
        self.assertEqual(response.status_code, 200, response.content)

        self.assertEqual(self.get_json(self.legacy_url), ['http://x/feed'])

    def test_put_is_additive(self):
        self.post_json(self.url, {'add': ['http://example.com/a.rss']})
        response = self.client.put(
            self.url, json.dumps(['http://example.com/b.rss']),
            content_type='application/json')
        self.assertEqual(response.status_code, 200, response.content)

        self.assertEqual(self.get_json(self.legacy_url),
                         ['http://example.com/a.rss', 'http://example.com/b.rss'])

    def test_put_txt(self):
        url = '/subscriptions/{}/test-device.txt'.format(self.username)
        body = 'http://example.com/a.rss\n\nhttp://example.com/b.rss\n'
        response = self.client.put(url, body, content_type='text/plain')
        self.assertEqual(response.status_code, 200, response.content)

        response = self.client.get('/subscriptions/{}.txt'.format(self.username))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode('utf-8').split(),
                         ['http://example.com/a.rss', 'http://example.com/b.rss'])

    def test_put_opml(self):
        url = '/api/2/subscriptions/{}/test-device.opml'.format(self.username)
        body = ('<?xml version="1.0"?><opml version="1.0"><body>'
                '<outline type="rss" xmlUrl="http://example.com/a.rss" title="A"/>'
                '</body></opml>')
        response = self.client.put(url, body, content_type='text/x-opml')
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(self.get_json(self.legacy_url), ['http://example.com/a.rss'])

    def test_put_requires_list(self):
        response = self.client.put(
            self.url, json.dumps({'add': []}), content_type='application/json')
        self.assertError(response, 400)

    def test_legacy_get_excludes_deleted(self):
        self.post_json(self.url, {'add': ['http://example.com/a.rss',
                                          'http://example.com/b.rss']})
        self.post_json(self.url, {'remove': ['http://example.com/a.rss']})

        self.assertEqual(self.get_json(self.legacy_url), ['http://example.com/b.rss'])

    def test_legacy_get_opml(self):
        self.post_json(self.url, {'add': ['http://example.com/a.rss?x=1&y=2']})

        response = self.client.get('/subscriptions/{}.opml'.format(self.username))
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response['Content-Type'].startswith('text/x-opml'))
        content = response.content.decode('utf-8')
        self.assertIn('<opml version="1.0">', content)
        self.assertIn('xmlUrl="http://example.com/a.rss?x=1&amp;y=2"', content)

    def test_urls_are_encoded(self):
        self.post_json(self.url, {'add': ['http://example.com/my podcast.rss']})
        self.assertEqual(self.get_json(self.legacy_url),
                         ['http://example.com/my%20podcast.rss'])

    def test_invalid_url_fails_whole_batch(self):
        response = self.client.post(
            self.url,
            json.dumps({'add': ['http://example.com/a.rss', 'not a url']}),
            content_type='application/json')
        body = self.assertError(response, 400)
        self.assertTrue(body['message'].startswith('Invalid URL'))
        self.assertFalse(Subscription.objects.filter(user=self.user).exists())

    def test_invalid_device_id(self):
        url = '/api/2/subscriptions/{}/dev@1.json'.format(self.username)
        response = self.client.get(url)
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'Invalid device ID')

    def test_invalid_since(self):
        response = self.client.get(self.url, {'since': 'yesterday'})
        self.assertError(response, 400)

    def test_post_requires_object(self):
        response = self.client.post(
            self.url, json.dumps(['http://example.com/a.rss']),
            content_type='application/json')
        self.assertError(response, 400)

    def test_undecodable_body(self):
        response = self.client.post(self.url, '{"add": [', content_type='application/json')
        self.assertError(response, 400)

    def test_gzip_body(self):
        body = gzip.compress(json.dumps({'add': ['http://example.com/a.rss']}).encode('utf-8'))
        response = self.client.post(self.url, body, content_type='application/json',
                                    HTTP_CONTENT_ENCODING='gzip')
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(self.get_json(self.legacy_url), ['http://example.com/a.rss'])

    def test_gzip_txt_body(self):
        url = '/subscriptions/{}/test-device.txt'.format(self.username)
        body = gzip.compress(b'http://example.com/a.rss\nhttp://example.com/b.rss\n')
        response = self.client.put(url, body, content_type='text/plain',
                                   HTTP_CONTENT_ENCODING='gzip')
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(self.get_json(self.legacy_url),
                         ['http://example.com/a.rss', 'http://example.com/b.rss'])

    def test_gzip_opml_body(self):
        url = '/api/2/subscriptions/{}/test-device.opml'.format(self.username)
        body = gzip.compress(
            b'<?xml version="1.0"?><opml version="1.0"><body>'
            b'<outline type="rss" xmlUrl="http://example.com/a.rss"/>'
            b'</body></opml>')
        response = self.client.put(url, body, content_type='text/x-opml',
                                   HTTP_CONTENT_ENCODING='gzip')
        self.assertEqual(response.status_code, 200, response.content)
        self.assertEqual(self.get_json(self.legacy_url), ['http://example.com/a.rss'])

    def test_corrupt_gzip_body(self):
        url = '/subscriptions/{}/test-device.txt'.format(self.username)
        response = self.client.put(url, b'not gzipped', content_type='text/plain',
                                   HTTP_CONTENT_ENCODING='gzip')
        self.assertError(response, 400)

    def test_invalid_utf8_txt_body(self):
        url = '/subscriptions/{}/test-device.txt'.format(self.username)
        response = self.client.put(url, b'http://example.com/\xff\xfe.rss\n',
                                   content_type='text/plain')
        self.assertError(response, 400)
        self.assertFalse(Subscription.objects.filter(user=self.user).exists())

    def test_device_id_too_long(self):
        url = '/api/2/subscriptions/{}/{}.json'.format(self.username, 'd' * 65)
        response = self.client.get(url)
        self.assertError(response, 400)

    def test_other_method(self):
        response = self.client.delete(self.url)
        self.assertError(response, 501)


class EpisodeActionAPITests(APITestCase):
    """ Tests uploading and fetching episode actions """

    def setUp(self):
        super().setUp()
        self.login()
        self.url = '/api/2/episodes/{}.json'.format(self.username)

        self.action_data = [
            {
                "podcast": "http://example.com/feed.rss",
                "episode": "http://example.com/files/s01e20.mp3",
                "device": "gpodder_abcdef123",
                "action": "download",
                "timestamp": "2009-12-12T09:00:00",
            },
            {
                "podcast": "http://example.org/podcast.php",
                "episode": "http://ftp.example.org/foo.ogg",
                "action": "PLAY",
                "started": 15,
                "position": 120,
                "total": 500,
            },
        ]

    def test_upload_and_fetch(self):
        obj = self.post_json(self.url, [{
            "podcast": "http://a/f", "episode": "http://a/f/e1", "action": "play"}])
        self.assertEqual(obj['update_urls'], [])

        obj = self.get_json(self.url, {'since': '0'})
        self.assertEqual(len(obj['actions']), 1)
        action = obj['actions'][0]
        self.assertEqual(action['episode'], 'http://a/f/e1')
        self.assertEqual(action['podcast'], 'http://a/f')
        self.assertEqual(action['action'], 'play')

    def test_episode_actions(self):
        self.post_json(self.url, self.action_data)

        actions = self.get_json(self.url, {'since': '0'})['actions']
        self.assertEqual(len(actions), 2)

        download, play = actions
        self.assertEqual(download['timestamp'], '2009-12-12T09:00:00Z')
        self.assertEqual(download['device'], 'gpodder_abcdef123')
        self.assertEqual(download['action'], 'download')

        self.assertEqual(play['action'], 'play')
        self.assertEqual(play['position'], 120)
        self.assertEqual(play['started'], 15)
        self.assertEqual(play['total'], 500)

    def test_since(self):
        self.post_json(self.url, self.action_data)

        # the download happened in 2009, the play action uses the upload time
        actions = self.get_json(self.url, {'since': '1260608401'})['actions']
        self.assertEqual([a['action'] for a in actions], ['play'])

    def test_unparseable_timestamp_uses_upload_time(self):
        with unittest.mock.patch('podsync.api.episodes.time') as mock_time:
            mock_time.time.return_value = 1500000000
            obj = self.post_json(self.url, [{
                "podcast": "http://example.com/feed.rss",
                "episode": "http://example.com/1.mp3",
                "action": "new",
                "timestamp": "sometime last week",
            }])

        self.assertEqual(obj['timestamp'], 1500000000)
        action = EpisodeAction.objects.get(user=self.user)
        self.assertEqual(action.changed, 1500000000)

    def test_out_of_range_timestamp_uses_upload_time(self):
        """ A timestamp that can not be rendered again is not stored """
        with unittest.mock.patch('podsync.api.episodes.time') as mock_time:
            mock_time.time.return_value = 1500000000
            self.post_json(self.url, [{
                "podcast": "http://example.com/feed.rss",
                "episode": "http://example.com/1.mp3",
                "action": "play",
                "timestamp": "9999-12-31T23:59:59-05:00",
            }])

        action = EpisodeAction.objects.get(user=self.user)
        self.assertEqual(action.changed, 1500000000)

        actions = self.get_json(self.url, {'since': '0'})['actions']
        self.assertEqual(actions[0]['timestamp'], '2017-07-14T02:40:00Z')

    def test_action_subscribes_to_podcast(self):
        self.post_json(self.url, self.action_data[:1])

        legacy = self.get_json('/subscriptions/{}.json'.format(self.username))
        self.assertEqual(legacy, ['http://example.com/feed.rss'])

    def test_known_podcast_is_reused(self):
        self.post_json(self.url, self.action_data[:1])
        self.post_json(self.url, self.action_data[:1])

        self.assertEqual(Subscription.objects.filter(user=self.user).count(), 1)
        self.assertEqual(EpisodeAction.objects.filter(user=self.user).count(), 2)

    def test_stored_data(self):
        self.post_json(self.url, self.action_data[1:])

        action = EpisodeAction.objects.get(user=self.user)
        self.assertEqual(action.action, 'play')
        self.assertEqual(action.data, {'started': 15, 'position': 120, 'total': 500})

    def test_missing_key(self):
        action_data = [dict(self.action_data[0]), dict(self.action_data[1])]
        del action_data[1]['episode']

        response = self.client.post(self.url, json.dumps(action_data),
                                    content_type='application/json')
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'Missing required key in action')

        # the first action of the batch was rolled back
        self.assertFalse(EpisodeAction.objects.filter(user=self.user).exists())
        self.assertFalse(Subscription.objects.filter(user=self.user).exists())

    def test_invalid_episode_url(self):
        action_data = [dict(self.action_data[0], episode='s01e20.mp3')]
        response = self.client.post(self.url, json.dumps(action_data),
                                    content_type='application/json')
        self.assertError(response, 400)

    def test_requires_array(self):
        response = self.client.post(self.url, json.dumps(self.action_data[0]),
                                    content_type='application/json')
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'No valid array found')

    def test_other_method(self):
        response = self.client.put(self.url, json.dumps(self.action_data),
                                   content_type='application/json')
        self.assertError(response, 405)


class DeviceAPITests(APITestCase):

    def setUp(self):
        super().setUp()
        self.login()
        self.url = '/api/2/devices/{}/laptop.json'.format(self.username)

    def test_create_and_list(self):
        obj = self.post_json(self.url, {'caption': 'My Laptop', 'type': 'laptop',
                                        'subscriptions': 12})
        self.assertEqual(obj['message'], 'Device updated')

        devices = self.get_json('/api/2/devices/{}.json'.format(self.username))
        self.assertEqual(len(devices), 1)
        device = devices[0]
        self.assertEqual(device['deviceid'], 'laptop')
        self.assertEqual(device['caption'], 'My Laptop')
        self.assertEqual(device['type'], 'laptop')
        self.assertEqual(device['subscriptions'], 0)

    def test_merge_patch(self):
        self.post_json(self.url, {'caption': 'My Laptop', 'type': 'laptop'})
        self.post_json(self.url, {'caption': None, 'type': 'desktop'})

        device = Device.objects.get(user=self.user, deviceid='laptop')
        self.assertEqual(device.data, {'type': 'desktop', 'subscriptions': 0})

    def test_invalid_device_id(self):
        url = '/api/2/devices/{}/lap top.json'.format(self.username)
        response = self.client.post(url, json.dumps({}), content_type='application/json')
        self.assertError(response, 400)
        self.assertFalse(Device.objects.exists())

    def test_device_id_too_long(self):
        url = '/api/2/devices/{}/{}.json'.format(self.username, 'd' * 65)
        response = self.client.post(url, json.dumps({}), content_type='application/json')
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'Invalid device ID')
        self.assertFalse(Device.objects.exists())

    def test_requires_object(self):
        response = self.client.post(self.url, json.dumps(['laptop']),
                                    content_type='application/json')
        self.assertError(response, 400)

    def test_other_method(self):
        response = self.client.put(self.url, json.dumps({}),
                                   content_type='application/json')
        body = self.assertError(response, 400)
        self.assertEqual(body['message'], 'Wrong request method')


class NextCloudTests(APITestCase):
    """ Tests the NextCloud login flow and the gpoddersync endpoints """

    def start_login(self):
        response = self.client.post('/index.php/login/v2')
        self.assertEqual(response.status_code, 200, response.content)
        return json.loads(response.content.decode('utf-8'))

    def poll(self, token):
        return self.client.post('/index.php/login/v2/poll', {'token': token})

    def test_start_login(self):
        obj = self.start_login()
        token = obj['poll']['token']
        self.assertEqual(len(token), 40)
        self.assertTrue(token.isalnum())
        self.assertEqual(obj['poll']['endpoint'],
                         'http://testserver/index.php/login/v2/poll')
        self.assertEqual(obj['login'], 'http://testserver/login?token=' + token)

    def test_start_login_requires_post(self):
        response = self.client.get('/index.php/login/v2')
        self.assertError(response, 405)

    def test_poll_unresolved(self):
        token = self.start_login()['poll']['token']
        self.assertError(self.poll(token), 404)

    def test_poll_resolved(self):
        token = self.start_login()['poll']['token']
        app_password = nextcloud.resolve_login_token(token, self.user)

        expected = {
            'server': 'http://testserver/',
            'loginName': self.username,
            'appPassword': app_password,
        }

        for _ in range(2):
            response = self.poll(token)
            self.assertEqual(response.status_code, 200, response.content)
            self.assertEqual(json.loads(response.content.decode('utf-8')), expected)

    def test_poll_keeps_client_session(self):
        self.login()
        token = self.start_login()['poll']['token']

        response = self.poll(token)
        self.assertError(response, 404)
        self.assertNotIn('sessionid', response.cookies)

        self.get_json('/api/2/episodes/{}.json'.format(self.username))

    def test_poll_invalid_token(self):
        self.assertError(self.poll('../../etc/passwd'), 400)
        self.assertError(self.poll(''), 400)

    def test_resolve_unknown_token(self):
        with self.assertRaises(nextcloud.NotFound):
            nextcloud.resolve_login_token('0' * 40, self.user)

    def nextcloud_extra(self, app_password=None):
        app_password = app_password or nextcloud.make_app_password(self.user, 'abc123')
        return {'HTTP_AUTHORIZATION': create_auth_string(self.username, app_password)}

    def test_subscriptions(self):
        url = '/index.php/apps/gpoddersync/subscription_change/create'
        self.post_json(url, {'add': ['http://example.com/a.rss'], 'remove': []},
                       **self.nextcloud_extra())

        response = self.client.get('/index.php/apps/gpoddersync/subscriptions',
                                   {'since': '0'}, **self.nextcloud_extra())
        self.assertEqual(response.status_code, 200, response.content)
        obj = json.loads(response.content.decode('utf-8'))
        self.assertEqual(obj['add'], ['http://example.com/a.rss'])
        self.assertEqual(obj['remove'], [])

    def test_episode_actions(self):
        url = '/index.php/apps/gpoddersync/episode_action/create'
        self.post_json(url, [{'podcast': 'http://example.com/a.rss',
                              'episode': 'http://example.com/a/1.mp3',
                              'action': 'PLAY', 'position': 61}],
                       **self.nextcloud_extra())

        response = self.client.get('/index.php/apps/gpoddersync/episode_action',
                                   {'since': '0'}, **self.nextcloud_extra())
        self.assertEqual(response.status_code, 200, response.content)
        actions = json.loads(response.content.decode('utf-8'))['actions']
        self.assertEqual(len(actions), 1)
        self.assertEqual(actions[0]['action'], 'play')
        self.assertEqual(actions[0]['position'], 61)

    def test_no_session_is_stored(self):
        before = Session.objects.count()

        for _ in range(5):
            response = self.client.get('/index.php/apps/gpoddersync/subscriptions',
                                       **self.nextcloud_extra())
            self.assertEqual(response.status_code, 200, response.content)
            self.assertNotIn('sessionid', response.cookies)

        self.assertEqual(Session.objects.count(), before)

    def test_wrong_app_password(self):
        response = self.client.get('/index.php/apps/gpoddersync/subscriptions',
                                   **self.nextcloud_extra('abc123:0000'))
        self.assertError(response, 401)

    def test_plain_password_is_rejected(self):
        response = self.client.get('/index.php/apps/gpoddersync/subscriptions',
                                   **self.extra)
        self.assertError(response, 401)

    def test_without_credentials(self):
        response = self.client.get('/index.php/apps/gpoddersync/subscriptions')
        self.assertError(response, 401)

    def test_unknown_endpoint(self):
        response = self.client.get('/index.php/apps/gpoddersync/settings',
                                   **self.nextcloud_extra())
        self.assertError(response, 404)
