import os
import sys
import doctest
import unittest
import subprocess

import podsync.utils
import podsync.api.router
import podsync.api.nextcloud
import podsync.users.models
from podsync.utils import encode_url, is_url


DOCTEST_MODULES = (
    podsync.utils,
    podsync.api.router,
    podsync.api.nextcloud,
    podsync.users.models,
)


class DocTests(unittest.TestCase):

    def test_doctests(self):
        for module in DOCTEST_MODULES:
            result = doctest.testmod(module)
            self.assertGreater(result.attempted, 0, module.__name__)
            self.assertEqual(result.failed, 0, module.__name__)


class EncodeURLTests(unittest.TestCase):

    URLS = [
        'http://example.com/feed.xml',
        'http://example.com/my podcast/feed.xml',
        'http://example.com/Ä/ö.mp3?q=ü ß&x=1#frag ment',
        'https://example.com/100%/done%2',
        'http://example.com/a%20b/c%2Fd',
        'http://example.com/path;params?a[]=1',
    ]

    def test_idempotent(self):
        for url in self.URLS:
            once = encode_url(url)
            self.assertEqual(encode_url(once), once, url)

    def test_result_is_url(self):
        for url in self.URLS:
            self.assertTrue(is_url(encode_url(url)), url)

    def test_keeps_host(self):
        self.assertEqual(encode_url('http://Example.COM:8080/a b'),
                         'http://Example.COM:8080/a%20b')

    def test_slashes_are_kept(self):
        self.assertEqual(encode_url('http://example.com/a/b/c/'),
                         'http://example.com/a/b/c/')

    def test_reserved_query_chars(self):
        self.assertEqual(encode_url('http://example.com/feed?a=1&b=c/d'),
                         'http://example.com/feed?a=1&b=c/d')

    def test_brackets_are_encoded(self):
        self.assertEqual(encode_url('http://example.com/path;params?a[]=1'),
                         'http://example.com/path;params?a%5B%5D=1')


class SetupTests(unittest.TestCase):

    def test_setup_in_fresh_interpreter(self):
        """ All installed apps can be loaded from a cold start """
        root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        env = dict(os.environ, DJANGO_SETTINGS_MODULE='podsync.settings',
                   DJANGO_CONFIGURATION='Test')
        result = subprocess.run(
            [sys.executable, '-c', 'import configurations; configurations.setup()'],
            cwd=root, env=env, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
        )
        self.assertEqual(result.returncode, 0, result.stderr.decode('utf-8', 'replace'))
