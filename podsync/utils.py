import re
import json
import zlib
import urllib.parse
from datetime import datetime, timezone

import dateutil.parser

import logging

logger = logging.getLogger(__name__)


# RFC 3986 sub-delims plus ":" and "@" are valid inside a path segment;
# "%" is kept so that existing escapes survive a second pass
SEGMENT_SAFE = "!$&'()*+,;=:@%"

# query and fragment may additionally contain "/" and "?"
QUERY_SAFE = SEGMENT_SAFE + "/?"

RE_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

RE_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")

RE_HOSTNAME = re.compile(r"[\w.~-]+|[0-9a-f:.]+")

RE_WHITESPACE = re.compile(r"\s")


def _quote(value, safe):
    return urllib.parse.quote(RE_STRAY_PERCENT.sub("%25", value), safe=safe)


def encode_url(url):
    """Percent-encodes the path, query and fragment of an URL

    Every path segment is encoded on its own, so that the "/" separators are
    kept. Characters that are already valid, including existing escapes, are
    left as they are.

    >>> encode_url('http://example.com/my podcast/feed.xml')
    'http://example.com/my%20podcast/feed.xml'

    >>> encode_url('http://example.com/my%20podcast/feed.xml')
    'http://example.com/my%20podcast/feed.xml'

    >>> encode_url('http://en.wikipedia.org/wiki/Ä')
    'http://en.wikipedia.org/wiki/%C3%84'

    >>> encode_url('http://example.org/index.php?title=Ä b&action=rss')
    'http://example.org/index.php?title=%C3%84%20b&action=rss'

    >>> encode_url('http://user:pw@example.org:8080/100%/#part 2')
    'http://user:pw@example.org:8080/100%25/#part%202'

    Strings that can not be split into URL components are returned unchanged

    >>> encode_url('http://[::1/feed')
    'http://[::1/feed'
    """
    try:
        parts = urllib.parse.urlsplit(url)
        # raises ValueError for a non-numeric or out of range port
        parts.port
    except ValueError:
        return url

    path = "/".join(_quote(segment, SEGMENT_SAFE) for segment in parts.path.split("/"))
    query = _quote(parts.query, QUERY_SAFE)
    fragment = _quote(parts.fragment, QUERY_SAFE)

    return urllib.parse.urlunsplit(
        (parts.scheme, parts.netloc, path, query, fragment)
    )


def is_url(string):
    """Returns true if a string has the generic syntax of an URL

    A scheme and a host are required, whitespace is not allowed.

    >>> is_url('http://example.com/some-path/file.xml')
    True

    >>> is_url('http://x/feed')
    True

    >>> is_url('https://[2001:db8::1]:8443/feed')
    True

    >>> is_url('something else')
    False

    >>> is_url('/only/a/path')
    False

    >>> is_url('http:///no-host')
    False

    >>> is_url('http://exa mple.com/')
    False
    """
    if not string or RE_WHITESPACE.search(string):
        return False

    try:
        parts = urllib.parse.urlsplit(string)
        parts.port
    except ValueError:
        return False

    if not RE_SCHEME.fullmatch(parts.scheme):
        return False

    return bool(parts.hostname) and bool(RE_HOSTNAME.fullmatch(parts.hostname))


def get_timestamp(datetime_obj):
    """Returns the timestamp as an int for the given datetime object

    Naive datetime objects are taken to be in UTC.

    >>> get_timestamp(datetime(2011, 4, 7, 9, 30, 6))
    1302168606

    >>> get_timestamp(datetime(1970, 1, 1, 0, 0, 0))
    0
    """
    if datetime_obj.tzinfo is None:
        datetime_obj = datetime_obj.replace(tzinfo=timezone.utc)
    return int(datetime_obj.timestamp())


def format_timestamp(timestamp):
    """Formats an epoch timestamp as an ISO 8601 string in UTC

    >>> format_timestamp(1302168606)
    '2011-04-07T09:30:06Z'
    """
    return datetime.fromtimestamp(timestamp, timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# the range of timestamps that format_timestamp can represent
MIN_TIMESTAMP = get_timestamp(datetime.min)
MAX_TIMESTAMP = get_timestamp(datetime.max)


def parse_timestamp(value):
    """Parses a client-supplied date/time string into an epoch timestamp

    Returns None if the value can not be parsed, or if the result could not
    be formatted again by format_timestamp.

    >>> parse_timestamp('2009-12-12T09:00:00')
    1260608400

    >>> parse_timestamp('2009-12-12T10:00:00+01:00')
    1260608400

    >>> parse_timestamp('yesterday-ish') is None
    True

    >>> parse_timestamp('9999-12-31T23:59:59-05:00') is None
    True
    """
    try:
        timestamp = get_timestamp(dateutil.parser.isoparse(str(value)))
    except (ValueError, OverflowError):
        try:
            timestamp = get_timestamp(dateutil.parser.parse(str(value)))
        except (ValueError, OverflowError):
            return None

    if not MIN_TIMESTAMP <= timestamp <= MAX_TIMESTAMP:
        return None

    return timestamp


def merge_patch(target, patch):
    """Applies a JSON merge patch (RFC 7396) to target and returns the result

    >>> merge_patch({'a': 1, 'b': {'c': 2}}, {'b': {'d': 3}, 'e': 4})
    {'a': 1, 'b': {'c': 2, 'd': 3}, 'e': 4}

    >>> merge_patch({'a': 1, 'b': 2}, {'a': None})
    {'b': 2}

    >>> merge_patch({'a': 1}, ['not', 'an', 'object'])
    ['not', 'an', 'object']
    """
    if not isinstance(patch, dict):
        return patch

    result = dict(target) if isinstance(target, dict) else {}

    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)

    return result


def strip_keys(obj, keys):
    """Returns a copy of the dict without the given keys

    >>> strip_keys({'action': 'play', 'position': 12}, ('action', 'episode'))
    {'position': 12}
    """
    return {key: value for key, value in obj.items() if key not in keys}


def get_request_body(request):
    """returns the raw request body, gunzipped if it was sent compressed"""

    raw_body = request.body
    content_enc = request.META.get("HTTP_CONTENT_ENCODING")

    if content_enc == "gzip":
        raw_body = zlib.decompress(raw_body, 16 + zlib.MAX_WBITS)

    return raw_body


def parse_request_body(request):
    """returns the parsed request body, handles gzip encoding"""
    return json.loads(get_request_body(request).decode("utf-8"))
