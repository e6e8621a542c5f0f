""" Maps a raw request target to the API resource it addresses

The gpodder API encodes the resource, the user, an optional device and the
requested output format in the path, e.g.

    api/2/subscriptions/alice/laptop.opml
    subscriptions/alice.txt

parse_route() splits such a target into a Route; the dispatcher in views.py
picks the handler for Route.resource.
"""

import re
import enum
import collections

from podsync.api.exceptions import NotImplemented_


class Resource(enum.Enum):
    AUTH = 'auth'
    SUBSCRIPTIONS = 'subscriptions'
    DEVICES = 'devices'
    UPDATES = 'updates'
    EPISODES = 'episodes'
    FAVORITES = 'favorites'
    SETTINGS = 'settings'
    LISTS = 'lists'
    SYNC_DEVICES = 'sync-devices'
    TAG = 'tag'
    TAGS = 'tags'
    DATA = 'data'
    TOPLIST = 'toplist'
    SUGGESTIONS = 'suggestions'


# formats that can be requested, and the ones that are rendered
FORMATS = ('json', 'opml', 'txt', 'jsonp', 'xml')
IMPLEMENTED_FORMATS = ('json', 'opml', 'txt')

RE_ROUTE = re.compile(
    r'^(suggestions|subscriptions|toplist|'
    r'api/2/(auth|subscriptions|devices|updates|episodes|favorites|settings|'
    r'lists|sync-devices|tags?|data))/'
)

RE_FORMAT = re.compile(r'\.({})$'.format('|'.join(FORMATS)))


Route = collections.namedtuple('Route', 'resource path format v2')


def normalize_target(target):
    """ Strips the leading slash and the query string

    >>> normalize_target('/api/2/episodes/alice.json?since=12')
    'api/2/episodes/alice.json'
    """
    return target.lstrip('/').split('?', 1)[0]


def parse_route(target):
    """ Returns the Route for target, or None if it is not an API path

    >>> parse_route('/api/2/subscriptions/alice/laptop.opml?since=0')
    Route(resource=<Resource.SUBSCRIPTIONS: 'subscriptions'>, path='alice/laptop', format='opml', v2=True)

    >>> parse_route('subscriptions/alice.txt')
    Route(resource=<Resource.SUBSCRIPTIONS: 'subscriptions'>, path='alice', format='txt', v2=False)

    >>> parse_route('api/2/tag/news/10.json').resource
    <Resource.TAG: 'tag'>

    >>> parse_route('api/3/episodes/alice.json') is None
    True
    """
    target = normalize_target(target)

    match = RE_ROUTE.match(target)
    if not match:
        return None

    resource = Resource(match.group(2) or match.group(1))
    path = target[match.end():]

    fmt = None
    format_match = RE_FORMAT.search(target)
    if format_match:
        fmt = format_match.group(1)
        path = path[:-len(format_match.group(0))]

    if fmt not in IMPLEMENTED_FORMATS:
        raise NotImplemented_('output format is not implemented')

    return Route(resource, path, fmt, match.group(2) is not None)


def path_segment(route, index):
    """ Returns the index-th "/"-separated segment of the route's path

    >>> path_segment(Route(Resource.DEVICES, 'alice/laptop', 'json', True), 1)
    'laptop'

    >>> path_segment(Route(Resource.DEVICES, 'alice', 'json', True), 1) is None
    True
    """
    segments = route.path.split('/')
    if index < len(segments):
        return segments[index]
    return None
