from functools import wraps

from django.http import HttpResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import csrf_exempt

from podsync.api import nextcloud
from podsync.api.auth import handle_auth
from podsync.api.basic_auth import require_session_user
from podsync.api.devices import handle_devices
from podsync.api.episodes import handle_episodes
from podsync.api.exceptions import (APIException, MethodNotAllowed, NotFound,
    NotImplemented_, Unavailable, )
from podsync.api.httpresponse import (JsonResponse, ErrorResponse,
    OpmlResponse, TextResponse, )
from podsync.api.opml import Exporter
from podsync.api.router import Resource, parse_route
from podsync.api.subscriptions import handle_subscriptions
from podsync.decorators import cors_origin

import logging
logger = logging.getLogger(__name__)


def empty_list(request, route, user):
    return []


def unavailable(request, route, user):
    raise Unavailable('Not implemented')


def not_implemented(request, route, user):
    raise NotImplemented_('Not implemented yet')


# one handler per resource; auth is handled before the session is checked
HANDLERS = {
    Resource.SUBSCRIPTIONS: handle_subscriptions,
    Resource.EPISODES: handle_episodes,
    Resource.DEVICES: handle_devices,
    Resource.UPDATES: not_implemented,
    Resource.TAG: empty_list,
    Resource.TAGS: empty_list,
    Resource.DATA: empty_list,
    Resource.TOPLIST: empty_list,
    Resource.SUGGESTIONS: empty_list,
    Resource.FAVORITES: empty_list,
    Resource.SETTINGS: unavailable,
    Resource.LISTS: unavailable,
    Resource.SYNC_DEVICES: unavailable,
}

assert set(HANDLERS) | {Resource.AUTH} == set(Resource), \
    'missing handlers for %s' % (set(Resource) - set(HANDLERS) - {Resource.AUTH})


def api_view(allowed_methods=None):
    """ Common decorators of all API views

    APIExceptions raised by the view are turned into their {code, message}
    response. """

    def decorator(fn):
        @csrf_exempt
        @never_cache
        @cors_origin()
        @wraps(fn)
        def wrapper(request, *args, **kwargs):
            logger.debug('Got a %s request on %s', request.method, request.path)
            try:
                if allowed_methods and request.method not in allowed_methods:
                    raise MethodNotAllowed(request.method)

                return fn(request, *args, **kwargs)

            except APIException as e:
                logger.debug('RETURN: %d - %s', e.code, e.message)
                return ErrorResponse(e)

        return wrapper
    return decorator


@api_view()
def dispatch(request, target):
    """ Entry point for all gpodder API paths """
    return process(request, target)


def process(request, target, user=None):
    """ Routes target, checks the session and renders the handler's result

    user is passed in when the request was already authenticated. """

    route = parse_route(target)

    if route is None:
        raise NotFound('Unknown API endpoint: {}'.format(target))

    if route.resource == Resource.AUTH:
        return handle_auth(request, route)

    if user is None:
        user = require_session_user(request)

    if route.format == 'opml' and route.resource != Resource.SUBSCRIPTIONS:
        raise NotImplemented_('output format is not implemented')

    result = HANDLERS[route.resource](request, route, user)
    return render(result, route.format)


def render(result, fmt):
    """ Serializes a handler result in the requested format """

    if isinstance(result, HttpResponse):
        return result

    if result is None:
        return HttpResponse(content_type='application/json')

    if fmt == 'opml':
        # a subscription diff is exported as its added feeds
        urls = result.get('add') if isinstance(result, dict) else result
        if isinstance(urls, list):
            return OpmlResponse(Exporter().generate(urls))

    if fmt == 'txt' and isinstance(result, list):
        return TextResponse(result)

    return JsonResponse(result)


@api_view(allowed_methods=['POST'])
def nextcloud_login(request):
    return JsonResponse(nextcloud.start_login(request))


@api_view(allowed_methods=['POST'])
def nextcloud_poll(request):
    return JsonResponse(nextcloud.poll_login(request))


@api_view()
def nextcloud_api(request, endpoint):
    user, target = nextcloud.authenticate(request, endpoint)
    return process(request, target, user=user)
