import time

from django.db import transaction

from podsync.api.util import (parsed_body, decompressed_body, get_since,
    get_device_uid, )
from podsync.api.exceptions import BadRequest, NotImplemented_
from podsync.api.opml import Importer
from podsync.api.sanitizing import validate_url
from podsync.subscriptions.models import Subscription

import logging

logger = logging.getLogger(__name__)


def handle_subscriptions(request, route, user):
    """ Dispatches subscription requests by method and API version """

    if request.method == 'GET' and not route.v2:
        return get_subscription_list(user)

    device_uid = get_device_uid(route)

    if request.method == 'GET':
        return get_changes(user, get_since(request))

    elif request.method == 'PUT':
        urls = parse_subscription_list(request, route.format)
        set_subscriptions(user, device_uid, urls)
        return None

    elif request.method == 'POST':
        actions = parsed_body(request, route.format)
        if not isinstance(actions, dict):
            raise BadRequest('Invalid input: requires an object with "add" and "remove"')

        add = get_url_list(actions, 'add')
        rem = get_url_list(actions, 'remove')
        logger.info(
            "Subscription Upload @{username}/{device_uid}: add "
            "{num_add}, remove {num_remove}".format(
                username=user.username,
                device_uid=device_uid,
                num_add=len(add),
                num_remove=len(rem),
            )
        )
        return update_subscriptions(user, add, rem)

    raise NotImplemented_('Not implemented yet')


def get_subscription_list(user):
    """ URLs of all current subscriptions, for the legacy API """
    return Subscription.objects.for_user(user).active().urls()


def get_changes(user, since):
    """ Returns the subscriptions added and removed at or after since """
    now = int(time.time())
    changed = Subscription.objects.for_user(user).changed_since(since)

    add = changed.filter(deleted=False).urls()
    rem = changed.filter(deleted=True).urls()
    logger.info(
        "Subscription Diff for {username} since {since}: "
        "+{num_add}/-{num_remove}".format(
            username=user.username, since=since,
            num_add=len(add), num_remove=len(rem),
        )
    )

    return {'add': add, 'remove': rem, 'update_urls': [], 'timestamp': now}


def parse_subscription_list(request, fmt):
    """ Parses the whole-list upload according to the format """

    if fmt == 'opml':
        try:
            urls = Importer(decompressed_body(request)).urls
        except ValueError as e:
            raise BadRequest('Invalid OPML: {}'.format(e))

    else:
        urls = parsed_body(request, fmt)

    if not isinstance(urls, list):
        raise BadRequest('Invalid input: requires an array with one line per feed')

    return urls


def set_subscriptions(user, device_uid, urls):
    """ Adds every URL that is not yet known, leaves existing rows alone """
    now = int(time.time())
    logger.info('Subscription list upload @%s/%s: %d urls',
                user.username, device_uid, len(urls))

    with transaction.atomic():
        for url in urls:
            Subscription.objects.add_if_missing(user, validate_url(url), now)


def get_url_list(actions, key):
    urls = actions.get(key) or []

    if not isinstance(urls, list):
        raise BadRequest('Invalid input: "{}" must be an array'.format(key))

    return urls


def update_subscriptions(user, add, remove):
    """ Applies a subscription diff; the last write to an URL wins """
    now = int(time.time())

    with transaction.atomic():
        for url in add:
            Subscription.objects.add(user, validate_url(url), now)

        for url in remove:
            Subscription.objects.remove(user, validate_url(url), now)

    return {'timestamp': now, 'update_urls': []}
