import time

from django.db import transaction

from podsync.api.util import parsed_body, get_since
from podsync.api.exceptions import BadRequest, MethodNotAllowed
from podsync.api.sanitizing import validate_url
from podsync.history.models import EpisodeAction
from podsync.subscriptions.models import Subscription
from podsync.utils import parse_timestamp, strip_keys

import logging
logger = logging.getLogger(__name__)


# keys that every uploaded action must carry; everything else goes to "data"
REQUIRED_KEYS = ('podcast', 'action', 'episode')

KNOWN_ACTIONS = [action for action, name in EpisodeAction.EPISODE_ACTIONS]


def handle_episodes(request, route, user):

    if request.method == 'GET':
        return get_episode_changes(user, get_since(request))

    if request.method != 'POST':
        raise MethodNotAllowed(request.method)

    actions = parsed_body(request, route.format)

    if not isinstance(actions, list):
        raise BadRequest('No valid array found')

    ua_string = request.META.get('HTTP_USER_AGENT', '')
    logger.info('start: user %s: %d actions from %s', user.username, len(actions), ua_string)
    now = int(time.time())
    update_episodes(user, actions, now)
    logger.info('done:  user %s: %d actions from %s', user.username, len(actions), ua_string)

    return {'timestamp': now, 'update_urls': []}


def get_episode_changes(user, since):
    history = EpisodeAction.objects.filter(user=user, changed__gte=since)\
                                   .select_related('subscription')\
                                   .order_by('changed', 'id')

    return {
        'timestamp': int(time.time()),
        'actions': [action.as_dict() for action in history],
    }


def update_episodes(user, actions, now):
    """ Stores a batch of uploaded actions, all or nothing """

    with transaction.atomic():
        for action in actions:
            parse_episode_action(user, action, now).save()


def parse_episode_action(user, action, now):
    """ Returns the unsaved EpisodeAction for an uploaded action object

    Subscribes the user to the podcast if they are not subscribed yet. """

    if not isinstance(action, dict) or \
            any(action.get(key) is None for key in REQUIRED_KEYS):
        raise BadRequest('Missing required key in action')

    podcast_url = validate_url(action['podcast'])
    episode_url = validate_url(action['episode'])

    subscription, created = Subscription.objects.add_if_missing(user, podcast_url, now)
    if created:
        logger.info('Subscribed %s to %s by episode action', user.username, podcast_url)

    changed = None
    if action.get('timestamp'):
        changed = parse_timestamp(action['timestamp'])

    action_str = str(action['action']).lower()
    if action_str not in KNOWN_ACTIONS:
        logger.debug('Unknown episode action %r from %s', action_str, user.username)

    return EpisodeAction(
        user=user,
        subscription=subscription,
        url=episode_url,
        changed=now if changed is None else changed,
        action=action_str,
        data=strip_keys(action, REQUIRED_KEYS),
    )
