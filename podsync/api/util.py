import zlib

from podsync.utils import get_request_body, parse_request_body
from podsync.api.exceptions import BadRequest
from podsync.api.router import path_segment
from podsync.users.models import is_valid_device_uid


import logging

logger = logging.getLogger(__name__)


def parsed_body(request, fmt='json'):
    """ Returns the object parsed from the request body

    Plain text bodies are returned as a list of their non-empty lines. """

    try:
        if fmt == 'txt':
            text = get_request_body(request).decode('utf-8')
            return [line.strip() for line in text.splitlines() if line.strip()]

        return parse_request_body(request)

    except (UnicodeDecodeError, ValueError, zlib.error) as e:
        msg = 'Could not decode request body for user {}: {}'.format(
            request.user.username, request.body[:200].decode('ascii', errors='replace')
        )
        logger.warning(msg, exc_info=True)
        raise BadRequest('Invalid input: {}'.format(e))


def decompressed_body(request):
    """ Returns the raw request body, BadRequest if it can not be gunzipped """
    try:
        return get_request_body(request)
    except zlib.error as e:
        raise BadRequest('Invalid input: {}'.format(e))


def get_since(request):
    """ Returns the parsed "since" GET parameter, 0 if it is missing """
    since_ = request.GET.get('since', None)

    if not since_:
        return 0

    try:
        since = int(since_)
    except ValueError:
        raise BadRequest("'since' is not a valid timestamp")

    if since < 0:
        raise BadRequest("'since' must be a non-negative number")

    return since


def get_device_uid(route):
    """ Returns the validated device ID from the second path segment """
    device_uid = path_segment(route, 1)

    if not is_valid_device_uid(device_uid):
        raise BadRequest('Invalid device ID')

    return device_uid
