from podsync.api.exceptions import BadRequest
from podsync.utils import encode_url, is_url

import logging

logger = logging.getLogger(__name__)


def validate_url(url):
    """ Returns the encoded form of a feed or episode URL

    Raises BadRequest if the URL is not a string or does not have the syntax
    of an URL after encoding. """

    if not isinstance(url, str):
        raise BadRequest('Invalid URL: {!r}'.format(url))

    encoded = encode_url(url.strip())

    if not is_url(encoded):
        logger.debug('Rejected URL %r (encoded: %r)', url, encoded)
        raise BadRequest('Invalid URL: {}'.format(encoded))

    return encoded
