import base64
import binascii

from django.conf import settings
from django.contrib import auth
from django.contrib.auth import get_user_model

from podsync.api.exceptions import BadRequest, Unauthorized

import logging
logger = logging.getLogger(__name__)


MODEL_BACKEND = 'django.contrib.auth.backends.ModelBackend'


def get_credentials(request):
    """
    Returns the (username, password) pair of the HTTP Basic authorization
    header, or None if the request does not carry one.
    """

    # the AUTHORIZATION header is used when passing auth-headers
    # from Apache to fcgi
    header = None
    for h in ('AUTHORIZATION', 'HTTP_AUTHORIZATION'):
        header = request.META.get(h, header)

    if not header:
        return None

    parts = header.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != 'basic':
        return None

    try:
        credentials = base64.b64decode(parts[1], validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise BadRequest('Could not decode credentials: {msg}'.format(msg=str(e)))

    username, sep, password = credentials.partition(':')
    if not sep or not username or not password:
        return None

    return username, password


def require_credentials(request):
    """ Returns the user named in the Basic credentials and the password

    The password is not checked, as the NextCloud endpoints verify a
    derived app password instead. """

    credentials = get_credentials(request)
    if credentials is None:
        raise Unauthorized('No username or password provided')

    username, password = credentials

    User = get_user_model()
    try:
        user = User.objects.get(username=username)
    except User.DoesNotExist:
        # Run the default password hasher once to reduce the timing
        # difference between an existing and a non-existing user (#20760).
        User().set_password(password)
        raise Unauthorized('Invalid username')

    return user, password


def require_valid_user(request):
    """ Returns the user authenticated by HTTP Basic credentials """
    user, password = require_credentials(request)

    if not user.check_password(password):
        raise Unauthorized('Invalid username/password')

    return user


def login(request, user):
    """ Binds the session to user """
    auth.login(request, user, backend=MODEL_BACKEND)
    request.user = user
    logger.debug('Logged user: %s', user.username)


def require_session_user(request):
    """ Returns the user of the session cookie

    Missing cookie: 401; a session without user, or with a user that no
    longer exists: 400.
    """

    if not request.COOKIES.get(settings.SESSION_COOKIE_NAME):
        raise Unauthorized('session cookie is required')

    user_id = request.session.get(auth.SESSION_KEY)
    if not user_id:
        raise BadRequest('Invalid sessionid cookie')

    User = get_user_model()
    try:
        user = User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise BadRequest('User does not exist')

    logger.debug('Cookie user ID: %s', user.pk)
    return user
