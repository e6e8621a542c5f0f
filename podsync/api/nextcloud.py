""" Maps the endpoints of NextCloud's gpoddersync app to the gpodder API

see https://github.com/thrillfall/nextcloud-gpodder

The client logs in with NextCloud's login flow v2: it asks for a token, lets
the user log in on a web page, and polls the token until that page has stored
the user and an app password under it. The app password is then sent as the
HTTP Basic password of every request under apps/gpoddersync/.
"""

import hmac
import hashlib
import secrets
from importlib import import_module

from django.conf import settings
from django.contrib import auth
from django.contrib.auth import get_user_model

from podsync.api.basic_auth import require_credentials
from podsync.api.exceptions import BadRequest, NotFound, Unauthorized

import logging
logger = logging.getLogger(__name__)


# session key under which the login page stores the app password
APP_PASSWORD_KEY = 'app_password'

# NextCloud endpoint (below apps/gpoddersync/) => native request target
ENDPOINTS = {
    'subscriptions': 'api/2/subscriptions/current/default.json',
    'subscription_change/create': 'api/2/subscriptions/current/default.json',
    'episode_action': 'api/2/episodes/current.json',
    'episode_action/create': 'api/2/episodes/current.json',
}


def get_session_store(session_key=None):
    engine = import_module(settings.SESSION_ENGINE)
    return engine.SessionStore(session_key)


def new_login_token():
    """ A random 160 bit token, hex encoded """
    return secrets.token_hex(20)


def is_valid_token(token):
    """ Tokens are non-empty and alphanumeric

    >>> is_valid_token('3f786850e387550fdab836ed7e6dc881de23001b')
    True

    >>> is_valid_token('../../etc/passwd')
    False

    >>> is_valid_token('')
    False
    """
    return bool(token) and token.isascii() and token.isalnum()


def derive_app_password(user, token):
    """ The placeholder app password for a user and a client token """
    return hashlib.sha1((user.password + token).encode('utf-8')).hexdigest()


def make_app_password(user, token):
    """ The value a client sends as HTTP Basic password """
    return '{token}:{secret}'.format(token=token,
                                     secret=derive_app_password(user, token))


def check_app_password(user, password):
    token, sep, secret = password.partition(':')
    if not sep:
        return False
    return hmac.compare_digest(derive_app_password(user, token), secret)


def start_login(request):
    """ index.php/login/v2: creates a login token """

    token = new_login_token()

    # the token is the key of the session that the login page resolves
    session = get_session_store(token)
    session.save(must_create=True)

    logger.info('Started NextCloud login flow')

    return {
        'poll': {
            'token': token,
            'endpoint': request.build_absolute_uri('/index.php/login/v2/poll'),
        },
        'login': request.build_absolute_uri('/login?token={}'.format(token)),
    }


def poll_login(request):
    """ index.php/login/v2/poll: returns the credentials once logged in """

    token = request.POST.get('token', '')
    if not is_valid_token(token):
        raise BadRequest('Invalid token')

    session = get_session_store(token)

    user = get_token_user(session)
    app_password = session.get(APP_PASSWORD_KEY)

    if user is None or not app_password:
        raise NotFound('Not logged in yet, using token: {}'.format(token))

    return {
        'server': request.build_absolute_uri('/'),
        'loginName': user.username,
        'appPassword': app_password,
    }


def get_token_user(session):
    user_id = session.get(auth.SESSION_KEY)
    if not user_id:
        return None

    User = get_user_model()
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        return None


def resolve_login_token(token, user):
    """ Stores user and a new app password under a pending login token

    This is what the interactive login page calls once the user has logged
    in. Returns the app password. """

    if not is_valid_token(token):
        raise BadRequest('Invalid token')

    session = get_session_store(token)
    if not session.exists(token):
        raise NotFound('Unknown token: {}'.format(token))

    app_password = make_app_password(user, token)
    session[auth.SESSION_KEY] = user._meta.pk.value_to_string(user)
    session[APP_PASSWORD_KEY] = app_password
    session.save()

    logger.info('Resolved NextCloud login token for user %s', user.username)
    return app_password


def authenticate(request, endpoint):
    """ apps/gpoddersync/<endpoint>: authenticates the user of the request

    Every request carries the credentials, so no session is stored for it.
    Returns the user and the native request target for the endpoint. """

    user, password = require_credentials(request)

    if not check_app_password(user, password):
        raise Unauthorized('Invalid username/password')

    logger.debug('Nextcloud compatibility: %s / %s', user.username, endpoint)

    request.user = user

    target = ENDPOINTS.get(endpoint.strip('/'))
    if target is None:
        raise NotFound('Undefined Nextcloud API endpoint')

    return user, target
